"""Supabase edge functions gateway: standard bearer authorization."""
from __future__ import annotations

from typing import Dict

from ..config.defaults import AUTHORIZATION_HEADER, BEARER_PREFIX
from .builder import RequestBuilder


class SupabaseRequestBuilder(RequestBuilder):
    """Sends ``Authorization: Bearer <token>``.

    The optional user id is not a header concern; the client passes it as an
    extra body field.
    """

    def auth_headers(self, token: str) -> Dict[str, str]:
        return {AUTHORIZATION_HEADER: f"{BEARER_PREFIX}{token}"}


__all__ = ["SupabaseRequestBuilder"]
