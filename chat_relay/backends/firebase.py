"""Firebase functions gateway: App Check token in a custom header."""
from __future__ import annotations

from typing import Dict

from ..config.defaults import APPCHECK_HEADER
from .builder import RequestBuilder


class FirebaseRequestBuilder(RequestBuilder):
    """Sends the raw token verbatim in ``X-Firebase-AppCheck``."""

    def auth_headers(self, token: str) -> Dict[str, str]:
        return {APPCHECK_HEADER: token}


__all__ = ["FirebaseRequestBuilder"]
