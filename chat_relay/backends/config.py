"""Gateway backend configuration variants.

Each backend is a frozen dataclass carrying its token provider, base URL and
timeout, and knows which :class:`RequestBuilder` strategy it uses. A
``GatewayClient`` is built around exactly one backend and never re-selects
it per call.

Supported backends
------------------
- :class:`FirebaseBackend`: Firebase functions fronted by App Check.
- :class:`SupabaseBackend`: Supabase edge functions with bearer auth and an
  optional ``user_id`` body field fetched from a second provider.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

import httpx

from ..base.credentials import TokenProvider
from ..base.errors import ConfigurationError
from ..config.defaults import DEFAULT_TIMEOUT_SECONDS, USER_ID_FIELD
from .builder import RequestBuilder
from .firebase import FirebaseRequestBuilder
from .supabase import SupabaseRequestBuilder


@dataclass(frozen=True)
class BackendConfig(ABC):
    """Common backend fields.

    Attributes:
        token_provider: Callback-style provider invoked once per call.
        base_url: Gateway base URL; the chat path is appended verbatim.
        timeout_seconds: Per-request timeout.
    """

    name: ClassVar[str] = "backend"

    token_provider: TokenProvider
    base_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @abstractmethod
    def request_builder(self) -> RequestBuilder:
        """Return the request builder strategy for this backend."""

    @property
    def secondary_provider(self) -> Optional[TokenProvider]:
        """Provider of the secondary identifier, when the backend uses one."""
        return None

    secondary_field: ClassVar[Optional[str]] = None

    def build_url(self, path: str) -> str:
        """Return ``base_url + path`` after checking it is an absolute http(s) URL.

        Raises:
            ConfigurationError: the resulting URL is malformed.
        """
        candidate = f"{self.base_url}{path}"
        try:
            url = httpx.URL(candidate)
        except (httpx.InvalidURL, TypeError) as exc:
            raise ConfigurationError(message=f"invalid {self.name} base URL {self.base_url!r}", raw=exc) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(message=f"invalid {self.name} base URL {self.base_url!r}")
        return candidate


@dataclass(frozen=True)
class FirebaseBackend(BackendConfig):
    name: ClassVar[str] = "firebase"

    def request_builder(self) -> RequestBuilder:
        return FirebaseRequestBuilder()


@dataclass(frozen=True)
class SupabaseBackend(BackendConfig):
    """Supabase backend.

    Attributes:
        user_id_provider: Optional provider whose value is merged into the
            request body as ``user_id``. Fetched after the token.
    """

    name: ClassVar[str] = "supabase"
    secondary_field: ClassVar[Optional[str]] = USER_ID_FIELD

    user_id_provider: Optional[TokenProvider] = None

    def request_builder(self) -> RequestBuilder:
        return SupabaseRequestBuilder()

    @property
    def secondary_provider(self) -> Optional[TokenProvider]:
        return self.user_id_provider


__all__ = ["BackendConfig", "FirebaseBackend", "SupabaseBackend"]
