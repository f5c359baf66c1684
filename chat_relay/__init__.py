"""chat_relay package

Relays chat-completion calls to a gateway-proxied LLM API (Firebase
functions or Supabase edge functions) with per-call credential acquisition,
backend-specific authentication, and incremental streaming delivery.

Quick start::

    from chat_relay import ChatMessage, ChatQuery, FirebaseBackend, GatewayClient, chat_blocking

    client = GatewayClient(FirebaseBackend(token_provider=fetch_app_check, base_url="https://host/fn"))
    result = chat_blocking(client, ChatQuery(model="gpt-4o-mini", messages=[ChatMessage(role="user", content="hi")]))
"""

from .adapters import chat_blocking, chat_future, stream_chunks
from .backends import BackendConfig, FirebaseBackend, SupabaseBackend
from .base.dto import ChatMessage, ChatQuery, ChatResult, ChatStreamResult
from .base.errors import (
    APIError,
    ConfigurationError,
    CredentialError,
    DecodeError,
    EmptyResponseError,
    ErrorCode,
    RelayError,
    RequestBuildError,
    TransportError,
)
from .base.models import Result
from .client import GatewayClient

__all__ = [
    "GatewayClient",
    "BackendConfig",
    "FirebaseBackend",
    "SupabaseBackend",
    "ChatMessage",
    "ChatQuery",
    "ChatResult",
    "ChatStreamResult",
    "Result",
    "chat_future",
    "chat_blocking",
    "stream_chunks",
    "ErrorCode",
    "RelayError",
    "CredentialError",
    "ConfigurationError",
    "RequestBuildError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "APIError",
]
