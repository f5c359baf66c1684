"""Pydantic payload records and decode helpers."""

from .chat import (
    APIErrorBody,
    APIErrorResponse,
    ChatChoice,
    ChatDelta,
    ChatMessage,
    ChatQuery,
    ChatResult,
    ChatStreamChoice,
    ChatStreamResult,
    Usage,
)
from .decoding import api_error_from, decode_payload

__all__ = [
    "APIErrorBody",
    "APIErrorResponse",
    "ChatChoice",
    "ChatDelta",
    "ChatMessage",
    "ChatQuery",
    "ChatResult",
    "ChatStreamChoice",
    "ChatStreamResult",
    "Usage",
    "api_error_from",
    "decode_payload",
]
