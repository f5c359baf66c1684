"""
Structured relay error exception types.

Every failure surfaced by the relay is a :class:`RelayError` carrying a
normalized :class:`ErrorCode`, a human-readable message and, when available,
the original exception in ``raw``. Subclasses pin the code so callers can
branch on either the type or the code.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class RelayError(Exception):
    """Represents a structured relay error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


@dataclass(eq=False)
class CredentialError(RelayError):
    """Token provider could not produce a credential."""

    code: ErrorCode = ErrorCode.CREDENTIAL


@dataclass(eq=False)
class ConfigurationError(RelayError):
    """Backend configuration is unusable (e.g. malformed base URL)."""

    code: ErrorCode = ErrorCode.CONFIGURATION


@dataclass(eq=False)
class RequestBuildError(RelayError):
    """The outbound request body could not be serialized."""

    code: ErrorCode = ErrorCode.BUILD


@dataclass(eq=False)
class TransportError(RelayError):
    """Network-level failure, or a non-2xx status on a streaming exchange."""

    code: ErrorCode = ErrorCode.TRANSPORT
    status_code: Optional[int] = None


@dataclass(eq=False)
class EmptyResponseError(RelayError):
    """The backend answered with a zero-length body."""

    message: str = "empty response body"
    code: ErrorCode = ErrorCode.EMPTY_RESPONSE


@dataclass(eq=False)
class DecodeError(RelayError):
    """A body or stream frame did not match the expected schema."""

    code: ErrorCode = ErrorCode.DECODE
    payload: Optional[bytes] = None


@dataclass(eq=False)
class APIError(RelayError):
    """Structured error payload returned by the backend itself.

    Attributes:
        error_type: Provider supplied ``error.type``.
        param: Provider supplied ``error.param``, if any.
        api_code: Provider supplied ``error.code``, if any.
    """

    code: ErrorCode = ErrorCode.API
    error_type: Optional[str] = None
    param: Optional[str] = None
    api_code: Optional[str] = None


@dataclass(eq=False)
class SessionStateError(RelayError):
    """Illegal streaming session transition (e.g. ``start`` called twice)."""

    code: ErrorCode = ErrorCode.INTERNAL


__all__ = [
    "RelayError",
    "CredentialError",
    "ConfigurationError",
    "RequestBuildError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "APIError",
    "SessionStateError",
]
