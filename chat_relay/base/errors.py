"""Unified relay error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chat_relay.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.relay_error import (
    APIError,
    ConfigurationError,
    CredentialError,
    DecodeError,
    EmptyResponseError,
    RelayError,
    RequestBuildError,
    SessionStateError,
    TransportError,
)
from .errors_parts.classification import classify_exception, to_relay_error

__all__ = [
    "ErrorCode",
    "RelayError",
    "CredentialError",
    "ConfigurationError",
    "RequestBuildError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "APIError",
    "SessionStateError",
    "classify_exception",
    "to_relay_error",
]
