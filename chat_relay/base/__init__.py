"""
Relay base package.

Provider-agnostic building blocks used by the gateway client:
- Errors: normalized taxonomy and classification
- Models (DTOs): outbound requests, results and pydantic chat payloads
- Credentials: callback-based token acquisition contract
- Streaming: framing, session state machine and session registry
- Logging: structured JSON events
"""

from .credentials import Credential, TokenProvider, request_value, static_token
from .errors import (
    APIError,
    ConfigurationError,
    CredentialError,
    DecodeError,
    EmptyResponseError,
    ErrorCode,
    RelayError,
    RequestBuildError,
    SessionStateError,
    TransportError,
    classify_exception,
)
from .models import OutboundRequest, Result
from .streaming import FrameDecoder, SessionRegistry, SessionState, StreamingSession

__all__ = [
    # Credentials
    "Credential",
    "TokenProvider",
    "request_value",
    "static_token",
    # Errors
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
    # Models
    "OutboundRequest",
    "Result",
    # Streaming
    "FrameDecoder",
    "SessionRegistry",
    "SessionState",
    "StreamingSession",
]
