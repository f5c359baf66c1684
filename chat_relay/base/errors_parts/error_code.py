"""
Normalized relay error codes (taxonomy).

Values are lowercase snake_case and are considered a stable public contract
for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CREDENTIAL = "credential"
    CONFIGURATION = "configuration"
    BUILD = "build"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    EMPTY_RESPONSE = "empty_response"
    DECODE = "decode"
    API = "api"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
