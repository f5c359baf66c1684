"""Errors parts package public surface.

Prefer importing from `chat_relay.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .relay_error import RelayError
from .classification import classify_exception

__all__ = ["ErrorCode", "RelayError", "classify_exception"]
