"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction and httpx exception mapping so transport
failures raised by the HTTP stack surface as :class:`TransportError` with a
stable code.
"""
from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from .error_code import ErrorCode
from .relay_error import RelayError, TransportError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. RelayError passthrough.
        2. Timeout exceptions (httpx, sync/async builtins).
        3. Any other httpx error is a transport failure.
        4. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, RelayError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.HTTPError):
        return ErrorCode.TRANSPORT
    return ErrorCode.UNKNOWN


def to_relay_error(exc: BaseException) -> RelayError:
    """Return ``exc`` unchanged when already a RelayError, else wrap it.

    httpx failures become :class:`TransportError`; anything else keeps its
    classified code on a plain :class:`RelayError`.
    """
    if isinstance(exc, RelayError):
        return exc
    code = classify_exception(exc)
    if code in (ErrorCode.TRANSPORT, ErrorCode.TIMEOUT):
        return TransportError(message=str(exc) or type(exc).__name__, code=code, raw=exc, status_code=_extract_status(exc))
    return RelayError(message=str(exc) or type(exc).__name__, code=code, raw=exc)


__all__ = [
    "classify_exception",
    "to_relay_error",
    "_extract_status",
]
