"""Shared HTTP client for the relay.

Purpose:
    Provide a thread-safe cache of reusable ``httpx.Client`` instances so a
    ``GatewayClient`` built without an explicit client does not allocate a new
    connection stack per call.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Cached clients carry no default timeout of their own; every
      ``OutboundRequest`` sets its timeout explicitly from the backend
      configuration.

Lifecycle & cleanup:
    - Clients are cached by ``purpose`` (e.g. "chat" vs "stream").
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str = "chat") -> httpx.Client:
    """Return a cached ``httpx.Client`` for ``purpose``.

    Thread-safety:
        Safe for concurrent use; creation is guarded by a re-entrant lock.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=None)
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all cached HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
