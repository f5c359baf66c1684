"""HTTP utilities package for the relay.

Exposes the shared httpx client used when callers do not inject one.
"""

from .client import get_httpx_client, close_all_clients

__all__ = ["get_httpx_client", "close_all_clients"]
