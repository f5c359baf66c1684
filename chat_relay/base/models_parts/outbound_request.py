"""
OutboundRequest DTO describing one fully built HTTP request.

Builders produce it; the client and streaming session turn it into an
``httpx.Request``. It is never retained beyond the call that issued it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import httpx


@dataclass(frozen=True)
class OutboundRequest:
    """Method, target URL, headers, serialized body and timeout of a request.

    Attributes:
        method: HTTP method (``"POST"`` for chat calls).
        url: Absolute target URL.
        headers: Header mapping including content type and authentication.
        body: Serialized JSON body bytes (may be empty).
        timeout: Request timeout in seconds.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    timeout: float | None = None

    def to_httpx(self, client: httpx.Client) -> httpx.Request:
        """Return an ``httpx.Request`` built on ``client`` for sending."""
        return client.build_request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.body or None,
            timeout=self.timeout,
        )


__all__ = ["OutboundRequest"]
