"""Credential acquisition contract.

Token providers are callback based: the relay hands them a ``completion``
callable and they invoke it (now or later, on any thread) with the token
string. A provider signals failure either by raising before delivering or by
passing an exception instance to ``completion``; the exception reaches the
caller unchanged. Only the first delivery counts.

The relay never caches credentials; one is requested per call.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

ValueCallback = Callable[[Union[str, BaseException]], None]


class TokenProvider(Protocol):
    """Callable yielding a credential (or secondary identifier) asynchronously."""

    def __call__(self, completion: ValueCallback) -> None: ...


@dataclass(frozen=True)
class Credential:
    """Token plus optional secondary identifier for one request build."""

    token: Optional[str]
    secondary_id: Optional[str] = None

    def __repr__(self) -> str:
        return f"Credential(token={'***' if self.token else None}, secondary_id={self.secondary_id!r})"


def request_value(
    provider: TokenProvider,
    on_value: Callable[[str], None],
    on_error: Callable[[BaseException], None],
) -> None:
    """Ask ``provider`` for one value and route the first delivery.

    Exceptions raised by the provider before it delivers are routed to
    ``on_error``; exceptions raised after delivery come from downstream
    consumers and are re-raised.
    """
    lock = threading.Lock()
    delivered = False

    def _deliver(value: Union[str, BaseException]) -> None:
        nonlocal delivered
        with lock:
            if delivered:
                return
            delivered = True
        if isinstance(value, BaseException):
            on_error(value)
        else:
            on_value(value)

    try:
        provider(_deliver)
    except Exception as exc:
        if delivered:
            raise
        _deliver(exc)


def static_token(token: str) -> TokenProvider:
    """Return a provider that immediately delivers ``token``."""

    def _provider(completion: ValueCallback) -> None:
        completion(token)

    return _provider


__all__ = ["TokenProvider", "ValueCallback", "Credential", "request_value", "static_token"]
