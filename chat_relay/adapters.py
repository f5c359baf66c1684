"""Convenience adapters over the callback API of :class:`GatewayClient`.

These re-express the same contract in other calling conventions:

- :func:`chat_future` / :func:`chat_blocking` for single-shot calls.
- :func:`stream_chunks` as a lazy iterator over streamed chunks.

No extra behavior is added: one call, one outcome, no retries.
"""
from __future__ import annotations

import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .base.dto import ChatQuery, ChatResult, ChatStreamResult
from .base.models import Result
from .client import GatewayClient


def chat_future(client: GatewayClient, query: ChatQuery) -> "Future[ChatResult]":
    """Start a single-shot call and return a future for its outcome.

    The future is marked running immediately; it cannot be cancelled.
    """
    future: "Future[ChatResult]" = Future()
    future.set_running_or_notify_cancel()

    def _done(result: Result[ChatResult]) -> None:
        if result.ok:
            future.set_result(result.value)  # type: ignore[arg-type]
        else:
            future.set_exception(result.error)  # type: ignore[arg-type]

    client.chat(query, _done)
    return future


def chat_blocking(client: GatewayClient, query: ChatQuery, timeout: Optional[float] = None) -> ChatResult:
    """Run a single-shot call and return its result, raising its error."""
    return chat_future(client, query).result(timeout=timeout)


@dataclass(frozen=True)
class _StreamEnd:
    error: Optional[BaseException]


def stream_chunks(client: GatewayClient, query: ChatQuery) -> Iterator[ChatStreamResult]:
    """Iterate over streamed chunks in wire order, as they arrive.

    The request starts on the first ``next()``. When the client has no
    executor the exchange runs on a daemon thread owned by the iterator.
    A malformed frame is raised and ends iteration; a terminating error is
    raised after every chunk that preceded it. Abandoning the iterator does
    not stop the exchange.
    """
    items: "queue.Queue[Union[Result[ChatStreamResult], _StreamEnd]]" = queue.Queue()

    def _produce() -> None:
        try:
            client.chat_stream(query, items.put, lambda error: items.put(_StreamEnd(error)))
        except Exception as exc:
            items.put(_StreamEnd(exc))

    if client.executor is None:
        threading.Thread(target=_produce, name="chat-relay-stream", daemon=True).start()
    else:
        _produce()
    while True:
        item = items.get()
        if isinstance(item, _StreamEnd):
            if item.error is not None:
                raise item.error
            return
        yield item.unwrap()


__all__ = ["chat_future", "chat_blocking", "stream_chunks"]
