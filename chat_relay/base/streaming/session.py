"""Streaming session: one chunked HTTP exchange turned into decoded chunks.

Lifecycle
---------
``IDLE`` → ``ACTIVE`` on :meth:`StreamingSession.start` → ``COMPLETED_SUCCESS``
or ``COMPLETED_ERROR``. ``start`` is accepted once; terminal states are final.

Delivery semantics
------------------
- Each frame completed by :class:`FrameDecoder` is decoded and handed to
  ``on_chunk`` immediately, in wire order.
- A frame that fails to decode goes to ``on_error`` (as ``APIError`` when it
  is a structured error payload, else ``DecodeError``) and the session keeps
  reading.
- ``on_complete`` fires exactly once after ``start``: with ``None`` at end of
  stream, or with the terminating error (transport failure, non-2xx status,
  or an exception raised by a consumer callback).

Threading
---------
The exchange runs on the thread calling ``start`` unless an executor is
supplied, in which case it is submitted there. The session never creates
threads itself.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from concurrent.futures import Executor
from enum import Enum
from typing import Callable, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..dto.decoding import api_error_from, decode_payload
from ..errors import APIError, DecodeError, RelayError, SessionStateError, TransportError, to_relay_error
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import OutboundRequest
from .framing import FrameDecoder

M = TypeVar("M", bound=BaseModel)


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED_SUCCESS = "completed_success"
    COMPLETED_ERROR = "completed_error"

    @property
    def terminal(self) -> bool:
        return self in (SessionState.COMPLETED_SUCCESS, SessionState.COMPLETED_ERROR)


class StreamingSession(Generic[M]):
    """Owns one in-flight streaming exchange and its delivery callbacks."""

    def __init__(
        self,
        request: OutboundRequest,
        *,
        client: httpx.Client,
        result_type: Type[M],
        on_chunk: Optional[Callable[["StreamingSession[M]", M], None]] = None,
        on_error: Optional[Callable[["StreamingSession[M]", RelayError], None]] = None,
        on_complete: Optional[Callable[["StreamingSession[M]", Optional[BaseException]], None]] = None,
        executor: Optional[Executor] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self.id = uuid.uuid4().hex
        self._request = request
        self._client = client
        self._result_type = result_type
        self.on_chunk = on_chunk
        self.on_error = on_error
        self.on_complete = on_complete
        self._executor = executor
        self._lock = threading.Lock()
        self._state = SessionState.IDLE
        self._error: Optional[BaseException] = None
        self.emitted = 0
        self.frame_errors = 0
        self.ctx = ctx or LogContext()
        self.ctx.session_id = self.id
        self._logger = get_logger("streaming")

    def __repr__(self) -> str:
        return f"StreamingSession(id={self.id!r}, state={self._state.value!r})"

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        """Terminating error once the session completed with failure."""
        return self._error

    def start(self) -> None:
        """Begin the exchange. May be called only once.

        Raises:
            SessionStateError: the session already left ``IDLE``.
        """
        with self._lock:
            if self._state is not SessionState.IDLE:
                raise SessionStateError(message=f"session {self.id} already {self._state.value}")
            self._state = SessionState.ACTIVE
        if self._executor is None:
            self._run()
            return
        try:
            self._executor.submit(self._run)
        except RuntimeError as exc:
            self._finish(exc)

    # ------------------------------------------------------------------
    def _run(self) -> None:
        t0 = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start")
        error: Optional[BaseException] = None
        try:
            self._exchange()
        except httpx.HTTPError as exc:
            error = to_relay_error(exc)
        except Exception as exc:
            error = exc
        self._finish(error, duration_ms=(time.perf_counter() - t0) * 1000.0)

    def _exchange(self) -> None:
        response = self._client.send(self._request.to_httpx(self._client), stream=True)
        try:
            if not response.is_success:
                raise self._status_error(response)
            decoder = FrameDecoder()
            for data in response.iter_bytes():
                for frame in decoder.feed(data):
                    self._deliver(frame)
                if decoder.done:
                    break
            for frame in decoder.flush():
                self._deliver(frame)
        finally:
            response.close()

    @staticmethod
    def _status_error(response: httpx.Response) -> RelayError:
        body = response.read()
        api_error = api_error_from(body) if body else None
        if api_error is not None:
            return api_error
        return TransportError(
            message=f"stream request failed with HTTP {response.status_code}",
            status_code=response.status_code,
        )

    def _deliver(self, frame: str) -> None:
        try:
            chunk = decode_payload(self._result_type, frame)
        except (APIError, DecodeError) as exc:
            self.frame_errors += 1
            if self.on_error is not None:
                self.on_error(self, exc)
            return
        self.emitted += 1
        if self.on_chunk is not None:
            self.on_chunk(self, chunk)

    def _finish(self, error: Optional[BaseException], duration_ms: float | None = None) -> None:
        with self._lock:
            if self._state.terminal:
                return
            self._state = SessionState.COMPLETED_ERROR if error is not None else SessionState.COMPLETED_SUCCESS
            self._error = error
        normalized_log_event(
            self._logger,
            "stream.end",
            self.ctx,
            phase="finalize",
            emitted=self.emitted,
            error_code=(to_relay_error(error).code.value if error is not None else None),
            frame_errors=self.frame_errors or None,
            total_duration_ms=duration_ms,
            level=logging.DEBUG if error is not None else logging.INFO,
        )
        if self.on_complete is not None:
            self.on_complete(self, error)


__all__ = ["SessionState", "StreamingSession"]
