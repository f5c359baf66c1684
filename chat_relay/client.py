"""Gateway client: the public entry point of the relay.

Purpose:
    Relay chat-completion calls to one gateway backend. Every call runs the
    same sequential pipeline: acquire the token → (backend permitting)
    acquire the secondary identifier → build the request with the backend's
    builder → execute → decode.

External dependencies:
    - ``httpx`` for the transport (an injected client, or the shared one
      from :func:`get_httpx_client`).
    - ``pydantic`` payload records from :mod:`chat_relay.base.dto`.

Failure semantics:
    - Nothing is retried, cached or swallowed. Each call delivers exactly one
      outcome through its completion callback.
    - Token provider failures reach the caller unchanged.
    - A malformed base URL is rejected at construction with
      ``ConfigurationError``.

Threading:
    Callbacks run on whichever thread the token provider completes on, or on
    the injected executor for the HTTP exchange. The client owns no threads.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Optional

import httpx

from .backends.config import BackendConfig
from .base.credentials import Credential, request_value
from .base.dto import ChatQuery, ChatResult, ChatStreamResult, decode_payload
from .base.errors import EmptyResponseError, RelayError, to_relay_error
from .base.http import get_httpx_client
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import OutboundRequest, Result
from .base.streaming import SessionRegistry, StreamingSession
from .config.defaults import CHAT_PATH

ChatCompletion = Callable[[Result[ChatResult]], None]
StreamResultCallback = Callable[[Result[ChatStreamResult]], None]
StreamCompletion = Callable[[Optional[BaseException]], None]


class GatewayClient:
    """Relays chat queries through a single configured gateway backend."""

    def __init__(
        self,
        backend: BackendConfig,
        *,
        http_client: Optional[httpx.Client] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """Bind the client to ``backend``.

        Parameters:
            backend: Backend configuration variant; immutable.
            http_client: Optional ``httpx.Client``; the shared client is used
                when omitted.
            executor: Optional host-provided executor that runs HTTP
                exchanges. Without one, exchanges run on the thread that
                delivered the credential.

        Raises:
            ConfigurationError: ``backend.base_url`` does not form a valid URL.
        """
        self._backend = backend
        self._url = backend.build_url(CHAT_PATH)
        self._builder = backend.request_builder()
        self._http = http_client if http_client is not None else get_httpx_client("chat")
        self._executor = executor
        self._sessions: SessionRegistry[StreamingSession[ChatStreamResult]] = SessionRegistry()
        self._logger = get_logger("client")

    @property
    def backend(self) -> BackendConfig:
        return self._backend

    @property
    def executor(self) -> Optional[Executor]:
        return self._executor

    @property
    def active_sessions(self) -> int:
        """Number of streaming sessions currently in flight."""
        return len(self._sessions)

    # ------------------------------------------------------------------ chat
    def chat(self, query: ChatQuery, completion: ChatCompletion) -> None:
        """Send ``query`` once and deliver a single ``Result`` to ``completion``."""

        def _fail(error: BaseException) -> None:
            completion(Result.failure(error))

        def _with_request(request: OutboundRequest) -> None:
            self._dispatch(lambda: completion(self._perform(request)), _fail)

        self._build_request(query, _with_request, _fail)

    def _perform(self, request: OutboundRequest) -> Result[ChatResult]:
        ctx = self._log_context()
        normalized_log_event(self._logger, "chat.start", ctx, phase="start")
        t0 = time.perf_counter()
        try:
            response = self._http.send(request.to_httpx(self._http))
        except Exception as exc:  # closed client, transport failure
            error = to_relay_error(exc)
            self._log_chat_end(ctx, t0, error)
            return Result.failure(error)
        data = response.content
        if not data:
            error = EmptyResponseError(message=f"empty body (HTTP {response.status_code})")
            self._log_chat_end(ctx, t0, error)
            return Result.failure(error)
        try:
            result = decode_payload(ChatResult, data)
        except RelayError as exc:
            self._log_chat_end(ctx, t0, exc, status_code=response.status_code)
            return Result.failure(exc)
        self._log_chat_end(ctx, t0, None, status_code=response.status_code)
        return Result.success(result)

    def _log_chat_end(self, ctx: LogContext, t0: float, error: Optional[RelayError], **fields: Any) -> None:
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=error is None,
            error_code=(error.code.value if error is not None else None),
            level=logging.DEBUG if error is not None else logging.INFO,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            **fields,
        )

    # ---------------------------------------------------------------- stream
    def chat_stream(
        self,
        query: ChatQuery,
        on_result: StreamResultCallback,
        completion: Optional[StreamCompletion] = None,
    ) -> None:
        """Stream ``query``; deliver each chunk, then one terminal signal.

        Parameters:
            query: Chat query; sent with ``stream: true``.
            on_result: Receives ``Result.success(chunk)`` per decoded frame in
                wire order, or ``Result.failure(err)`` for a malformed frame.
            completion: Called exactly once with ``None`` on clean end of
                stream or with the terminating error.
        """

        def _complete(error: Optional[BaseException]) -> None:
            if completion is not None:
                completion(error)

        def _with_request(request: OutboundRequest) -> None:
            self._open_session(request, on_result, _complete)

        self._build_request(query.make_streamable(), _with_request, _complete)

    def _open_session(
        self,
        request: OutboundRequest,
        on_result: StreamResultCallback,
        complete: Callable[[Optional[BaseException]], None],
    ) -> None:
        def _on_complete(session: StreamingSession[ChatStreamResult], error: Optional[BaseException]) -> None:
            self._sessions.remove_all(session)
            complete(error)

        session: StreamingSession[ChatStreamResult] = StreamingSession(
            request,
            client=self._http,
            result_type=ChatStreamResult,
            on_chunk=lambda _s, chunk: on_result(Result.success(chunk)),
            on_error=lambda _s, err: on_result(Result.failure(err)),
            on_complete=_on_complete,
            executor=self._executor,
            ctx=self._log_context(),
        )
        self._sessions.add(session)
        session.start()

    # -------------------------------------------------------------- pipeline
    def _build_request(
        self,
        body: ChatQuery,
        on_request: Callable[[OutboundRequest], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        """Acquire credentials, then build the request for ``body``."""

        def _build(credential: Credential) -> None:
            extra: Dict[str, Any] = {}
            field = self._backend.secondary_field
            if field and credential.secondary_id is not None:
                extra[field] = credential.secondary_id
            try:
                request = self._builder.build(
                    body,
                    self._url,
                    credential.token,
                    self._backend.timeout_seconds,
                    extra_fields=extra or None,
                )
            except RelayError as exc:
                on_error(exc)
                return
            on_request(request)

        self._acquire_credential(_build, on_error)

    def _acquire_credential(
        self,
        on_credential: Callable[[Credential], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        secondary = self._backend.secondary_provider

        def _with_token(token: str) -> None:
            if secondary is None:
                on_credential(Credential(token=token))
                return
            request_value(
                secondary,
                lambda secondary_id: on_credential(Credential(token=token, secondary_id=secondary_id)),
                on_error,
            )

        request_value(self._backend.token_provider, _with_token, on_error)

    def _dispatch(self, work: Callable[[], None], on_error: Callable[[BaseException], None]) -> None:
        if self._executor is None:
            work()
            return
        try:
            self._executor.submit(work)
        except RuntimeError as exc:  # executor already shut down
            on_error(exc)

    def _log_context(self) -> LogContext:
        return LogContext(backend=self._backend.name, url=self._url)


__all__ = ["GatewayClient"]
