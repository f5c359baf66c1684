"""Structured logging helpers and the lifecycle events the relay emits."""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import httpx
import pytest

from chat_relay.base.log_support import JsonFormatter, LogContext
from chat_relay.base.logging import (
    BASE_LOGGER_NAME,
    LOG_LEVEL_ENV,
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from relay_helpers import chat_result_payload, sse_body


class _ListHandler(logging.Handler):
    """Capture formatted-free messages for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []
        self.levels: List[int] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())
        self.levels.append(record.levelno)

    def events(self) -> List[dict]:
        return [json.loads(m) for m in self.messages]


@pytest.fixture()
def captured() -> Iterator[_ListHandler]:
    base = get_logger()
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    yield handler
    base.removeHandler(handler)
    base.setLevel(previous)


def test_parse_level():
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level(" Warn ") == logging.WARNING
    assert _parse_level("nonsense", default=logging.ERROR) == logging.ERROR
    assert _parse_level(None) == logging.INFO


def test_child_loggers_live_under_base():
    assert get_logger("client").name == f"{BASE_LOGGER_NAME}.client"
    assert get_logger(f"{BASE_LOGGER_NAME}.x").name == f"{BASE_LOGGER_NAME}.x"
    base = logging.getLogger(BASE_LOGGER_NAME)
    assert base.propagate is False
    assert len(base.handlers) >= 1


def test_env_overrides_level(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    get_logger("env")
    assert logging.getLogger(BASE_LOGGER_NAME).level == logging.ERROR
    monkeypatch.delenv(LOG_LEVEL_ENV)
    configure_logger(level=logging.INFO)
    get_logger("env")
    assert logging.getLogger(BASE_LOGGER_NAME).level == logging.INFO


def test_configured_level_survives_new_loggers():
    configure_logger(level=logging.WARNING)
    try:
        get_logger("later")
        assert logging.getLogger(BASE_LOGGER_NAME).level == logging.WARNING
    finally:
        configure_logger(level=logging.INFO)


def test_log_event_drops_none_and_merges_context(captured):
    log_event(get_logger("t"), "x.happened", LogContext(backend="firebase", extra={"k": 1}), a=1, b=None)
    (payload,) = captured.events()
    assert payload == {"event": "x.happened", "backend": "firebase", "k": 1, "a": 1}


def test_normalized_log_event_keys(captured):
    normalized_log_event(get_logger("t"), "stream.end", None, phase="finalize", emitted=None, extra=5)
    (payload,) = captured.events()
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload
    assert payload["emitted"] is None
    assert "error_code" not in payload
    assert payload["extra"] == 5


def test_normalized_log_event_with_error_code(captured):
    normalized_log_event(get_logger("t"), "e", phase="start", error_code="decode", emitted=2, detail=None)
    (payload,) = captured.events()
    assert payload["phase"] == "start"
    assert payload["error_code"] == "decode"
    assert payload["emitted"] == 2
    assert "detail" not in payload


def test_json_formatter_hoists_json_message():
    record = logging.LogRecord(
        name="chat_relay.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"event": "chat.start", "backend": "supabase"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["backend"] == "supabase"
    assert payload["level"] == "INFO"
    assert "msg" not in payload


def test_json_formatter_keeps_plain_message():
    record = logging.LogRecord("chat_relay.test", logging.WARNING, __file__, 0, "plain %s", ("text",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text"


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "relay.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(get_logger("file"), "file.event", value=7)
        for h in logger.handlers:
            h.flush()
        lines = [json.loads(ln) for ln in target.read_text(encoding="utf-8").splitlines() if ln]
        assert any(line.get("event") == "file.event" and line.get("value") == 7 for line in lines)
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(target) for h in logger.handlers)


def test_chat_emits_lifecycle_events_without_credentials(make_client, query, captured):
    client, _ = make_client(lambda req: httpx.Response(200, json=chat_result_payload()))
    client.chat(query, lambda r: None)

    events = captured.events()
    assert [e["event"] for e in events] == ["chat.start", "chat.end"]
    end = events[-1]
    assert end["backend"] == "firebase"
    assert end["emitted"] is True
    assert end["status_code"] == 200
    assert "error_code" not in end
    assert all("app-check-token" not in m for m in captured.messages)


def test_stream_end_carries_error_code(make_client, query, captured):
    client, _ = make_client(lambda req: httpx.Response(200, content=sse_body(["a"], done=False) + b"data: {}\n\n"))
    client.chat_stream(query, lambda r: None)

    end = [e for e in captured.events() if e["event"] == "stream.end"][-1]
    assert end["emitted"] == 1
    assert end["frame_errors"] == 1
    assert "session_id" in end

    def _fail(request):
        raise httpx.ConnectError("down", request=request)

    client, _ = make_client(_fail)
    client.chat_stream(query, lambda r: None)
    end = [e for e in captured.events() if e["event"] == "stream.end"][-1]
    assert end["error_code"] == "transport"
    assert captured.levels[-1] == logging.DEBUG


def test_failed_chat_end_logged_at_debug(make_client, query, captured):
    client, _ = make_client(lambda req: httpx.Response(200, content=b""))
    client.chat(query, lambda r: None)

    events = captured.events()
    assert events[-1]["event"] == "chat.end"
    assert events[-1]["error_code"] == "empty_response"
    assert captured.levels == [logging.INFO, logging.DEBUG]
