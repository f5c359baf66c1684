"""Incremental framing of a chunked chat stream body.

Accepts arbitrary byte chunks and yields complete frames (one decodable JSON
payload each) as soon as their boundary has been seen. Two wire styles are
understood and may be mixed:

* Server-sent events: ``data:`` lines accumulate into one event that is
  dispatched on the following blank line. Any other ``field:`` line
  (``event``, ``id``, ``retry`` or unknown names) and ``:`` comments are
  ignored.
* Newline-delimited JSON: any other non-empty line is a frame on its own.

The ``[DONE]`` marker ends the data; anything after it is discarded.
"""
from __future__ import annotations

import re
from typing import Iterator, List

from ...config.defaults import DONE_SENTINEL

_FIELD_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


class FrameDecoder:
    """Stateful byte-to-frame splitter for one stream.

    Only the bytes of an unfinished line (and the data lines of an
    undispatched event) are buffered.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._event_lines: List[str] = []
        self._done = False

    @property
    def done(self) -> bool:
        """Whether the ``[DONE]`` marker has been seen."""
        return self._done

    def feed(self, data: bytes) -> Iterator[str]:
        """Consume ``data`` and yield every frame it completes, in order."""
        if self._done or not data:
            return
        self._buffer.extend(data)
        while not self._done:
            idx = self._buffer.find(b"\n")
            if idx < 0:
                break
            raw = bytes(self._buffer[:idx])
            del self._buffer[: idx + 1]
            yield from self._handle_line(raw.decode("utf-8", errors="replace").rstrip("\r"))

    def flush(self) -> Iterator[str]:
        """Yield any frame still buffered once the body has ended."""
        if self._done:
            return
        if self._buffer:
            raw = bytes(self._buffer)
            self._buffer.clear()
            yield from self._handle_line(raw.decode("utf-8", errors="replace").rstrip("\r"))
        if not self._done:
            yield from self._dispatch_event()

    def _handle_line(self, line: str) -> Iterator[str]:
        if not line.strip():
            yield from self._dispatch_event()
            return
        if line.startswith(":"):
            return
        field, sep, value = line.partition(":")
        if sep and field == "data":
            self._event_lines.append(value[1:] if value.startswith(" ") else value)
            return
        if sep and _FIELD_NAME.fullmatch(field):
            return
        # Bare JSON line: close any open event first to preserve order.
        yield from self._dispatch_event()
        if not self._done:
            yield from self._emit(line.strip())

    def _dispatch_event(self) -> Iterator[str]:
        if not self._event_lines:
            return
        payload = "\n".join(self._event_lines)
        self._event_lines = []
        yield from self._emit(payload)

    def _emit(self, payload: str) -> Iterator[str]:
        if payload.strip() == DONE_SENTINEL:
            self._done = True
            self._buffer.clear()
            self._event_lines = []
            return
        if payload.strip():
            yield payload


__all__ = ["FrameDecoder"]
