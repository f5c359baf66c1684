"""Payload builders and transport helpers for relay tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterator, List

import httpx

BASE_URL = "https://gateway.example.com/api"
CHAT_URL = BASE_URL + "/chat"

Handler = Callable[[httpx.Request], httpx.Response]


def chat_result_payload(content: str = "Hello!") -> Dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    }


def stream_chunk_payload(content: str, idx: int = 0) -> Dict[str, Any]:
    return {
        "id": f"chatcmpl-s{idx}",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "delta": {"content": content}, "finish_reason": None}],
    }


def sse_body(contents: List[str], *, done: bool = True) -> bytes:
    lines = [f"data: {json.dumps(stream_chunk_payload(c, i))}\n\n" for i, c in enumerate(contents)]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def split_every(data: bytes, size: int) -> Iterator[bytes]:
    for i in range(0, len(data), size):
        yield data[i : i + size]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)
