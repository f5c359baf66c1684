"""
Pydantic records for the chat payloads relayed through a gateway.

Purpose
-------
The relay treats the chat schema as an opaque, serializable record: it only
needs to serialize a query, flag it for streaming, and validate responses
well enough to tell a result from a structured API error. Every model keeps
unknown fields (``extra="allow"``) so newer provider fields pass through.

External dependencies: Pydantic only.

Failure modes
-------------
``model_validate_json`` raises ``pydantic.ValidationError`` when a body does
not match; the client maps that to ``DecodeError`` or, when the body parses
as :class:`APIErrorResponse`, to ``APIError``.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(extra="allow")


class ChatMessage(_Record):
    """One conversation message (``role`` plus optional text content)."""

    role: str
    content: Optional[str] = None
    name: Optional[str] = None


class ChatQuery(_Record):
    """Chat completion request body.

    ``stream`` stays unset for single-shot calls so it is omitted from the
    serialized body; :meth:`make_streamable` returns a copy flagged ``True``.
    """

    model: str = Field(..., min_length=1)
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    user: Optional[str] = None
    stream: Optional[bool] = None

    def make_streamable(self) -> "ChatQuery":
        return self.model_copy(update={"stream": True})


class Usage(_Record):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ChatChoice(_Record):
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatResult(_Record):
    """Single-shot chat completion response."""

    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    model: str
    choices: List[ChatChoice]
    usage: Optional[Usage] = None


class ChatDelta(_Record):
    role: Optional[str] = None
    content: Optional[str] = None


class ChatStreamChoice(_Record):
    index: int = 0
    delta: ChatDelta
    finish_reason: Optional[str] = None


class ChatStreamResult(_Record):
    """One streamed chunk (decoded from a single frame)."""

    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    model: str
    choices: List[ChatStreamChoice]

    @property
    def text(self) -> str:
        """Concatenated delta text across choices (empty when none)."""
        return "".join(c.delta.content or "" for c in self.choices)


class APIErrorBody(_Record):
    message: str
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[Union[str, int]] = None


class APIErrorResponse(_Record):
    """Structured error payload ``{"error": {"message", "type", ...}}``."""

    error: APIErrorBody


__all__ = [
    "ChatMessage",
    "ChatQuery",
    "Usage",
    "ChatChoice",
    "ChatResult",
    "ChatDelta",
    "ChatStreamChoice",
    "ChatStreamResult",
    "APIErrorBody",
    "APIErrorResponse",
]
