"""Request builder strategy shared by every gateway backend.

A builder turns ``(body, url, token, timeout, extra_fields)`` into an
:class:`OutboundRequest`. The body is serialized deterministically (sorted
keys, compact separators, UTF-8) so identical inputs always yield identical
bytes. Backends differ only in how the credential is placed in headers.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from ..base.errors import RequestBuildError
from ..base.models import OutboundRequest
from ..config.defaults import JSON_CONTENT_TYPE


def _as_json_value(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    if isinstance(body, Mapping):
        return dict(body)
    return body


def serialize_body(body: Any, extra_fields: Optional[Mapping[str, Any]] = None) -> bytes:
    """Serialize ``body`` to JSON bytes, merging ``extra_fields`` at top level.

    Extra fields overwrite keys of the same name. ``None`` body with no extra
    fields yields an empty body.

    Raises:
        RequestBuildError: the body cannot be serialized, or extra fields were
            given for a body that is not a JSON object.
    """
    if body is None and not extra_fields:
        return b""
    try:
        value = {} if body is None else _as_json_value(body)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise RequestBuildError(message=f"body is not JSON serializable: {exc}", raw=exc) from exc
    if extra_fields:
        if not isinstance(value, dict):
            raise RequestBuildError(
                message=f"cannot merge fields {sorted(extra_fields)} into a {type(value).__name__} body"
            )
        value = {**value, **dict(extra_fields)}
    try:
        text = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise RequestBuildError(message=f"body is not JSON serializable: {exc}", raw=exc) from exc
    return text.encode("utf-8")


class RequestBuilder(ABC):
    """Builds outbound chat requests using one backend's auth convention."""

    method = "POST"

    def build(
        self,
        body: Any,
        url: str,
        token: Optional[str],
        timeout: Optional[float],
        extra_fields: Optional[Mapping[str, Any]] = None,
    ) -> OutboundRequest:
        """Return a fully formed request for ``url``.

        A ``None`` token omits the authentication header.
        """
        headers: Dict[str, str] = {"Content-Type": JSON_CONTENT_TYPE}
        if token is not None:
            headers.update(self.auth_headers(token))
        return OutboundRequest(
            method=self.method,
            url=url,
            headers=headers,
            body=serialize_body(body, extra_fields),
            timeout=timeout,
        )

    @abstractmethod
    def auth_headers(self, token: str) -> Dict[str, str]:
        """Return the header(s) carrying ``token`` for this backend."""


__all__ = ["RequestBuilder", "serialize_body"]
