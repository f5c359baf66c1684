"""Decode helpers shared by single-shot responses and stream frames.

A payload that fails the expected schema is re-tried as the structured
:class:`APIErrorResponse`; when that parses the provider's message wins,
otherwise the original validation failure is surfaced as ``DecodeError``.
"""

from __future__ import annotations

from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..errors import APIError, DecodeError
from .chat import APIErrorResponse

M = TypeVar("M", bound=BaseModel)


def api_error_from(payload: Union[bytes, str]) -> APIError | None:
    """Return an :class:`APIError` when ``payload`` is a structured error body."""
    try:
        parsed = APIErrorResponse.model_validate_json(payload)
    except ValidationError:
        return None
    body = parsed.error
    return APIError(
        message=body.message,
        error_type=body.type,
        param=body.param,
        api_code=None if body.code is None else str(body.code),
    )


def decode_payload(model: Type[M], payload: Union[bytes, str]) -> M:
    """Validate ``payload`` as ``model``.

    Raises:
        APIError: payload is a structured provider error.
        DecodeError: payload matches neither schema; ``raw`` holds the
            original ``ValidationError``.
    """
    try:
        return model.model_validate_json(payload)
    except ValidationError as exc:
        api_error = api_error_from(payload)
        if api_error is not None:
            api_error.raw = exc
            raise api_error from exc
        data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        raise DecodeError(
            message=f"payload does not match {model.__name__}: {exc.error_count()} validation error(s)",
            raw=exc,
            payload=data,
        ) from exc


__all__ = ["api_error_from", "decode_payload"]
