"""
Result container delivered through completion callbacks.

Holds exactly one of a success value or an error so callers can rely on
"never both, never neither".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success value or failure error of one delivery."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if (self.error is None) == (self.value is None):
            raise ValueError("Result requires exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["Result"]
