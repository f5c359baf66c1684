"""Registry keeping in-flight streaming sessions referenced until they end.

Every mutation and read goes through one ``threading.Lock`` so sessions
started and completed on different threads never lose or tear entries.
"""
from __future__ import annotations

import threading
from typing import Generic, List, TypeVar

T = TypeVar("T")


class SessionRegistry(Generic[T]):
    """Thread-safe identity-keyed collection of live sessions."""

    def __init__(self) -> None:
        self._items: List[T] = []
        self._lock = threading.Lock()

    def add(self, session: T) -> None:
        """Append ``session`` unconditionally."""
        with self._lock:
            self._items.append(session)

    def remove_all(self, session: T) -> int:
        """Remove every entry that is ``session``; return how many were removed.

        Removing an absent session is a no-op.
        """
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item is not session]
            return before - len(self._items)

    def snapshot(self) -> List[T]:
        """Return a copy of the current entries."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, session: object) -> bool:
        with self._lock:
            return any(item is session for item in self._items)


__all__ = ["SessionRegistry"]
