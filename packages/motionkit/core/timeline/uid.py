"""Monotonic UID allocation for scene entities."""

from __future__ import annotations


class UidAllocator:
    """Monotonically increasing id counter.

    Ids are never reused, even after the entity that held them is removed.
    After loading persisted data, ``advance`` is called with every id seen so
    that freshly allocated ids cannot collide with restored ones.

    Example:
        >>> ids = UidAllocator()
        >>> ids.allocate(), ids.allocate()
        (0, 1)
        >>> ids.advance(41)
        >>> ids.allocate()
        42
    """

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def allocate(self) -> int:
        """Return the next id and increment the counter."""
        uid = self._next
        self._next += 1
        return uid

    def advance(self, seen_id: int) -> None:
        """Move the counter past ``seen_id`` if it is not already."""
        self._next = max(self._next, seen_id + 1)

    def peek(self) -> int:
        """Next id that ``allocate`` would return."""
        return self._next

    def reset(self) -> None:
        """Restart from zero (new document)."""
        self._next = 0

    def __repr__(self) -> str:
        return f"UidAllocator(next={self._next})"


__all__ = ["UidAllocator"]
