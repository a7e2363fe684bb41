"""Object and animation registry.

Keeps scene objects, and each object's animations, sorted by start frame
in descending order. Entries with equal start frames keep their relative
insertion order: a new entry is placed after existing entries that share
its start frame.

Timing fields are never written in place while an entry sits in a sorted
list. Re-timing removes the entry, updates it and inserts it again, so the
ordering invariant holds after every call.

Lookups for absent ids return ``None`` or ``False``; callers decide how to
react.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol, TypeVar

from motionkit.core.timeline.models import AnimObject, Animation
from motionkit.core.utils.math import INT32_MAX, INT32_MIN

logger = logging.getLogger(__name__)


class DuplicateIdError(ValueError):
    """Raised when inserting an entity whose id is already registered."""

    pass


class _Timed(Protocol):
    frame_start: int


T = TypeVar("T", bound=_Timed)


def insert_sorted(entries: list[T], entry: T) -> int:
    """Insert ``entry`` keeping ``entries`` sorted by descending start frame.

    The entry lands immediately before the first element that starts
    strictly earlier, or at the end if there is none.

    Returns:
        Index at which the entry was inserted.
    """
    for index, existing in enumerate(entries):
        if entry.frame_start > existing.frame_start:
            entries.insert(index, entry)
            return index
    entries.append(entry)
    return len(entries) - 1


def _check_timing(frame_start: int, duration: int) -> None:
    if not INT32_MIN <= frame_start <= INT32_MAX:
        raise ValueError(f"frame_start out of range: {frame_start}")
    if not 0 <= duration <= INT32_MAX:
        raise ValueError(f"duration must be in [0, {INT32_MAX}], got {duration}")


def is_sorted_descending(entries: list[T] | tuple[T, ...]) -> bool:
    """True if start frames never increase along ``entries``."""
    return all(a.frame_start >= b.frame_start for a, b in zip(entries, entries[1:], strict=False))


class ObjectRegistry:
    """Ordered collection of scene objects and their animations.

    Example:
        >>> registry = ObjectRegistry()
        >>> registry.insert(AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, frame_start=0))
        >>> registry.insert(AnimObject(id=1, kind=ObjectKind.TEXT_OBJECT, frame_start=20))
        >>> [obj.id for obj in registry.all()]
        [1, 0]
    """

    def __init__(self) -> None:
        self._objects: list[AnimObject] = []
        self._by_id: dict[int, AnimObject] = {}
        self._animation_owner: dict[int, int] = {}  # animation id -> object id

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def insert(self, obj: AnimObject) -> None:
        """Insert an object (and the animations it already owns).

        Raises:
            DuplicateIdError: If the object id, or any of its animation ids,
                is already registered.
            ValueError: If one of its animations back-references another object.
        """
        if obj.id in self._by_id:
            raise DuplicateIdError(f"Object id {obj.id} is already registered")

        seen: set[int] = set()
        for animation in obj.animations:
            if animation.object_id != obj.id:
                raise ValueError(
                    f"Animation {animation.id} references object {animation.object_id}, "
                    f"not its owner {obj.id}"
                )
            if animation.id in self._animation_owner or animation.id in seen:
                raise DuplicateIdError(f"Animation id {animation.id} is already registered")
            seen.add(animation.id)

        if not is_sorted_descending(obj.animations):
            ordered: list[Animation] = []
            for animation in obj.animations:
                insert_sorted(ordered, animation)
            obj.animations[:] = ordered

        index = insert_sorted(self._objects, obj)
        self._by_id[obj.id] = obj
        for animation in obj.animations:
            self._animation_owner[animation.id] = obj.id

        logger.debug(
            "Inserted object %d at index %d (frame_start=%d)", obj.id, index, obj.frame_start
        )

    def remove(self, object_id: int) -> bool:
        """Remove an object, releasing all of its animations first.

        Returns:
            True if the object was found and removed.
        """
        obj = self._by_id.get(object_id)
        if obj is None:
            return False

        for animation in obj.animations:
            if animation.object_id != object_id:
                logger.warning(
                    "Animation %d inside object %d references object %d",
                    animation.id,
                    object_id,
                    animation.object_id,
                )
            self._animation_owner.pop(animation.id, None)
        obj.animations.clear()

        self._objects.remove(obj)
        del self._by_id[object_id]
        logger.debug("Removed object %d", object_id)
        return True

    def retime(self, object_id: int, frame_start: int, duration: int) -> bool:
        """Change an object's start frame and duration, keeping the order.

        Unchanged values are a successful no-op.

        Returns:
            False if the object does not exist.

        Raises:
            ValueError: If duration is negative or a value exceeds 32 bits.
        """
        _check_timing(frame_start, duration)

        obj = self._by_id.get(object_id)
        if obj is None:
            return False
        if obj.frame_start == frame_start and obj.duration == duration:
            return True

        self._objects.remove(obj)
        obj.frame_start = frame_start
        obj.duration = duration
        insert_sorted(self._objects, obj)
        logger.debug(
            "Retimed object %d to frame_start=%d duration=%d", object_id, frame_start, duration
        )
        return True

    def set_track(self, object_id: int, track: int) -> bool:
        """Assign an object to an editor track. Order is unaffected."""
        obj = self._by_id.get(object_id)
        if obj is None:
            return False
        obj.track = track
        return True

    def get(self, object_id: int) -> AnimObject | None:
        """Look up an object by id (read access by convention)."""
        return self._by_id.get(object_id)

    def get_mutable(self, object_id: int) -> AnimObject | None:
        """Look up an object by id for in-place edits of non-timing fields."""
        return self._by_id.get(object_id)

    def all(self) -> tuple[AnimObject, ...]:
        """Objects in registry order."""
        return tuple(self._objects)

    def clear(self) -> None:
        self._objects.clear()
        self._by_id.clear()
        self._animation_owner.clear()

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------

    def add_animation(self, object_id: int, animation: Animation) -> bool:
        """Attach an animation to an object, keeping its animations sorted.

        Returns:
            False if the object does not exist.

        Raises:
            ValueError: If the animation back-references a different object.
            DuplicateIdError: If the animation id is already registered.
        """
        obj = self._by_id.get(object_id)
        if obj is None:
            return False
        if animation.object_id != object_id:
            raise ValueError(
                f"Animation {animation.id} references object {animation.object_id}, "
                f"cannot attach to {object_id}"
            )
        if animation.id in self._animation_owner:
            raise DuplicateIdError(f"Animation id {animation.id} is already registered")

        insert_sorted(obj.animations, animation)
        self._animation_owner[animation.id] = object_id
        logger.debug("Added animation %d to object %d", animation.id, object_id)
        return True

    def remove_animation(self, object_id: int, animation_id: int) -> bool:
        """Detach and release one animation of an object."""
        animation = self._find_animation(object_id, animation_id)
        if animation is None:
            return False

        self._by_id[object_id].animations.remove(animation)
        self._animation_owner.pop(animation_id, None)
        logger.debug("Removed animation %d from object %d", animation_id, object_id)
        return True

    def retime_animation(
        self, object_id: int, animation_id: int, frame_start: int, duration: int
    ) -> bool:
        """Change an animation's relative start frame and duration.

        Same contract as :meth:`retime`, scoped to the owning object.
        """
        _check_timing(frame_start, duration)

        animation = self._find_animation(object_id, animation_id)
        if animation is None:
            return False
        if animation.frame_start == frame_start and animation.duration == duration:
            return True

        animations = self._by_id[object_id].animations
        animations.remove(animation)
        animation.frame_start = frame_start
        animation.duration = duration
        insert_sorted(animations, animation)
        logger.debug(
            "Retimed animation %d of object %d to frame_start=%d duration=%d",
            animation_id,
            object_id,
            frame_start,
            duration,
        )
        return True

    def get_animation(self, animation_id: int) -> Animation | None:
        """Look up an animation by id across all objects."""
        object_id = self._animation_owner.get(animation_id)
        if object_id is None:
            return None
        return self._find_animation(object_id, animation_id)

    def get_mutable_animation(self, animation_id: int) -> Animation | None:
        return self.get_animation(animation_id)

    def get_parent(self, animation: Animation) -> AnimObject | None:
        """Resolve an animation's back-reference to its owning object."""
        return self._by_id.get(animation.object_id)

    # ------------------------------------------------------------------

    def _find_animation(self, object_id: int, animation_id: int) -> Animation | None:
        obj = self._by_id.get(object_id)
        if obj is None:
            return None
        for animation in obj.animations:
            if animation.id == animation_id:
                return animation
        return None

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[AnimObject]:
        return iter(tuple(self._objects))

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._by_id


__all__ = [
    "DuplicateIdError",
    "ObjectRegistry",
    "insert_sorted",
    "is_sorted_descending",
]
