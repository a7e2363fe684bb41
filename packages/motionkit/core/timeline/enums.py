"""Kind enumerations for scene objects and animations.

Enum values double as the wire tags of the scene container, so existing
values must never be renumbered.
"""

from __future__ import annotations

from enum import IntEnum


class ObjectKind(IntEnum):
    """Kind of an animatable object."""

    TEXT_OBJECT = 1
    LATEX_OBJECT = 2


class AnimationKind(IntEnum):
    """Kind of a timed effect applied to an object."""

    WRITE_IN_TEXT = 1


_OBJECT_KIND_NAMES: dict[ObjectKind, str] = {
    ObjectKind.TEXT_OBJECT: "Text Object",
    ObjectKind.LATEX_OBJECT: "LaTex Object",
}

_ANIMATION_KIND_NAMES: dict[AnimationKind, str] = {
    AnimationKind.WRITE_IN_TEXT: "Write In Text",
}


def object_kind_name(kind: ObjectKind) -> str:
    """Human-readable name of an object kind (e.g. for editor lists)."""
    return _OBJECT_KIND_NAMES[ObjectKind(kind)]


def animation_kind_name(kind: AnimationKind) -> str:
    """Human-readable name of an animation kind."""
    return _ANIMATION_KIND_NAMES[AnimationKind(kind)]


__all__ = [
    "AnimationKind",
    "ObjectKind",
    "animation_kind_name",
    "object_kind_name",
]
