"""Scene timeline: entity models, UID allocation and the sorted registry.

Playback lives in ``motionkit.core.timeline.playback`` and is imported
from there directly.
"""

from motionkit.core.timeline.enums import (
    AnimationKind,
    ObjectKind,
    animation_kind_name,
    object_kind_name,
)
from motionkit.core.timeline.models import (
    PAYLOAD_TYPES,
    AnimObject,
    Animation,
    LaTexObjectData,
    ObjectPayload,
    TextObjectData,
    Vec2,
)
from motionkit.core.timeline.registry import (
    DuplicateIdError,
    ObjectRegistry,
    insert_sorted,
    is_sorted_descending,
)
from motionkit.core.timeline.uid import UidAllocator

__all__ = [
    # Kinds
    "AnimationKind",
    "ObjectKind",
    "animation_kind_name",
    "object_kind_name",
    # Models
    "PAYLOAD_TYPES",
    "AnimObject",
    "Animation",
    "LaTexObjectData",
    "ObjectPayload",
    "TextObjectData",
    "Vec2",
    # Registry
    "DuplicateIdError",
    "ObjectRegistry",
    "insert_sorted",
    "is_sorted_descending",
    "UidAllocator",
]
