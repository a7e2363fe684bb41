"""Scene container reader.

Decoding is dispatched on the container version through ``DECODERS``.
Each decoder is frozen once released; a new version adds a new entry.
A decoder returns fresh objects and never touches a live registry, so a
failed load leaves the caller's scene untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from motionkit.core.formats.scene.binary import ByteReader
from motionkit.core.formats.scene.constants import CURRENT_VERSION, MAGIC_NUMBER
from motionkit.core.formats.scene.errors import (
    CorruptSceneError,
    UnknownKindError,
    UnsupportedVersionError,
)
from motionkit.core.formats.scene.payloads import PAYLOAD_READERS_V1
from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.timeline.models import AnimObject, Animation, Vec2
from motionkit.core.timeline.registry import is_sorted_descending

logger = logging.getLogger(__name__)

SceneDecoder = Callable[[ByteReader], list[AnimObject]]


# ----------------------------------------------------------------------
# Version 1
# ----------------------------------------------------------------------


def _read_animation_v1(reader: ByteReader) -> Animation:
    offset = reader.offset
    tag = reader.u32()
    try:
        kind = AnimationKind(tag)
    except ValueError:
        raise UnknownKindError("animation", tag, offset) from None

    object_id = reader.i32()
    frame_start = reader.i32()
    duration = reader.i32()
    animation_id = reader.i32()
    try:
        return Animation(
            id=animation_id,
            object_id=object_id,
            kind=kind,
            frame_start=frame_start,
            duration=duration,
        )
    except ValidationError as e:
        raise CorruptSceneError(f"Invalid animation record at offset {offset}: {e}") from e


def _read_object_v1(reader: ByteReader) -> AnimObject:
    offset = reader.offset
    tag = reader.u32()
    try:
        kind = ObjectKind(tag)
        read_payload = PAYLOAD_READERS_V1[kind]
    except (ValueError, KeyError):
        raise UnknownKindError("object", tag, offset) from None

    x = reader.f32()
    y = reader.f32()
    object_id = reader.i32()
    frame_start = reader.i32()
    duration = reader.i32()
    track = reader.i32()

    try:
        payload = read_payload(reader)
    except ValidationError as e:
        raise CorruptSceneError(f"Invalid payload for object at offset {offset}: {e}") from e

    animation_count = reader.u32()
    animations = [_read_animation_v1(reader) for _ in range(animation_count)]

    for animation in animations:
        if animation.object_id != object_id:
            raise CorruptSceneError(
                f"Animation {animation.id} references object {animation.object_id} "
                f"but is stored in object {object_id}"
            )
    if not is_sorted_descending(animations):
        raise CorruptSceneError(f"Animations of object {object_id} are not in order")

    try:
        return AnimObject(
            id=object_id,
            kind=kind,
            payload=payload,
            position=Vec2(x=x, y=y),
            frame_start=frame_start,
            duration=duration,
            track=track,
            animations=animations,
        )
    except ValidationError as e:
        raise CorruptSceneError(f"Invalid object record at offset {offset}: {e}") from e


def decode_v1(reader: ByteReader) -> list[AnimObject]:
    """Decode the body of a version 1 container."""
    object_count = reader.u32()
    objects: list[AnimObject] = []
    object_ids: set[int] = set()
    animation_ids: set[int] = set()

    for index in range(object_count):
        obj = _read_object_v1(reader)

        sentinel_offset = reader.offset
        sentinel = reader.u32()
        if sentinel != MAGIC_NUMBER:
            raise CorruptSceneError(
                f"Corrupted object record {index} (id {obj.id}): bad magic number "
                f"0x{sentinel:08X} at offset {sentinel_offset}"
            )

        if obj.id in object_ids:
            raise CorruptSceneError(f"Duplicate object id {obj.id}")
        object_ids.add(obj.id)
        for animation in obj.animations:
            if animation.id in animation_ids:
                raise CorruptSceneError(f"Duplicate animation id {animation.id}")
            animation_ids.add(animation.id)

        objects.append(obj)

    if not is_sorted_descending(objects):
        raise CorruptSceneError("Objects are not in order")
    return objects


# Frozen: add new versions, never edit existing entries
DECODERS: dict[int, SceneDecoder] = {
    1: decode_v1,
}


# ----------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------


def read_version(data: bytes) -> int:
    """Validate the container header and return its version.

    Raises:
        CorruptSceneError: If the leading magic number is wrong or missing.
        UnsupportedVersionError: If the version is 0 or newer than supported.
    """
    reader = ByteReader(data)
    return _read_header(reader)


def _read_header(reader: ByteReader) -> int:
    magic = reader.u32()
    if magic != MAGIC_NUMBER:
        raise CorruptSceneError(f"Invalid magic number 0x{magic:08X}; not a scene file")
    version = reader.u32()
    if not 1 <= version <= CURRENT_VERSION or version not in DECODERS:
        raise UnsupportedVersionError(version, CURRENT_VERSION)
    return version


def decode_scene(data: bytes) -> list[AnimObject]:
    """Decode a complete scene container.

    Args:
        data: Whole container contents.

    Returns:
        Objects in stored (registry) order.

    Raises:
        SceneFormatError: If the data is not a valid scene container.
    """
    reader = ByteReader(data)
    version = _read_header(reader)
    objects = DECODERS[version](reader)

    if reader.remaining:
        raise CorruptSceneError(
            f"{reader.remaining} unexpected trailing bytes at offset {reader.offset}"
        )

    logger.debug("Decoded scene v%d with %d objects", version, len(objects))
    return objects


def read_scene(path: Path | str) -> list[AnimObject]:
    """Load a scene file fully into memory, then decode it.

    Raises:
        FileNotFoundError: If the file does not exist.
        SceneFormatError: If the file is not a valid scene container.
    """
    path = Path(path)
    with path.open("rb") as f:
        data = f.read()
    return decode_scene(data)


__all__ = [
    "DECODERS",
    "SceneDecoder",
    "decode_scene",
    "decode_v1",
    "read_scene",
    "read_version",
]
