"""Scene container writer.

Container layout (little-endian, see ``constants``):

    MAGIC u32 | VERSION u32 | objectCount u32 | objectCount x ObjectRecord

    ObjectRecord:
        kindTag u32 | x f32 | y f32 | id i32 | frameStart i32 | duration i32 |
        track i32 | payload | animationCount u32 |
        animationCount x AnimationRecord | MAGIC u32

    AnimationRecord:
        kindTag u32 | objectId i32 | frameStart i32 | duration i32 | id i32

Objects are written in registry order, so a reader can restore them
without sorting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from motionkit.core.formats.scene.binary import ByteWriter
from motionkit.core.formats.scene.constants import CURRENT_VERSION, MAGIC_NUMBER
from motionkit.core.formats.scene.payloads import write_payload
from motionkit.core.timeline.models import AnimObject, Animation
from motionkit.core.timeline.registry import is_sorted_descending

logger = logging.getLogger(__name__)


def _write_animation(writer: ByteWriter, animation: Animation) -> None:
    writer.u32(int(animation.kind))
    writer.i32(animation.object_id)
    writer.i32(animation.frame_start)
    writer.i32(animation.duration)
    writer.i32(animation.id)


def _write_object(writer: ByteWriter, obj: AnimObject) -> None:
    writer.u32(int(obj.kind))
    writer.f32(obj.position.x)
    writer.f32(obj.position.y)
    writer.i32(obj.id)
    writer.i32(obj.frame_start)
    writer.i32(obj.duration)
    writer.i32(obj.track)

    write_payload(writer, obj.kind, obj.payload)

    writer.u32(len(obj.animations))
    for animation in obj.animations:
        _write_animation(writer, animation)


def _check_records(objects: tuple[AnimObject, ...]) -> None:
    """Reject anything the reader would refuse to load back."""
    if not is_sorted_descending(objects):
        raise ValueError("Objects must be in registry order (descending frame_start)")

    object_ids: set[int] = set()
    animation_ids: set[int] = set()
    for obj in objects:
        if obj.id in object_ids:
            raise ValueError(f"Duplicate object id {obj.id}")
        object_ids.add(obj.id)

        if not is_sorted_descending(obj.animations):
            raise ValueError(
                f"Animations of object {obj.id} must be in registry order "
                "(descending frame_start)"
            )
        for animation in obj.animations:
            if animation.object_id != obj.id:
                raise ValueError(
                    f"Animation {animation.id} references object {animation.object_id} "
                    f"but is owned by object {obj.id}"
                )
            if animation.id in animation_ids:
                raise ValueError(f"Duplicate animation id {animation.id}")
            animation_ids.add(animation.id)


def encode_scene(objects: Iterable[AnimObject]) -> bytes:
    """Encode objects into a scene container.

    Args:
        objects: Objects in registry order (descending start frame).

    Returns:
        Complete container bytes.

    Raises:
        ValueError: If objects or their animations are not in registry
            order, an animation's back-reference differs from its owner,
            or an id repeats.
    """
    objects = tuple(objects)
    _check_records(objects)

    writer = ByteWriter()
    writer.u32(MAGIC_NUMBER)
    writer.u32(CURRENT_VERSION)

    writer.u32(len(objects))
    for obj in objects:
        _write_object(writer, obj)
        writer.u32(MAGIC_NUMBER)

    return writer.getvalue()


def write_scene(path: Path | str, objects: Iterable[AnimObject]) -> int:
    """Encode objects and write them to ``path`` in one pass.

    The container is built in memory first, so nothing is written when
    encoding fails.

    Returns:
        Number of bytes written.
    """
    path = Path(path)
    data = encode_scene(objects)
    with path.open("wb") as f:
        f.write(data)
    logger.debug("Wrote scene %s (%d bytes)", path, len(data))
    return len(data)


__all__ = ["encode_scene", "write_scene"]
