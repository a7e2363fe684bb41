"""Kind-specific object payload codecs.

Payload layout per kind (version 1):

    TEXT_OBJECT   text: str, font_path: str, font_size_px: f32
    LATEX_OBJECT  latex: str, is_equation: bool (u32)

Strings are a u32 byte length followed by UTF-8 bytes.

The version 1 reader table is frozen. A new object kind, or a changed
payload layout, gets a new table used by a new container version.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from motionkit.core.formats.scene.binary import ByteReader, ByteWriter
from motionkit.core.timeline.enums import ObjectKind
from motionkit.core.timeline.models import LaTexObjectData, ObjectPayload, TextObjectData

PayloadWriter = Callable[[ByteWriter, Any], None]
PayloadReader = Callable[[ByteReader], ObjectPayload]


def _write_text(writer: ByteWriter, payload: TextObjectData) -> None:
    writer.string(payload.text)
    writer.string(payload.font_path)
    writer.f32(payload.font_size_px)


def _write_latex(writer: ByteWriter, payload: LaTexObjectData) -> None:
    writer.string(payload.latex)
    writer.boolean(payload.is_equation)


def _read_text_v1(reader: ByteReader) -> TextObjectData:
    text = reader.string()
    font_path = reader.string()
    font_size_px = reader.f32()
    return TextObjectData(text=text, font_path=font_path, font_size_px=font_size_px)


def _read_latex_v1(reader: ByteReader) -> LaTexObjectData:
    latex = reader.string()
    is_equation = reader.boolean()
    return LaTexObjectData(latex=latex, is_equation=is_equation)


PAYLOAD_WRITERS: dict[ObjectKind, PayloadWriter] = {
    ObjectKind.TEXT_OBJECT: _write_text,
    ObjectKind.LATEX_OBJECT: _write_latex,
}

PAYLOAD_READERS_V1: dict[ObjectKind, PayloadReader] = {
    ObjectKind.TEXT_OBJECT: _read_text_v1,
    ObjectKind.LATEX_OBJECT: _read_latex_v1,
}


def write_payload(writer: ByteWriter, kind: ObjectKind, payload: ObjectPayload) -> None:
    """Write the payload for ``kind``.

    Raises:
        KeyError: If no writer exists for the kind.
    """
    PAYLOAD_WRITERS[kind](writer, payload)


__all__ = [
    "PAYLOAD_READERS_V1",
    "PAYLOAD_WRITERS",
    "PayloadReader",
    "PayloadWriter",
    "write_payload",
]
