"""Fixed-width little-endian primitives for the scene container."""

from __future__ import annotations

import struct

from motionkit.core.formats.scene.constants import BYTE_ORDER
from motionkit.core.formats.scene.errors import CorruptSceneError

_U32 = struct.Struct(f"{BYTE_ORDER}I")
_I32 = struct.Struct(f"{BYTE_ORDER}i")
_F32 = struct.Struct(f"{BYTE_ORDER}f")


class ByteWriter:
    """Append-only buffer of packed fields."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def u32(self, value: int) -> None:
        self._pack(_U32, value)

    def i32(self, value: int) -> None:
        self._pack(_I32, value)

    def f32(self, value: float) -> None:
        self._pack(_F32, value)

    def boolean(self, value: bool) -> None:
        self.u32(1 if value else 0)

    def string(self, value: str) -> None:
        """Write a u32 byte length followed by UTF-8 bytes."""
        raw = value.encode("utf-8")
        self.u32(len(raw))
        self._buf.extend(raw)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def _pack(self, fmt: struct.Struct, value: int | float) -> None:
        try:
            self._buf.extend(fmt.pack(value))
        except (struct.error, OverflowError) as e:
            raise ValueError(f"Value {value!r} does not fit field '{fmt.format}': {e}") from e


class ByteReader:
    """Sequential reader over an in-memory scene buffer.

    Running past the end of the buffer raises CorruptSceneError.
    """

    def __init__(self, data: bytes) -> None:
        self._view = memoryview(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._view) - self._offset

    def u32(self) -> int:
        return int(self._unpack(_U32))

    def i32(self) -> int:
        return int(self._unpack(_I32))

    def f32(self) -> float:
        return float(self._unpack(_F32))

    def boolean(self) -> bool:
        offset = self._offset
        value = self.u32()
        if value not in (0, 1):
            raise CorruptSceneError(f"Invalid boolean {value} at offset {offset}")
        return value == 1

    def string(self) -> str:
        offset = self._offset
        length = self.u32()
        if length > self.remaining:
            raise CorruptSceneError(
                f"String of {length} bytes at offset {offset} overruns the buffer"
            )
        raw = self._view[self._offset : self._offset + length]
        self._offset += length
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptSceneError(f"Invalid UTF-8 string at offset {offset}: {e}") from e

    def _unpack(self, fmt: struct.Struct) -> int | float:
        try:
            (value,) = fmt.unpack_from(self._view, self._offset)
        except struct.error as e:
            raise CorruptSceneError(
                f"Unexpected end of data at offset {self._offset} "
                f"(need {fmt.size} bytes, have {self.remaining})"
            ) from e
        self._offset += fmt.size
        return value


__all__ = ["ByteReader", "ByteWriter"]
