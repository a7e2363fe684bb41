"""Versioned binary scene container."""

from motionkit.core.formats.scene.constants import BYTE_ORDER, CURRENT_VERSION, MAGIC_NUMBER
from motionkit.core.formats.scene.errors import (
    CorruptSceneError,
    SceneFormatError,
    UnknownKindError,
    UnsupportedVersionError,
)
from motionkit.core.formats.scene.reader import (
    DECODERS,
    decode_scene,
    read_scene,
    read_version,
)
from motionkit.core.formats.scene.writer import encode_scene, write_scene

__all__ = [
    # Constants
    "BYTE_ORDER",
    "CURRENT_VERSION",
    "MAGIC_NUMBER",
    # Errors
    "CorruptSceneError",
    "SceneFormatError",
    "UnknownKindError",
    "UnsupportedVersionError",
    # Codec
    "DECODERS",
    "decode_scene",
    "encode_scene",
    "read_scene",
    "read_version",
    "write_scene",
]
