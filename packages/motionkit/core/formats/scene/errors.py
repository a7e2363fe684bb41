"""Scene container errors.

All of these are fatal for the load that raised them: the decoder never
hands back a partially decoded scene.
"""

from __future__ import annotations


class SceneFormatError(ValueError):
    """Base class for unreadable scene data."""

    pass


class CorruptSceneError(SceneFormatError):
    """Bad magic, truncated data or structurally inconsistent records."""

    pass


class UnsupportedVersionError(SceneFormatError):
    """Container version is zero or newer than this build understands."""

    def __init__(self, version: int, supported: int) -> None:
        super().__init__(f"Unsupported scene version {version} (supported: 1..{supported})")
        self.version = version
        self.supported = supported


class UnknownKindError(SceneFormatError):
    """Record carries a kind tag with no decoder.

    Payload length depends on the kind, so the record cannot be skipped.
    """

    def __init__(self, what: str, tag: int, offset: int) -> None:
        super().__init__(f"Unknown {what} kind tag {tag} at offset {offset}")
        self.what = what
        self.tag = tag
        self.offset = offset


__all__ = [
    "CorruptSceneError",
    "SceneFormatError",
    "UnknownKindError",
    "UnsupportedVersionError",
]
