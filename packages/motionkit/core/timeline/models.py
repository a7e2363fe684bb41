"""Scene entity models: animatable objects and the animations attached to them.

All frame values are integers. Objects carry an absolute ``frame_start``;
an animation's ``frame_start`` is relative to the object that owns it.
Numeric fields are range-checked against the 32-bit container fields so an
entity that validates can always be saved.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.utils.math import INT32_MAX, INT32_MIN, to_f32

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
NonNegInt32 = Annotated[int, Field(ge=0, le=INT32_MAX)]
Float32 = Annotated[float, AfterValidator(to_f32)]


def _check_positive(value: float) -> float:
    if not value > 0:
        raise ValueError(f"must be greater than 0 at single precision, got {value}")
    return value


PositiveFloat32 = Annotated[float, AfterValidator(to_f32), AfterValidator(_check_positive)]


class Vec2(BaseModel):
    """2D position, stored at single precision."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: Float32 = 0.0
    y: Float32 = 0.0


class TextObjectData(BaseModel):
    """Payload of a text object."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    kind: ClassVar[ObjectKind] = ObjectKind.TEXT_OBJECT

    text: str = ""
    font_path: str = ""
    font_size_px: PositiveFloat32 = 32.0


class LaTexObjectData(BaseModel):
    """Payload of a LaTeX expression object."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    kind: ClassVar[ObjectKind] = ObjectKind.LATEX_OBJECT

    latex: str = ""
    is_equation: bool = True


ObjectPayload = TextObjectData | LaTexObjectData

PAYLOAD_TYPES: dict[ObjectKind, type[TextObjectData] | type[LaTexObjectData]] = {
    ObjectKind.TEXT_OBJECT: TextObjectData,
    ObjectKind.LATEX_OBJECT: LaTexObjectData,
}


class Animation(BaseModel):
    """A timed effect applied to exactly one object.

    ``object_id`` is a back-reference only; the owning object is resolved
    through the registry when needed.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: NonNegInt32
    object_id: NonNegInt32
    kind: AnimationKind
    frame_start: Int32 = Field(default=0, description="Start frame relative to the owner")
    duration: NonNegInt32 = 0

    def absolute_window(self, parent_start: int) -> tuple[int, int]:
        """Closed activation window given the owner's start frame."""
        start = parent_start + self.frame_start
        return start, start + self.duration


class AnimObject(BaseModel):
    """An animatable scene entity and the animations it owns.

    Example:
        >>> obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, frame_start=10, duration=30)
        >>> obj.payload
        TextObjectData(text='', font_path='', font_size_px=32.0)
        >>> obj.window()
        (10, 40)
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: NonNegInt32
    kind: ObjectKind
    payload: ObjectPayload
    position: Vec2 = Field(default_factory=Vec2)
    frame_start: Int32 = 0
    duration: NonNegInt32 = 0
    track: Int32 = Field(default=0, description="Editor lane; no effect on timing")
    animations: list[Animation] = Field(default_factory=list)

    # Recomputed on every playback frame, never persisted
    is_animating: bool = Field(default=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _build_payload_for_kind(cls, data: Any) -> Any:
        """Fill in or coerce the payload according to ``kind``."""
        if not isinstance(data, dict) or "kind" not in data:
            return data
        try:
            payload_type = PAYLOAD_TYPES[ObjectKind(data["kind"])]
        except ValueError:
            # Let field validation report the bad kind
            return data
        payload = data.get("payload")
        if payload is None:
            return {**data, "payload": payload_type()}
        if isinstance(payload, dict):
            return {**data, "payload": payload_type.model_validate(payload)}
        return data

    @model_validator(mode="after")
    def _check_payload_matches_kind(self) -> AnimObject:
        if self.payload.kind != self.kind:
            raise ValueError(
                f"Payload {type(self.payload).__name__} does not match kind {self.kind.name}"
            )
        return self

    def window(self) -> tuple[int, int]:
        """Closed lifespan window of the object."""
        return self.frame_start, self.frame_start + self.duration


__all__ = [
    "PAYLOAD_TYPES",
    "AnimObject",
    "Animation",
    "LaTexObjectData",
    "ObjectPayload",
    "TextObjectData",
    "Vec2",
]
