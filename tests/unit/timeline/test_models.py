"""Tests for scene entity models."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from motionkit.core.timeline.enums import (
    AnimationKind,
    ObjectKind,
    animation_kind_name,
    object_kind_name,
)
from motionkit.core.timeline.models import (
    AnimObject,
    Animation,
    LaTexObjectData,
    TextObjectData,
    Vec2,
)


class TestKinds:
    """Kind tags double as wire values."""

    def test_object_kind_values(self) -> None:
        assert int(ObjectKind.TEXT_OBJECT) == 1
        assert int(ObjectKind.LATEX_OBJECT) == 2

    def test_animation_kind_values(self) -> None:
        assert int(AnimationKind.WRITE_IN_TEXT) == 1

    def test_display_names(self) -> None:
        assert object_kind_name(ObjectKind.TEXT_OBJECT) == "Text Object"
        assert object_kind_name(ObjectKind.LATEX_OBJECT) == "LaTex Object"
        assert animation_kind_name(AnimationKind.WRITE_IN_TEXT) == "Write In Text"

    def test_display_name_accepts_raw_tag(self) -> None:
        assert object_kind_name(2) == "LaTex Object"

    def test_zero_is_not_a_kind(self) -> None:
        with pytest.raises(ValueError):
            ObjectKind(0)
        with pytest.raises(ValueError):
            AnimationKind(0)


class TestAnimObject:
    """Tests for AnimObject validation."""

    def test_default_payload_follows_kind(self) -> None:
        text = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT)
        latex = AnimObject(id=1, kind=ObjectKind.LATEX_OBJECT)

        assert isinstance(text.payload, TextObjectData)
        assert isinstance(latex.payload, LaTexObjectData)
        assert latex.payload.is_equation is True

    def test_payload_from_dict(self) -> None:
        obj = AnimObject(
            id=0,
            kind=ObjectKind.TEXT_OBJECT,
            payload={"text": "Hello", "font_size_px": 24},
        )
        assert isinstance(obj.payload, TextObjectData)
        assert obj.payload.text == "Hello"
        assert obj.payload.font_size_px == 24.0

    def test_payload_kind_mismatch_rejected(self) -> None:
        with pytest.raises(ValidationError, match="does not match kind"):
            AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, payload=LaTexObjectData())

    def test_negative_duration_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, duration=-1)

    def test_negative_frame_start_allowed(self) -> None:
        obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, frame_start=-20)
        assert obj.window() == (-20, -20)

    def test_frame_start_must_fit_int32(self) -> None:
        with pytest.raises(ValidationError):
            AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, frame_start=2**31)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, colour="red")

    def test_window_is_closed_range(self) -> None:
        obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, frame_start=10, duration=30)
        assert obj.window() == (10, 40)

    def test_assignment_is_validated(self) -> None:
        obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT)
        with pytest.raises(ValidationError):
            obj.duration = -5

    def test_is_animating_not_serialized(self) -> None:
        obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT)
        obj.is_animating = True
        assert "is_animating" not in obj.model_dump()

    def test_position_is_single_precision(self) -> None:
        """Coordinates are rounded to float32 on the way in."""
        obj = AnimObject(id=0, kind=ObjectKind.TEXT_OBJECT, position=Vec2(x=0.1, y=-2.5))
        assert obj.position.x != 0.1
        assert obj.position.x == pytest.approx(0.1)
        assert obj.position.y == -2.5

    def test_font_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            TextObjectData(font_size_px=0)

    def test_font_size_positive_after_rounding(self) -> None:
        """A size that underflows to 0.0 at single precision is rejected."""
        with pytest.raises(ValidationError, match="single precision"):
            TextObjectData(font_size_px=1e-50)

        payload = TextObjectData()
        with pytest.raises(ValidationError):
            payload.font_size_px = 1e-50
        assert payload.font_size_px == 32.0

    def test_smallest_single_precision_font_size_accepted(self) -> None:
        assert TextObjectData(font_size_px=1e-40).font_size_px > 0


class TestAnimation:
    """Tests for Animation."""

    def test_absolute_window_adds_parent_start(self) -> None:
        animation = Animation(
            id=0, object_id=0, kind=AnimationKind.WRITE_IN_TEXT, frame_start=5, duration=10
        )
        assert animation.absolute_window(100) == (105, 115)

    def test_relative_start_may_be_negative(self) -> None:
        animation = Animation(
            id=0, object_id=0, kind=AnimationKind.WRITE_IN_TEXT, frame_start=-5, duration=10
        )
        assert animation.absolute_window(20) == (15, 25)

    def test_negative_ids_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Animation(id=-1, object_id=0, kind=AnimationKind.WRITE_IN_TEXT)
        with pytest.raises(ValidationError):
            Animation(id=0, object_id=-1, kind=AnimationKind.WRITE_IN_TEXT)
