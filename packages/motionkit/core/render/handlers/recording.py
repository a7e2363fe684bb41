"""Recording renderers.

Renderers that draw nothing and record every call instead. Used to trace
what a frame would render (CLI ``play``) and to observe dispatch in tests.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from motionkit.core.render.protocol import RenderContext
from motionkit.core.timeline.enums import (
    AnimationKind,
    ObjectKind,
    animation_kind_name,
    object_kind_name,
)
from motionkit.core.timeline.models import AnimObject, Animation


class RenderCall(BaseModel):
    """One recorded call into a render capability.

    Attributes:
        frame: Frame from the render context.
        mode: "static" for object renders, "animation" for animation renders.
        object_id: Id of the drawn object.
        animation_id: Id of the active animation (animation renders only).
        kind_name: Display name of the dispatched kind.
        progress: Normalized progress (animation renders only).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    frame: int
    mode: Literal["static", "animation"]
    object_id: int
    animation_id: int | None = None
    kind_name: str
    progress: float | None = Field(default=None, ge=0.0, le=1.0)


class RenderLog:
    """Shared sink for recorded calls."""

    def __init__(self) -> None:
        self.calls: list[RenderCall] = []

    def record(self, call: RenderCall) -> None:
        self.calls.append(call)

    def for_frame(self, frame: int) -> list[RenderCall]:
        return [call for call in self.calls if call.frame == frame]

    def clear(self) -> None:
        self.calls.clear()

    def __len__(self) -> int:
        return len(self.calls)


class RecordingObjectRenderer:
    """ObjectRenderer that records static renders."""

    def __init__(self, kind: ObjectKind, log: RenderLog) -> None:
        self._kind = kind
        self._log = log

    @property
    def kind(self) -> ObjectKind:
        return self._kind

    def render_object(self, ctx: RenderContext, obj: AnimObject) -> None:
        self._log.record(
            RenderCall(
                frame=ctx.frame,
                mode="static",
                object_id=obj.id,
                kind_name=object_kind_name(obj.kind),
            )
        )


class RecordingAnimationRenderer:
    """AnimationRenderer that records animated renders with their progress."""

    def __init__(self, kind: AnimationKind, log: RenderLog) -> None:
        self._kind = kind
        self._log = log

    @property
    def kind(self) -> AnimationKind:
        return self._kind

    def render_animation(
        self,
        ctx: RenderContext,
        animation: Animation,
        parent: AnimObject,
        progress: float,
    ) -> None:
        self._log.record(
            RenderCall(
                frame=ctx.frame,
                mode="animation",
                object_id=parent.id,
                animation_id=animation.id,
                kind_name=animation_kind_name(animation.kind),
                progress=progress,
            )
        )


__all__ = [
    "RecordingAnimationRenderer",
    "RecordingObjectRenderer",
    "RenderCall",
    "RenderLog",
]
