"""Render capability protocols and context model.

The timeline core never draws anything itself. It decides which objects
and animations are visible on a frame, and with what progress, then hands
them to renderers implementing these protocols. A renderer is registered
per object kind or animation kind.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.timeline.models import AnimObject, Animation


class RenderContext(BaseModel):
    """Context passed through to renderers on every call.

    Attributes:
        frame: Frame being rendered.
        fps: Playback clock rate, for renderers that need wall time.
        target: Opaque drawing target owned by the rendering backend.
        extra: Additional context for specialized renderers.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    frame: int = Field(default=0, description="Frame being rendered")
    fps: int = Field(default=60, gt=0, description="Frames per second")
    target: Any = Field(default=None, description="Backend drawing target")
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def seconds(self) -> float:
        """Wall-clock position of the frame."""
        return self.frame / self.fps


@runtime_checkable
class ObjectRenderer(Protocol):
    """Draws an object in its static (non-animating) state."""

    @property
    def kind(self) -> ObjectKind:
        """Object kind this renderer draws."""
        ...

    def render_object(self, ctx: RenderContext, obj: AnimObject) -> None:
        """Draw ``obj`` with no animation applied."""
        ...


@runtime_checkable
class AnimationRenderer(Protocol):
    """Draws an object under one of its active animations."""

    @property
    def kind(self) -> AnimationKind:
        """Animation kind this renderer draws."""
        ...

    def render_animation(
        self,
        ctx: RenderContext,
        animation: Animation,
        parent: AnimObject,
        progress: float,
    ) -> None:
        """Draw ``parent`` as affected by ``animation``.

        Args:
            ctx: Render context.
            animation: The active animation.
            parent: The object that owns the animation.
            progress: Normalized position in the activation window, in [0, 1].
        """
        ...


__all__ = [
    "AnimationRenderer",
    "ObjectRenderer",
    "RenderContext",
]
