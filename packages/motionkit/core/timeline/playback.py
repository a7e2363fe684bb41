"""Time resolution and render dispatch for a single frame.

For every object in registry order:

1. Each animation's window is made absolute by adding the owning object's
   start frame: ``[parent.frame_start + a.frame_start, ... + a.duration]``.
   An animation is active when the frame lies inside that closed window,
   and renders with ``progress = (frame - start) / duration`` (1.0 for
   zero-length windows).
2. If none of the object's animations is active but the frame lies in the
   object's own window, the object renders statically.

Nothing is carried over between frames, so rendering an arbitrary frame
(seeking, scrubbing) gives the same result as reaching it by playing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from motionkit.core.render.protocol import RenderContext
from motionkit.core.render.registry import RendererRegistry
from motionkit.core.timeline.models import AnimObject, Animation
from motionkit.core.timeline.registry import ObjectRegistry
from motionkit.core.utils.math import window_progress

logger = logging.getLogger(__name__)


def in_window(frame: int, start: int, duration: int) -> bool:
    """True if ``frame`` lies in the closed window ``[start, start + duration]``."""
    return start <= frame <= start + duration


class ActiveAnimation(BaseModel):
    """An animation that is active on the resolved frame."""

    model_config = ConfigDict(frozen=True)

    object: AnimObject
    animation: Animation
    progress: float = Field(ge=0.0, le=1.0)


class StaticObject(BaseModel):
    """An object visible on the resolved frame with no active animation."""

    model_config = ConfigDict(frozen=True)

    object: AnimObject


class FrameResolution(BaseModel):
    """Everything visible on one frame, in registry order."""

    model_config = ConfigDict(frozen=True)

    frame: int
    entries: list[ActiveAnimation | StaticObject] = Field(default_factory=list)
    animating_ids: frozenset[int] = frozenset()
    dangling_animation_ids: list[int] = Field(default_factory=list)

    @property
    def active_animations(self) -> list[ActiveAnimation]:
        return [e for e in self.entries if isinstance(e, ActiveAnimation)]

    @property
    def static_objects(self) -> list[StaticObject]:
        return [e for e in self.entries if isinstance(e, StaticObject)]


def resolve_frame(registry: ObjectRegistry, frame: int) -> FrameResolution:
    """Work out what is visible on ``frame``.

    Pure function of the registry state; does not touch ``is_animating``.

    Args:
        registry: Scene registry to resolve.
        frame: Frame number.

    Returns:
        FrameResolution with one entry per active animation and one per
        statically visible object.
    """
    entries: list[ActiveAnimation | StaticObject] = []
    animating: set[int] = set()
    dangling: list[int] = []

    for obj in registry.all():
        object_animating = False
        for animation in obj.animations:
            parent = registry.get_parent(animation)
            if parent is None:
                logger.warning(
                    "Animation %d references missing object %d; skipped",
                    animation.id,
                    animation.object_id,
                )
                dangling.append(animation.id)
                continue

            start, _ = animation.absolute_window(parent.frame_start)
            if in_window(frame, start, animation.duration):
                progress = window_progress(frame, start, animation.duration)
                entries.append(
                    ActiveAnimation(object=parent, animation=animation, progress=progress)
                )
                object_animating = True

        if object_animating:
            animating.add(obj.id)
        elif in_window(frame, obj.frame_start, obj.duration):
            entries.append(StaticObject(object=obj))

    return FrameResolution(
        frame=frame,
        entries=entries,
        animating_ids=frozenset(animating),
        dangling_animation_ids=dangling,
    )


class DispatchReport(BaseModel):
    """Outcome of dispatching one frame.

    Attributes:
        frame: Frame that was rendered.
        animations_rendered: Animation renders dispatched.
        objects_rendered: Static object renders dispatched.
        skipped: Entries with no renderer for their kind, or whose renderer failed.
    """

    model_config = ConfigDict(extra="forbid")

    frame: int
    animations_rendered: int = 0
    objects_rendered: int = 0
    skipped: int = 0

    @property
    def total_rendered(self) -> int:
        return self.animations_rendered + self.objects_rendered


class PlaybackDispatcher:
    """Dispatches resolved frames to registered renderers.

    Example:
        >>> dispatcher = PlaybackDispatcher(load_recording_renderers(log))
        >>> report = dispatcher.render_frame(scene.registry, RenderContext(frame=12), 12)
    """

    def __init__(self, renderers: RendererRegistry) -> None:
        self._renderers = renderers

    @property
    def renderers(self) -> RendererRegistry:
        return self._renderers

    def render_frame(
        self, registry: ObjectRegistry, ctx: RenderContext, frame: int | None = None
    ) -> DispatchReport:
        """Resolve ``frame`` and call the matching renderers.

        Resets ``is_animating`` on every object, then sets it for objects
        with at least one active animation. An entry whose kind has no
        renderer, or whose renderer raises, is logged and skipped; the rest
        of the frame still renders.

        Args:
            registry: Scene registry.
            ctx: Context handed to renderers.
            frame: Frame to render (defaults to ``ctx.frame``).
        """
        if frame is None:
            frame = ctx.frame
        elif frame != ctx.frame:
            ctx = ctx.model_copy(update={"frame": frame})

        for obj in registry.all():
            obj.is_animating = False

        resolution = resolve_frame(registry, frame)
        report = DispatchReport(frame=frame)

        for entry in resolution.entries:
            if isinstance(entry, ActiveAnimation):
                entry.object.is_animating = True
                if self._dispatch_animation(ctx, entry):
                    report.animations_rendered += 1
                else:
                    report.skipped += 1
            else:
                if self._dispatch_static(ctx, entry.object):
                    report.objects_rendered += 1
                else:
                    report.skipped += 1

        return report

    def play(
        self, registry: ObjectRegistry, ctx: RenderContext, start: int, end: int
    ) -> Iterator[DispatchReport]:
        """Render every frame in ``[start, end]`` in order.

        Yields:
            One DispatchReport per frame.
        """
        if end < start:
            raise ValueError(f"end frame {end} is before start frame {start}")
        for frame in range(start, end + 1):
            yield self.render_frame(registry, ctx, frame)

    def _dispatch_animation(self, ctx: RenderContext, entry: ActiveAnimation) -> bool:
        animation = entry.animation
        renderer = self._renderers.animation_renderer(animation.kind)
        if renderer is None:
            logger.warning(
                "No renderer for animation kind '%s' (animation %d); skipped",
                animation.kind.name,
                animation.id,
            )
            return False
        try:
            renderer.render_animation(ctx, animation, entry.object, entry.progress)
        except Exception:
            logger.exception(
                "Renderer for '%s' failed on animation %d", animation.kind.name, animation.id
            )
            return False
        return True

    def _dispatch_static(self, ctx: RenderContext, obj: AnimObject) -> bool:
        renderer = self._renderers.object_renderer(obj.kind)
        if renderer is None:
            logger.warning(
                "No renderer for object kind '%s' (object %d); skipped", obj.kind.name, obj.id
            )
            return False
        try:
            renderer.render_object(ctx, obj)
        except Exception:
            logger.exception("Renderer for '%s' failed on object %d", obj.kind.name, obj.id)
            return False
        return True


__all__ = [
    "ActiveAnimation",
    "DispatchReport",
    "FrameResolution",
    "PlaybackDispatcher",
    "StaticObject",
    "in_window",
    "resolve_frame",
]
