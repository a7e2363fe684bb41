"""Built-in renderers."""

from motionkit.core.render.handlers.recording import (
    RecordingAnimationRenderer,
    RecordingObjectRenderer,
    RenderCall,
    RenderLog,
)
from motionkit.core.render.registry import RendererRegistry
from motionkit.core.timeline.enums import AnimationKind, ObjectKind


def load_recording_renderers(log: RenderLog) -> RendererRegistry:
    """Create a RendererRegistry with a recording renderer for every kind.

    Args:
        log: Sink that receives every recorded call.

    Returns:
        RendererRegistry covering all object and animation kinds.
    """
    registry = RendererRegistry()

    for object_kind in ObjectKind:
        registry.register_object(RecordingObjectRenderer(object_kind, log))
    for animation_kind in AnimationKind:
        registry.register_animation(RecordingAnimationRenderer(animation_kind, log))

    return registry


__all__ = [
    "RecordingAnimationRenderer",
    "RecordingObjectRenderer",
    "RenderCall",
    "RenderLog",
    "load_recording_renderers",
]
