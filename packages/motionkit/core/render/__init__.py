"""Render capability interfaces consumed by the playback dispatcher."""

from motionkit.core.render.protocol import AnimationRenderer, ObjectRenderer, RenderContext
from motionkit.core.render.registry import RendererRegistry

__all__ = [
    "AnimationRenderer",
    "ObjectRenderer",
    "RenderContext",
    "RendererRegistry",
]
