"""Renderer registry.

Maps object kinds and animation kinds to renderer implementations. The
playback dispatcher asks the registry for a renderer per entity and skips
entities whose kind has none.
"""

from __future__ import annotations

import logging

from motionkit.core.render.protocol import AnimationRenderer, ObjectRenderer
from motionkit.core.timeline.enums import AnimationKind, ObjectKind

logger = logging.getLogger(__name__)


class RendererRegistry:
    """Registry of render capabilities keyed by kind.

    Example:
        >>> registry = RendererRegistry()
        >>> registry.register_object(TextRenderer())
        >>> registry.register_animation(WriteInTextRenderer())
        >>> registry.object_renderer(ObjectKind.TEXT_OBJECT)
    """

    def __init__(self) -> None:
        self._objects: dict[ObjectKind, ObjectRenderer] = {}
        self._animations: dict[AnimationKind, AnimationRenderer] = {}

    def register_object(self, renderer: ObjectRenderer) -> None:
        """Register the static renderer for an object kind.

        Args:
            renderer: ObjectRenderer implementation to register.
        """
        kind = ObjectKind(renderer.kind)
        if kind in self._objects:
            logger.warning(
                "Overwriting object renderer for '%s' (old=%s, new=%s)",
                kind.name,
                type(self._objects[kind]).__name__,
                type(renderer).__name__,
            )
        self._objects[kind] = renderer
        logger.debug("Registered object renderer '%s' for '%s'", type(renderer).__name__, kind.name)

    def register_animation(self, renderer: AnimationRenderer) -> None:
        """Register the renderer for an animation kind.

        Args:
            renderer: AnimationRenderer implementation to register.
        """
        kind = AnimationKind(renderer.kind)
        if kind in self._animations:
            logger.warning(
                "Overwriting animation renderer for '%s' (old=%s, new=%s)",
                kind.name,
                type(self._animations[kind]).__name__,
                type(renderer).__name__,
            )
        self._animations[kind] = renderer
        logger.debug(
            "Registered animation renderer '%s' for '%s'", type(renderer).__name__, kind.name
        )

    def object_renderer(self, kind: ObjectKind) -> ObjectRenderer | None:
        """Renderer for an object kind, or None if unhandled."""
        return self._objects.get(kind)

    def animation_renderer(self, kind: AnimationKind) -> AnimationRenderer | None:
        """Renderer for an animation kind, or None if unhandled."""
        return self._animations.get(kind)

    @property
    def object_kinds(self) -> list[ObjectKind]:
        return sorted(self._objects)

    @property
    def animation_kinds(self) -> list[AnimationKind]:
        return sorted(self._animations)

    def __len__(self) -> int:
        return len(self._objects) + len(self._animations)


__all__ = [
    "RendererRegistry",
]
