"""Scene document - the query surface an editor works against.

A Scene owns everything that lives for the lifetime of one open document:

- the object registry (objects and their animations, kept sorted)
- the two UID allocators (objects, animations)
- the playback dispatcher and its renderers
- the app configuration

There is no module-level state; two scenes never share ids or objects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from motionkit.core.config.models import AppConfig
from motionkit.core.formats.scene import (
    SceneFormatError,
    decode_scene,
    encode_scene,
    read_scene,
    write_scene,
)
from motionkit.core.render.protocol import RenderContext
from motionkit.core.render.registry import RendererRegistry
from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.timeline.models import (
    PAYLOAD_TYPES,
    AnimObject,
    Animation,
    ObjectPayload,
    Vec2,
)
from motionkit.core.timeline.playback import DispatchReport, PlaybackDispatcher
from motionkit.core.timeline.registry import ObjectRegistry
from motionkit.core.timeline.uid import UidAllocator

logger = logging.getLogger(__name__)


class Scene:
    """One open animation document.

    Example:
        >>> scene = Scene(app_config=AppConfig())
        >>> title = scene.add_object(scene.create_object(ObjectKind.TEXT_OBJECT, 0, 120))
        >>> scene.add_animation_to(
        ...     title.id, scene.create_animation(AnimationKind.WRITE_IN_TEXT, title.id, 0, 30)
        ... )
        True
        >>> scene.save("intro.mkscene")
    """

    def __init__(
        self,
        *,
        app_config: AppConfig | Path | str | None = None,
        renderers: RendererRegistry | None = None,
    ) -> None:
        """Initialize an empty scene.

        Args:
            app_config: AppConfig instance, path, or None (defaults / motionkit.yaml)
            renderers: Render capabilities used by playback. Defaults to an
                empty registry, which renders nothing and logs every skip.

        Raises:
            TypeError: If app_config is of the wrong type
            ValidationError: If the config file is invalid
        """
        self.app_config: AppConfig = self._resolve_config(app_config)
        self.registry = ObjectRegistry()
        self.object_ids = UidAllocator()
        self.animation_ids = UidAllocator()
        self.dispatcher = PlaybackDispatcher(
            renderers if renderers is not None else RendererRegistry()
        )
        self.path: Path | None = None

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return AppConfig.load_or_default()
        elif isinstance(value, (Path, str)):
            return AppConfig.load_or_default(Path(value))
        elif isinstance(value, AppConfig):
            return value
        else:
            raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def create_object(
        self,
        kind: ObjectKind,
        frame_start: int = 0,
        duration: int | None = None,
        *,
        position: Vec2 | tuple[float, float] | None = None,
        track: int = 0,
        payload: ObjectPayload | dict[str, Any] | None = None,
    ) -> AnimObject:
        """Create (but do not add) an object stamped with the next object id.

        Args:
            kind: Object kind; the default payload for the kind is used if
                ``payload`` is None.
            frame_start: Absolute start frame.
            duration: Lifespan in frames (config default if None).
            position: Initial position.
            track: Editor lane.
            payload: Kind payload or its fields.
        """
        if duration is None:
            duration = self.app_config.playback.default_duration
        if isinstance(position, tuple):
            position = Vec2(x=position[0], y=position[1])
        if payload is None:
            payload = PAYLOAD_TYPES[kind]()

        return AnimObject(
            id=self.object_ids.allocate(),
            kind=kind,
            payload=payload,
            position=position or Vec2(),
            frame_start=frame_start,
            duration=duration,
            track=track,
        )

    def create_animation(
        self,
        kind: AnimationKind,
        object_id: int,
        frame_start: int = 0,
        duration: int | None = None,
    ) -> Animation:
        """Create (but do not attach) an animation stamped with the next animation id.

        Args:
            kind: Animation kind.
            object_id: Id of the object it will be attached to.
            frame_start: Start frame relative to the object.
            duration: Length in frames (config default if None).
        """
        if duration is None:
            duration = self.app_config.playback.default_duration
        return Animation(
            id=self.animation_ids.allocate(),
            object_id=object_id,
            kind=kind,
            frame_start=frame_start,
            duration=duration,
        )

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    def add_object(self, obj: AnimObject) -> AnimObject:
        """Insert an object into the scene.

        Allocators are advanced past the inserted ids, so objects built
        outside the factories cannot collide with later allocations.

        Raises:
            DuplicateIdError: If an id is already in the scene.
        """
        self.registry.insert(obj)
        self.object_ids.advance(obj.id)
        for animation in obj.animations:
            self.animation_ids.advance(animation.id)
        return obj

    def add_animation_to(self, object_id: int, animation: Animation) -> bool:
        """Attach an animation to an object. False if the object is absent."""
        added = self.registry.add_animation(object_id, animation)
        if added:
            self.animation_ids.advance(animation.id)
        return added

    def remove_object(self, object_id: int) -> bool:
        return self.registry.remove(object_id)

    def remove_animation(self, object_id: int, animation_id: int) -> bool:
        return self.registry.remove_animation(object_id, animation_id)

    def set_object_time(self, object_id: int, frame_start: int, duration: int) -> bool:
        return self.registry.retime(object_id, frame_start, duration)

    def set_animation_time(
        self, object_id: int, animation_id: int, frame_start: int, duration: int
    ) -> bool:
        return self.registry.retime_animation(object_id, animation_id, frame_start, duration)

    def set_object_track(self, object_id: int, track: int) -> bool:
        return self.registry.set_track(object_id, track)

    def get_object(self, object_id: int) -> AnimObject | None:
        return self.registry.get(object_id)

    def get_mutable_object(self, object_id: int) -> AnimObject | None:
        return self.registry.get_mutable(object_id)

    def get_animation(self, animation_id: int) -> Animation | None:
        return self.registry.get_animation(animation_id)

    def get_mutable_animation(self, animation_id: int) -> Animation | None:
        return self.registry.get_mutable_animation(animation_id)

    def list_objects(self) -> tuple[AnimObject, ...]:
        """Objects in registry order (descending start frame)."""
        return self.registry.all()

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def new_document(self) -> None:
        """Discard all objects and restart both id counters at zero."""
        self.registry.clear()
        self.object_ids.reset()
        self.animation_ids.reset()
        self.path = None
        logger.debug("Started new document")

    def to_bytes(self) -> bytes:
        """Encode the scene as a binary container.

        Raises:
            ValueError: If in-place edits left records the loader would reject.
        """
        return encode_scene(self.registry.all())

    def from_bytes(self, data: bytes) -> None:
        """Replace the scene contents with a decoded container.

        The current contents are kept if decoding fails.

        Raises:
            SceneFormatError: If the data is not a valid scene container.
        """
        self._replace_objects(decode_scene(data))

    def save(self, path: Path | str | None = None) -> Path:
        """Write the scene to ``path`` (or the path it was loaded from).

        A path without a suffix gets the configured scene suffix.

        Returns:
            The path written.

        Raises:
            ValueError: If no path is given and the scene has none, or if
                in-place edits left records the loader would reject. Nothing
                is written in that case.
        """
        if path is None:
            if self.path is None:
                raise ValueError("No path given and scene has not been saved before")
            path = self.path
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(self.app_config.storage.scene_suffix)

        size = write_scene(path, self.registry.all())
        self.path = path
        logger.info("Saved scene %s (%d objects, %d bytes)", path, len(self.registry), size)
        return path

    def load(self, path: Path | str) -> None:
        """Replace the scene contents with the file at ``path``.

        Raises:
            FileNotFoundError: If the file does not exist.
            SceneFormatError: If the file is not a valid scene container.
        """
        path = Path(path)
        if not path.exists():
            logger.warning("Could not load '%s', does not exist", path)
            raise FileNotFoundError(f"Scene file not found: {path}")

        try:
            objects = read_scene(path)
        except SceneFormatError as e:
            logger.error("Failed to load scene '%s': %s", path, e)
            raise

        self._replace_objects(objects)
        self.path = path
        logger.info("Loaded scene %s (%d objects)", path, len(self.registry))

    def _replace_objects(self, objects: list[AnimObject]) -> None:
        registry = ObjectRegistry()
        for obj in objects:
            registry.insert(obj)

        self.registry = registry
        for obj in objects:
            self.object_ids.advance(obj.id)
            for animation in obj.animations:
                self.animation_ids.advance(animation.id)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def render_context(self, frame: int, **extra: Any) -> RenderContext:
        return RenderContext(frame=frame, fps=self.app_config.playback.fps, extra=extra)

    def render_frame(self, frame: int, ctx: RenderContext | None = None) -> DispatchReport:
        """Render one frame through the scene's dispatcher."""
        if ctx is None:
            ctx = self.render_context(frame)
        return self.dispatcher.render_frame(self.registry, ctx, frame)

    def play(
        self, start: int, end: int, ctx: RenderContext | None = None
    ) -> Iterator[DispatchReport]:
        """Render every frame in ``[start, end]``."""
        if ctx is None:
            ctx = self.render_context(start)
        return self.dispatcher.play(self.registry, ctx, start, end)

    def __len__(self) -> int:
        return len(self.registry)

    def __repr__(self) -> str:
        return (
            f"Scene(objects={len(self.registry)}, next_object_id={self.object_ids.peek()}, "
            f"next_animation_id={self.animation_ids.peek()}, path={self.path})"
        )


__all__ = ["Scene"]
