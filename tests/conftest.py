"""Shared pytest fixtures for motionkit tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from motionkit.core.config.loader import clear_app_config_cache
from motionkit.core.config.models import AppConfig
from motionkit.core.render.handlers import RenderLog, load_recording_renderers
from motionkit.core.render.registry import RendererRegistry
from motionkit.core.scene import Scene
from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.timeline.models import AnimObject, Animation


@pytest.fixture(autouse=True)
def _reset_app_config_cache() -> Iterator[None]:
    """Keep the cached default AppConfig from leaking between tests."""
    clear_app_config_cache()
    yield
    clear_app_config_cache()


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def app_config() -> AppConfig:
    """Default application config (never read from disk)."""
    return AppConfig()


# ============================================================================
# Render Fixtures
# ============================================================================


@pytest.fixture
def render_log() -> RenderLog:
    """Empty sink for recorded render calls."""
    return RenderLog()


@pytest.fixture
def renderers(render_log: RenderLog) -> RendererRegistry:
    """Recording renderers for every kind, writing to ``render_log``."""
    return load_recording_renderers(render_log)


# ============================================================================
# Scene Fixtures
# ============================================================================


@pytest.fixture
def scene(app_config: AppConfig, renderers: RendererRegistry) -> Scene:
    """Empty scene with recording renderers."""
    return Scene(app_config=app_config, renderers=renderers)


def _make_object(
    object_id: int,
    frame_start: int = 0,
    duration: int = 30,
    kind: ObjectKind = ObjectKind.TEXT_OBJECT,
    **kwargs,
) -> AnimObject:
    """Build an object with the default payload for its kind."""
    return AnimObject(
        id=object_id, kind=kind, frame_start=frame_start, duration=duration, **kwargs
    )


def _make_animation(
    animation_id: int,
    object_id: int,
    frame_start: int = 0,
    duration: int = 10,
    kind: AnimationKind = AnimationKind.WRITE_IN_TEXT,
) -> Animation:
    """Build an animation attached (by back-reference) to ``object_id``."""
    return Animation(
        id=animation_id,
        object_id=object_id,
        kind=kind,
        frame_start=frame_start,
        duration=duration,
    )


@pytest.fixture
def make_object():
    """Factory for objects with default payloads."""
    return _make_object


@pytest.fixture
def make_animation():
    """Factory for animations."""
    return _make_animation
