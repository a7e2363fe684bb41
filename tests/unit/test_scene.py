"""Unit tests for the Scene document."""

from __future__ import annotations

from pathlib import Path

import pytest

from motionkit.core.config.models import AppConfig
from motionkit.core.formats.scene import CorruptSceneError, UnsupportedVersionError
from motionkit.core.scene import Scene
from motionkit.core.timeline.enums import AnimationKind, ObjectKind
from motionkit.core.timeline.models import LaTexObjectData, TextObjectData
from motionkit.core.timeline.registry import DuplicateIdError


def _populate(scene: Scene) -> None:
    """Three objects, two of them animated."""
    for start in (0, 30, 15):
        obj = scene.add_object(scene.create_object(ObjectKind.TEXT_OBJECT, start, 40))
        if start:
            scene.add_animation_to(
                obj.id, scene.create_animation(AnimationKind.WRITE_IN_TEXT, obj.id, 5, 10)
            )


class TestSceneConstruction:
    """Config resolution mirrors the loader rules."""

    def test_accepts_app_config(self, app_config) -> None:
        assert Scene(app_config=app_config).app_config is app_config

    def test_loads_config_from_path(self, tmp_path: Path) -> None:
        config_path = tmp_path / "motionkit.yaml"
        config_path.write_text("playback:\n  fps: 24\n", encoding="utf-8")

        scene = Scene(app_config=config_path)
        assert scene.app_config.playback.fps == 24

    def test_rejects_wrong_config_type(self) -> None:
        with pytest.raises(TypeError, match="Expected AppConfig"):
            Scene(app_config=42)

    def test_starts_empty(self, scene) -> None:
        assert len(scene) == 0
        assert scene.list_objects() == ()
        assert scene.path is None


class TestFactories:
    """Tests for create_object / create_animation."""

    def test_ids_are_allocated_in_order(self, scene) -> None:
        first = scene.create_object(ObjectKind.TEXT_OBJECT)
        second = scene.create_object(ObjectKind.LATEX_OBJECT)
        animation = scene.create_animation(AnimationKind.WRITE_IN_TEXT, first.id)

        assert (first.id, second.id) == (0, 1)
        assert animation.id == 0
        assert animation.object_id == first.id

    def test_default_duration_from_config(self) -> None:
        config = AppConfig.model_validate({"playback": {"default_duration": 90}})
        scene = Scene(app_config=config)

        assert scene.create_object(ObjectKind.TEXT_OBJECT).duration == 90
        assert scene.create_animation(AnimationKind.WRITE_IN_TEXT, 0).duration == 90

    def test_default_payload_for_kind(self, scene) -> None:
        assert isinstance(scene.create_object(ObjectKind.LATEX_OBJECT).payload, LaTexObjectData)

    def test_position_tuple(self, scene) -> None:
        obj = scene.create_object(ObjectKind.TEXT_OBJECT, position=(4.0, -2.0))
        assert (obj.position.x, obj.position.y) == (4.0, -2.0)

    def test_ids_never_reused_after_removal(self, scene) -> None:
        obj = scene.add_object(scene.create_object(ObjectKind.TEXT_OBJECT))
        scene.remove_object(obj.id)
        assert scene.create_object(ObjectKind.TEXT_OBJECT).id == obj.id + 1


class TestQuerySurface:
    """Mutations go through the registry and keep order."""

    def test_list_objects_descending(self, scene) -> None:
        _populate(scene)
        assert [obj.frame_start for obj in scene.list_objects()] == [30, 15, 0]

    def test_add_object_advances_allocators(self, scene, make_object, make_animation) -> None:
        scene.add_object(make_object(10, animations=[make_animation(20, 10)]))

        assert scene.create_object(ObjectKind.TEXT_OBJECT).id == 11
        assert scene.create_animation(AnimationKind.WRITE_IN_TEXT, 10).id == 21

    def test_add_duplicate_object(self, scene, make_object) -> None:
        scene.add_object(make_object(0))
        with pytest.raises(DuplicateIdError):
            scene.add_object(make_object(0))

    def test_add_animation_to_missing_object(self, scene) -> None:
        animation = scene.create_animation(AnimationKind.WRITE_IN_TEXT, 5)
        assert scene.add_animation_to(5, animation) is False

    def test_retime_and_track(self, scene) -> None:
        _populate(scene)
        assert scene.set_object_time(0, 100, 5) is True
        assert scene.list_objects()[0].id == 0
        assert scene.set_object_track(0, 3) is True
        assert scene.get_object(0).track == 3
        assert scene.set_object_time(99, 0, 0) is False

    def test_animation_lookup_and_retime(self, scene) -> None:
        _populate(scene)
        animation = scene.get_animation(0)
        assert animation is not None
        assert scene.set_animation_time(animation.object_id, 0, 1, 2) is True
        assert scene.get_mutable_animation(0).frame_start == 1
        assert scene.remove_animation(animation.object_id, 0) is True
        assert scene.get_animation(0) is None

    def test_get_mutable_object_payload_edit(self, scene) -> None:
        _populate(scene)
        scene.get_mutable_object(1).payload.text = "changed"
        assert scene.get_object(1).payload.text == "changed"


class TestPersistence:
    """Save/load through the binary container."""

    def test_save_load_round_trip(self, scene, app_config, tmp_path: Path) -> None:
        _populate(scene)
        scene.get_mutable_object(0).payload = TextObjectData(text="Hello", font_size_px=20)
        path = scene.save(tmp_path / "intro.mkscene")

        restored = Scene(app_config=app_config)
        restored.load(path)

        assert [o.model_dump() for o in restored.list_objects()] == [
            o.model_dump() for o in scene.list_objects()
        ]
        assert restored.path == path

    def test_load_advances_uid_allocators(self, scene, app_config, tmp_path: Path) -> None:
        """After loading, new ids are greater than every id in the file."""
        _populate(scene)
        path = scene.save(tmp_path / "scene.mkscene")

        restored = Scene(app_config=app_config)
        restored.load(path)

        assert restored.create_object(ObjectKind.TEXT_OBJECT).id > 2
        assert restored.create_animation(AnimationKind.WRITE_IN_TEXT, 0).id > 1

    def test_load_never_moves_allocators_backwards(self, scene, app_config, tmp_path) -> None:
        path = scene.save(tmp_path / "empty.mkscene")
        for _ in range(5):
            scene.create_object(ObjectKind.TEXT_OBJECT)

        scene.load(path)
        assert scene.create_object(ObjectKind.TEXT_OBJECT).id == 5

    def test_save_appends_suffix(self, scene, tmp_path: Path) -> None:
        path = scene.save(tmp_path / "untitled")
        assert path.suffix == ".mkscene"
        assert path.exists()

    def test_save_reuses_path(self, scene, tmp_path: Path) -> None:
        path = scene.save(tmp_path / "a.mkscene")
        scene.add_object(scene.create_object(ObjectKind.TEXT_OBJECT))
        assert scene.save() == path

    def test_save_without_path(self, scene) -> None:
        with pytest.raises(ValueError, match="No path given"):
            scene.save()

    def test_load_missing_file(self, scene, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            scene.load(tmp_path / "nope.mkscene")

    def test_failed_load_leaves_scene_untouched(self, scene, tmp_path: Path) -> None:
        _populate(scene)
        before = [o.model_dump() for o in scene.list_objects()]
        bad = tmp_path / "bad.mkscene"
        bad.write_bytes(b"\x00" * 16)

        with pytest.raises(CorruptSceneError):
            scene.load(bad)

        assert [o.model_dump() for o in scene.list_objects()] == before
        assert scene.path is None

    def test_in_place_animation_edits_fail_on_save(self, scene, tmp_path: Path) -> None:
        """Saving refuses records the loader would reject."""
        obj = scene.add_object(scene.create_object(ObjectKind.TEXT_OBJECT, 0, 100))
        first = scene.create_animation(AnimationKind.WRITE_IN_TEXT, obj.id, 10, 5)
        second = scene.create_animation(AnimationKind.WRITE_IN_TEXT, obj.id, 0, 5)
        scene.add_animation_to(obj.id, first)
        scene.add_animation_to(obj.id, second)

        scene.get_mutable_animation(second.id).frame_start = 90
        with pytest.raises(ValueError, match="registry order"):
            scene.to_bytes()
        with pytest.raises(ValueError):
            scene.save(tmp_path / "edited.mkscene")
        assert not (tmp_path / "edited.mkscene").exists()

        # The supported path keeps the scene saveable
        scene.get_mutable_animation(second.id).frame_start = 0
        assert scene.set_animation_time(obj.id, second.id, 90, 5) is True
        other = Scene(app_config=scene.app_config)
        other.from_bytes(scene.to_bytes())
        assert [a.id for a in other.get_object(obj.id).animations] == [second.id, first.id]

    def test_newer_version_rejected(self, scene) -> None:
        data = bytearray(scene.to_bytes())
        data[4] = 2
        with pytest.raises(UnsupportedVersionError):
            scene.from_bytes(bytes(data))

    def test_bytes_round_trip(self, scene, app_config) -> None:
        _populate(scene)
        other = Scene(app_config=app_config)
        other.from_bytes(scene.to_bytes())
        assert len(other) == 3
        assert other.get_animation(1).object_id == scene.get_animation(1).object_id

    def test_new_document_resets(self, scene, tmp_path: Path) -> None:
        _populate(scene)
        scene.save(tmp_path / "a.mkscene")

        scene.new_document()

        assert len(scene) == 0
        assert scene.path is None
        assert scene.create_object(ObjectKind.TEXT_OBJECT).id == 0
        assert scene.create_animation(AnimationKind.WRITE_IN_TEXT, 0).id == 0


class TestPlayback:
    """Scene-level playback uses the configured clock."""

    def test_render_frame(self, scene, render_log) -> None:
        _populate(scene)
        report = scene.render_frame(20)

        # Object 1 (start 30) is not visible, object 2 animates, object 0 is static
        assert report.animations_rendered == 1
        assert report.objects_rendered == 1
        assert {call.mode for call in render_log.calls} == {"animation", "static"}

    def test_render_context_uses_fps(self) -> None:
        config = AppConfig.model_validate({"playback": {"fps": 30}})
        ctx = Scene(app_config=config).render_context(45)
        assert ctx.fps == 30
        assert ctx.seconds == 1.5

    def test_play_range(self, scene) -> None:
        _populate(scene)
        reports = list(scene.play(0, 9))
        assert len(reports) == 10
        assert all(r.objects_rendered == 1 for r in reports)
