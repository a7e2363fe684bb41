"""Command-line interface for motionkit.

Inspects, plays back and generates scene files using the recording
renderers, which print what a real renderer would be asked to draw.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from motionkit.core.config.loader import configure_logging, load_app_config
from motionkit.core.formats.scene import SceneFormatError
from motionkit.core.render.handlers import RenderLog, load_recording_renderers
from motionkit.core.scene import Scene
from motionkit.core.timeline.enums import (
    AnimationKind,
    ObjectKind,
    animation_kind_name,
    object_kind_name,
)
from motionkit.core.timeline.models import LaTexObjectData, TextObjectData

console = Console()
logger = logging.getLogger(__name__)


def _open_scene(
    path: Path, app_config_path: Path | None, log: RenderLog | None = None
) -> Scene | None:
    """Load a scene, printing a console error instead of raising."""
    app_config = load_app_config(app_config_path)
    configure_logging(app_config)
    renderers = load_recording_renderers(log) if log is not None else None
    scene = Scene(app_config=app_config, renderers=renderers)

    if not path.exists():
        console.print(f"[red]ERROR: Scene file not found: {path}[/red]")
        return None
    try:
        scene.load(path)
    except SceneFormatError as e:
        console.print(f"[red]ERROR: Could not read scene: {e}[/red]")
        return None
    return scene


def inspect_scene(args: argparse.Namespace) -> int:
    """Print the objects and animations stored in a scene file."""
    path = Path(args.file).resolve()
    scene = _open_scene(path, args.app_config)
    if scene is None:
        return 1

    table = Table(title=f"{path.name} ({len(scene)} objects)")
    table.add_column("Id", justify="right")
    table.add_column("Kind")
    table.add_column("Start", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Track", justify="right")
    table.add_column("Position")
    table.add_column("Animations")

    for obj in scene.list_objects():
        animations = ", ".join(
            f"#{a.id} {animation_kind_name(a.kind)} @{a.frame_start}+{a.duration}"
            for a in obj.animations
        )
        table.add_row(
            str(obj.id),
            object_kind_name(obj.kind),
            str(obj.frame_start),
            str(obj.duration),
            str(obj.track),
            f"({obj.position.x:g}, {obj.position.y:g})",
            animations or "-",
        )

    console.print(table)
    return 0


def play_scene(args: argparse.Namespace) -> int:
    """Render one frame or a frame range and print the dispatched calls."""
    if args.frame is not None:
        start = end = args.frame
    elif args.start is not None and args.end is not None:
        start, end = args.start, args.end
    else:
        console.print("[red]ERROR: Give either --frame or both --start and --end[/red]")
        return 1

    if end < start:
        console.print(f"[red]ERROR: --end ({end}) is before --start ({start})[/red]")
        return 1

    log = RenderLog()
    scene = _open_scene(Path(args.file).resolve(), args.app_config, log)
    if scene is None:
        return 1

    for report in scene.play(start, end):
        console.print(
            f"[bold]Frame {report.frame}[/bold]: "
            f"{report.animations_rendered} animated, "
            f"{report.objects_rendered} static, "
            f"{report.skipped} skipped"
        )
        for call in log.for_frame(report.frame):
            if call.mode == "animation":
                console.print(
                    f"   {call.kind_name} #{call.animation_id} on object {call.object_id} "
                    f"progress={call.progress:.3f}"
                )
            else:
                console.print(f"   {call.kind_name} #{call.object_id}")
    return 0


def write_demo_scene(args: argparse.Namespace) -> int:
    """Write a small sample scene."""
    app_config = load_app_config(args.app_config)
    configure_logging(app_config)
    scene = Scene(app_config=app_config)

    title = scene.add_object(
        scene.create_object(
            ObjectKind.TEXT_OBJECT,
            0,
            180,
            position=(0.0, 120.0),
            payload=TextObjectData(text="Hello, motionkit", font_size_px=48.0),
        )
    )
    scene.add_animation_to(
        title.id, scene.create_animation(AnimationKind.WRITE_IN_TEXT, title.id, 0, 60)
    )

    equation = scene.add_object(
        scene.create_object(
            ObjectKind.LATEX_OBJECT,
            90,
            120,
            position=(0.0, -40.0),
            track=1,
            payload=LaTexObjectData(latex=r"e^{i\pi} + 1 = 0"),
        )
    )
    scene.add_animation_to(
        equation.id,
        scene.create_animation(AnimationKind.WRITE_IN_TEXT, equation.id, 10, 45),
    )

    path = scene.save(Path(args.file))
    console.print(f"[green]Wrote {len(scene)} objects to[/green] {path}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="motionkit",
        description="motionkit - animation timeline and scene files",
    )
    p.add_argument(
        "--app-config",
        type=Path,
        default=None,
        help="Path to app config YAML/JSON (default: motionkit.yaml if present)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    inspect = sub.add_parser("inspect", help="List the contents of a scene file")
    inspect.add_argument("file", help="Path to scene file")

    play = sub.add_parser("play", help="Dispatch frames to the recording renderers")
    play.add_argument("file", help="Path to scene file")
    play.add_argument("--frame", type=int, help="Single frame to render")
    play.add_argument("--start", type=int, help="First frame of a range")
    play.add_argument("--end", type=int, help="Last frame of a range (inclusive)")

    demo = sub.add_parser("demo", help="Write a sample scene file")
    demo.add_argument("file", help="Output path (scene suffix added if missing)")

    return p


COMMANDS = {
    "inspect": inspect_scene,
    "play": play_scene,
    "demo": write_demo_scene,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    return COMMANDS[args.cmd](args)
