"""CLI entry point using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from bitruvius.models.pose import PoseLibraryEntry
    from bitruvius.poses import PoseLibrary

app = typer.Typer(
    name="bitruvius",
    help="Procedural walk cycles and posable mannequin kinematics.",
    no_args_is_help=False,
)


def _load_library(path: Path | None) -> PoseLibrary:
    from bitruvius.config import load_config
    from bitruvius.poses import PoseLibraryError, load_library

    config = load_config()
    try:
        return load_library(path or config.library_path)
    except PoseLibraryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _find_entry(entry_id: str, library_path: Path | None) -> PoseLibraryEntry:
    library = _load_library(library_path)
    entry = library.get(entry_id)
    if entry is None:
        typer.echo(f"Error: pose not found: {entry_id}", err=True)
        raise typer.Exit(1)
    return entry


LibraryOption = Annotated[
    Path | None,
    typer.Option("--library", "-l", help="Pose library JSON file"),
]


@app.command()
def walk(
    frames: Annotated[int, typer.Option("--frames", "-n", help="Number of frames", min=0)] = 60,
    fps: Annotated[float | None, typer.Option("--fps", help="Frames per second")] = None,
    start_ms: Annotated[float, typer.Option("--start-ms", help="Start time (ms)")] = 0.0,
    secondary: Annotated[
        bool, typer.Option("--secondary", help="Enable head bobble secondary motion")
    ] = False,
) -> None:
    """Synthesize walk frames and print them as JSON lines."""
    from bitruvius.config import load_config
    from bitruvius.pipeline.gait import GaitClock, WalkCycle

    config = load_config()
    rate = config.simulation.fps if fps is None else fps
    if rate <= 0:
        typer.echo("Error: --fps must be positive", err=True)
        raise typer.Exit(1)
    cycle = WalkCycle(
        config.gait.to_parameters(),
        secondary_motion=secondary or config.simulation.secondary_motion,
        clock=GaitClock(start_ms),
    )
    interval = 1000.0 / rate
    for i, pose in enumerate(cycle.run(frames, fps=rate)):
        record = {"time_ms": round(start_ms + i * interval, 3), **pose.model_dump()}
        typer.echo(json.dumps(record))


@app.command()
def library(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only show this category")
    ] = None,
    library_path: LibraryOption = None,
) -> None:
    """List the poses in the library."""
    lib = _load_library(library_path)
    entries = lib.by_category(category) if category else list(lib)
    for entry in entries:
        typer.echo(f"{entry.id:<8}{entry.category:<12}{entry.name:<24}{entry.source}")
    typer.echo(f"{len(entries)} pose{'s' if len(entries) != 1 else ''}")


@app.command()
def show(
    entry_id: Annotated[str, typer.Argument(help="Pose id")],
    library_path: LibraryOption = None,
) -> None:
    """Print the encoded data of a library pose."""
    entry = _find_entry(entry_id, library_path)
    typer.echo(entry.data)


@app.command()
def mirror(
    data: Annotated[str, typer.Argument(help="Encoded pose string")],
) -> None:
    """Print the left/right mirrored form of an encoded pose."""
    from bitruvius.pipeline.mirror import mirror_encoded

    typer.echo(mirror_encoded(data))


@app.command()
def joints(
    entry_id: Annotated[str, typer.Argument(help="Pose id")],
    pin: Annotated[str, typer.Option("--pin", "-p", help="Anchor held in place")] = "root",
    rotation: Annotated[
        float | None, typer.Option("--rotation", "-r", help="Override body rotation (deg)")
    ] = None,
    library_path: LibraryOption = None,
) -> None:
    """Print the anchor positions of a library pose as JSON."""
    from bitruvius.config import load_config
    from bitruvius.models.pose import Vector2D
    from bitruvius.models.skeleton import build_mannequin_topology
    from bitruvius.pipeline.codec import decode_pose
    from bitruvius.pipeline.kinematics import joint_positions, mannequin_rotations

    entry = _find_entry(entry_id, library_path)
    pose = decode_pose(entry.data)
    topology = build_mannequin_topology(load_config().render.mannequin_base_unit)
    body_rotation = pose.rotation("body_rotation") if rotation is None else rotation
    try:
        points = joint_positions(
            pose.root or Vector2D(),
            body_rotation,
            mannequin_rotations(pose),
            topology,
            pin,
            offsets=pose.offsets,
        )
    except KeyError:
        typer.echo(f"Error: unknown anchor: {pin}", err=True)
        raise typer.Exit(1) from None
    out = {name: [round(p.x, 2), round(p.y, 2)] for name, p in points.items()}
    typer.echo(json.dumps(out, indent=2))


@app.command()
def render(
    entry_id: Annotated[str, typer.Argument(help="Pose id")],
    output: Annotated[Path, typer.Argument(help="Output PNG path")],
    pin: Annotated[str, typer.Option("--pin", "-p", help="Anchor held in place")] = "root",
    rotation: Annotated[
        float | None, typer.Option("--rotation", "-r", help="Override body rotation (deg)")
    ] = None,
    library_path: LibraryOption = None,
) -> None:
    """Render a library pose to a PNG stick figure."""
    from bitruvius.config import load_config
    from bitruvius.models.skeleton import build_mannequin_topology
    from bitruvius.pipeline.codec import decode_pose
    from bitruvius.pipeline.render import render_mannequin_pose

    config = load_config()
    entry = _find_entry(entry_id, library_path)
    try:
        render_mannequin_pose(
            decode_pose(entry.data),
            output,
            pin=pin,
            body_rotation=rotation,
            topology=build_mannequin_topology(config.render.mannequin_base_unit),
            scale=config.render.scale,
            line_width=config.render.line_width,
            point_radius=config.render.point_radius,
        )
    except KeyError:
        typer.echo(f"Error: unknown anchor: {pin}", err=True)
        raise typer.Exit(1) from None
    typer.echo(f"Saved: {output}")


@app.command("render-walk")
def render_walk(
    output: Annotated[Path, typer.Argument(help="Output PNG path")],
    time_ms: Annotated[float, typer.Option("--time-ms", "-t", help="Simulation time (ms)")] = 0.0,
) -> None:
    """Render one walk frame to a PNG stick figure."""
    from bitruvius.config import load_config
    from bitruvius.pipeline.gait import synthesize
    from bitruvius.pipeline.render import render_walk_frame

    config = load_config()
    pose, _ = synthesize(time_ms, config.gait.to_parameters())
    render_walk_frame(
        pose,
        output,
        base_unit=config.render.base_unit,
        floor_y=config.render.floor_y,
        scale=config.render.scale,
        line_width=config.render.line_width,
        point_radius=config.render.point_radius,
    )
    typer.echo(f"Saved: {output}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version", is_eager=True)
    ] = False,
) -> None:
    """Bitruvius - procedural walk cycles and posable mannequin kinematics."""
    if version:
        from bitruvius import __version__

        typer.echo(f"bitruvius {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
