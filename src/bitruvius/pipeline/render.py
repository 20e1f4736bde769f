"""Rasterise forward-kinematics output to a stick-figure PNG."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from bitruvius.models.pose import Vector2D
from bitruvius.models.skeleton import (
    LOCAL_FLOOR_Y,
    MANNEQUIN_TOPOLOGY,
    build_walker_topology,
)
from bitruvius.pipeline.kinematics import (
    ROOT_ANCHOR,
    evaluate,
    evaluate_pinned,
    mannequin_rotations,
    walker_rotations,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from bitruvius.models.gait import PivotOffsets, Proportions, WalkPose
    from bitruvius.models.pose import MannequinPose
    from bitruvius.models.skeleton import SkeletonTopology
    from bitruvius.pipeline.kinematics import JointState

logger = logging.getLogger(__name__)

# World-space window (left, top, width, height); +y points down.
DEFAULT_VIEW_BOX: tuple[float, float, float, float] = (-500.0, -1500.0, 1000.0, 2000.0)
DEFAULT_FLOOR_Y = 500.0

# One colour per bone, cycled (OpenPose-like palette).
BONE_COLOURS: list[tuple[int, int, int]] = [
    (255, 0, 0),
    (255, 85, 0),
    (255, 170, 0),
    (255, 255, 0),
    (170, 255, 0),
    (85, 255, 0),
    (0, 255, 0),
    (0, 255, 85),
    (0, 255, 170),
    (0, 255, 255),
    (0, 170, 255),
    (0, 85, 255),
    (0, 0, 255),
    (85, 0, 255),
    (170, 0, 255),
    (255, 0, 255),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_skeleton(
    states: Mapping[str, JointState],
    output_path: Path,
    *,
    view_box: tuple[float, float, float, float] | None = None,
    scale: float = 0.5,
    floor_y: float | None = DEFAULT_FLOOR_Y,
    bg_colour: tuple[int, int, int] = (0, 0, 0),
    line_width: int = 4,
    point_radius: int = 6,
) -> Path:
    """Draw every bone as a line and every pivot as a dot, then save a PNG.

    Without a ``view_box`` the window is fitted around the figure.
    """
    left, top, view_w, view_h = view_box or fit_view_box(states)
    width = max(int(view_w * scale), 1)
    height = max(int(view_h * scale), 1)
    img = Image.new("RGB", (width, height), bg_colour)
    draw = ImageDraw.Draw(img)

    def to_px(p: Vector2D) -> tuple[int, int]:
        return int((p.x - left) * scale), int((p.y - top) * scale)

    if floor_y is not None:
        fy = int((floor_y - top) * scale)
        draw.line([(0, fy), (width, fy)], fill=(60, 60, 60), width=max(line_width // 2, 1))

    for idx, state in enumerate(states.values()):
        colour = BONE_COLOURS[idx % len(BONE_COLOURS)]
        draw.line([to_px(state.start), to_px(state.end)], fill=colour, width=line_width)

    for state in states.values():
        px, py = to_px(state.start)
        r = point_radius
        draw.ellipse([px - r, py - r, px + r, py + r], fill=(255, 255, 255))

    img.save(output_path, "PNG")
    logger.info("Rendered %s (%dx%d)", output_path, width, height)
    return output_path


def fit_view_box(
    states: Mapping[str, JointState],
    margin: float = 50.0,
) -> tuple[float, float, float, float]:
    """Smallest window holding every bone end point, padded by *margin*."""
    xs = [v for s in states.values() for v in (s.start.x, s.end.x)]
    ys = [v for s in states.values() for v in (s.start.y, s.end.y)]
    if not xs:
        return DEFAULT_VIEW_BOX
    left = min(xs) - margin
    top = min(ys) - margin
    return left, top, max(xs) - left + margin, max(ys) - top + margin


def walker_root(pose: WalkPose, base_unit: float, floor_y: float = DEFAULT_FLOOR_Y) -> Vector2D:
    """World position of the walker's root: feet on the floor, dropped by ``y_offset``."""
    return Vector2D(x=0.0, y=floor_y - LOCAL_FLOOR_Y * base_unit + pose.y_offset)


def render_walk_frame(
    pose: WalkPose,
    output_path: Path,
    *,
    base_unit: float = 150.0,
    proportions: Proportions | None = None,
    pivot_offsets: PivotOffsets | None = None,
    floor_y: float = DEFAULT_FLOOR_Y,
    **kwargs: object,
) -> Path:
    """Render one synthesized walk frame standing on *floor_y*."""
    kwargs.setdefault("view_box", DEFAULT_VIEW_BOX)
    topology = build_walker_topology(base_unit, proportions)
    states = evaluate(
        walker_root(pose, base_unit, floor_y),
        0.0,
        walker_rotations(pose, pivot_offsets),
        topology,
    )
    return render_skeleton(states, output_path, floor_y=floor_y, **kwargs)  # type: ignore[arg-type]


def render_mannequin_pose(
    pose: MannequinPose,
    output_path: Path,
    *,
    pin: str = ROOT_ANCHOR,
    body_rotation: float | None = None,
    topology: SkeletonTopology = MANNEQUIN_TOPOLOGY,
    **kwargs: object,
) -> Path:
    """Render a static pose, optionally pinned to an anchor."""
    kwargs.setdefault("floor_y", None)
    root = pose.root or Vector2D()
    rotation = pose.rotation("body_rotation") if body_rotation is None else body_rotation
    states, _ = evaluate_pinned(
        root,
        rotation,
        mannequin_rotations(pose),
        topology,
        pin,
        offsets=pose.offsets,
    )
    return render_skeleton(states, output_path, **kwargs)  # type: ignore[arg-type]
