"""Forward kinematics: local bone rotations -> global joint placements.

Bones are visited in topological order. Each bone starts at its parent's end
point (or the figure root), shifted by its anchor offset rotated into the
parent's frame, and inherits the parent's global angle plus its own local
rotation. Pin compensation keeps one anchor fixed in world space while the
whole body rotates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bitruvius.angles import add_vec, rotate_vec, sub_vec
from bitruvius.models.pose import Vector2D
from bitruvius.models.skeleton import PART_POSE_KEYS, PartName
from bitruvius.pipeline.gait import apply_pivot_offsets

if TYPE_CHECKING:
    from bitruvius.models.gait import PivotOffsets, WalkPose
    from bitruvius.models.pose import MannequinPose
    from bitruvius.models.skeleton import SkeletonTopology

logger = logging.getLogger(__name__)

ROOT_ANCHOR = "root"
TIP_SUFFIX = "_tip"


@dataclass(frozen=True)
class JointState:
    """Global placement of one bone."""

    start: Vector2D
    end: Vector2D
    angle: float


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate(
    root: Vector2D,
    body_rotation: float,
    rotations: Mapping[str, float],
    topology: SkeletonTopology,
    *,
    offsets: Mapping[str, Vector2D] | None = None,
) -> dict[str, JointState]:
    """Resolve every bone of *topology* into global coordinates.

    ``rotations`` maps bone names to local rotations in degrees; missing bones
    rotate by 0. ``offsets`` adds per-bone anchor offsets on top of the
    topology's own, in the parent's frame.
    """
    extra = offsets or {}
    states: dict[str, JointState] = {}
    for bone in topology.order:
        if bone.parent is None:
            parent_end, parent_angle = root, body_rotation
        else:
            parent = states[bone.parent]
            parent_end, parent_angle = parent.end, parent.angle

        offset = bone.offset
        if bone.name in extra:
            offset = add_vec(offset, extra[bone.name])
        start = add_vec(parent_end, rotate_vec(offset.x, offset.y, parent_angle))

        angle = parent_angle + rotations.get(bone.name, 0.0)
        direction = -1.0 if bone.upward else 1.0
        end = add_vec(start, rotate_vec(0.0, bone.length * direction, angle))
        states[bone.name] = JointState(start=start, end=end, angle=angle)
    return states


def global_angles(
    rotations: Mapping[str, float],
    topology: SkeletonTopology,
    body_rotation: float = 0.0,
) -> dict[str, float]:
    """Accumulated global angle of every bone, without positions."""
    angles: dict[str, float] = {}
    for bone in topology.order:
        base = body_rotation if bone.parent is None else angles[bone.parent]
        angles[bone.name] = base + rotations.get(bone.name, 0.0)
    return angles


def anchor_positions(
    states: Mapping[str, JointState],
    topology: SkeletonTopology,
    root: Vector2D,
) -> dict[str, Vector2D]:
    """Flatten joint states into named anchor points.

    Every bone contributes its pivot; leaf bones also contribute their far end
    as ``<name>_tip``.
    """
    points: dict[str, Vector2D] = {ROOT_ANCHOR: root}
    for name, state in states.items():
        points[name] = state.start
    for leaf in topology.leaves:
        points[f"{leaf}{TIP_SUFFIX}"] = states[leaf].end
    return points


def evaluate_pinned(
    root: Vector2D,
    body_rotation: float,
    rotations: Mapping[str, float],
    topology: SkeletonTopology,
    pin: str = ROOT_ANCHOR,
    *,
    offsets: Mapping[str, Vector2D] | None = None,
) -> tuple[dict[str, JointState], Vector2D]:
    """Evaluate with *pin* held where it would sit at zero body rotation.

    Returns the joint states and the compensated root actually used. Pinning
    the root is plain evaluation. Any other anchor triggers a two-pass
    correction: the root is translated by the difference between the pin's
    unrotated and rotated positions, which is exact because a rigid body
    rotation and a root translation commute.

    Raises ``KeyError`` for an anchor the topology does not define.
    """
    if pin == ROOT_ANCHOR:
        return evaluate(root, body_rotation, rotations, topology, offsets=offsets), root

    unrotated = evaluate(root, 0.0, rotations, topology, offsets=offsets)
    target = _anchor(unrotated, topology, pin)

    rotated = evaluate(root, body_rotation, rotations, topology, offsets=offsets)
    displaced = _anchor(rotated, topology, pin)

    compensated_root = add_vec(root, sub_vec(target, displaced))
    logger.debug(
        "Pin '%s': root shifted by (%.3f, %.3f)",
        pin,
        compensated_root.x - root.x,
        compensated_root.y - root.y,
    )
    states = evaluate(compensated_root, body_rotation, rotations, topology, offsets=offsets)
    return states, compensated_root


def joint_positions(
    root: Vector2D,
    body_rotation: float,
    rotations: Mapping[str, float],
    topology: SkeletonTopology,
    pin: str = ROOT_ANCHOR,
    *,
    offsets: Mapping[str, Vector2D] | None = None,
) -> dict[str, Vector2D]:
    """Named anchor positions of the figure, with optional pin compensation."""
    states, used_root = evaluate_pinned(
        root, body_rotation, rotations, topology, pin, offsets=offsets,
    )
    return anchor_positions(states, topology, used_root)


def mannequin_rotations(pose: MannequinPose) -> dict[str, float]:
    """Map a static pose onto mannequin bone rotations (absent values are 0)."""
    return {str(part): pose.rotation(PART_POSE_KEYS[part]) for part in PartName}


def walker_rotations(pose: WalkPose, pivot_offsets: PivotOffsets | None = None) -> dict[str, float]:
    """Map a synthesized walk pose onto walker bone rotations.

    The waist carries no rotation of its own; every other bone takes the pose
    value of the same name plus its pivot offset.
    """
    rotations = apply_pivot_offsets(pose, pivot_offsets)
    rotations["waist"] = 0.0
    return rotations


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _anchor(
    states: Mapping[str, JointState],
    topology: SkeletonTopology,
    name: str,
) -> Vector2D:
    if name.endswith(TIP_SUFFIX):
        bone = name[: -len(TIP_SUFFIX)]
        if bone in states and bone in topology.leaves:
            return states[bone].end
    if name in states:
        return states[name].start
    msg = f"unknown anchor: {name}"
    raise KeyError(msg)
