"""Bitruvius motion pipeline - gait synthesis, kinematics and pose encoding."""

from bitruvius.pipeline.codec import decode_pose, encode_pose
from bitruvius.pipeline.gait import GaitClock, WalkCycle, apply_pivot_offsets, synthesize
from bitruvius.pipeline.kinematics import (
    JointState,
    evaluate,
    evaluate_pinned,
    global_angles,
    joint_positions,
    mannequin_rotations,
    walker_rotations,
)
from bitruvius.pipeline.mirror import mirror_encoded, mirror_entry, mirror_pose

__all__ = [
    "GaitClock",
    "JointState",
    "WalkCycle",
    "apply_pivot_offsets",
    "decode_pose",
    "encode_pose",
    "evaluate",
    "evaluate_pinned",
    "global_angles",
    "joint_positions",
    "mannequin_rotations",
    "mirror_encoded",
    "mirror_entry",
    "mirror_pose",
    "synthesize",
    "walker_rotations",
]
