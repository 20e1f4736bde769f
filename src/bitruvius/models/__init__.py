"""Bitruvius data models - pure Pydantic and dataclasses, no I/O."""

from bitruvius.models.enums import PartName, WalkBone
from bitruvius.models.gait import (
    GAIT_RANGES,
    WALK_JOINTS,
    GaitParameters,
    HeadSpring,
    PieceScale,
    PivotOffsets,
    Proportions,
    WalkPose,
)
from bitruvius.models.pose import MannequinPose, PoseLibraryEntry, Vector2D
from bitruvius.models.skeleton import (
    MANNEQUIN_TOPOLOGY,
    WALKER_TOPOLOGY,
    BoneSpec,
    SkeletonTopology,
    TopologyError,
    build_mannequin_topology,
    build_walker_topology,
)

__all__ = [
    "GAIT_RANGES",
    "MANNEQUIN_TOPOLOGY",
    "WALKER_TOPOLOGY",
    "WALK_JOINTS",
    "BoneSpec",
    "GaitParameters",
    "HeadSpring",
    "MannequinPose",
    "PartName",
    "PieceScale",
    "PivotOffsets",
    "PoseLibraryEntry",
    "Proportions",
    "SkeletonTopology",
    "TopologyError",
    "Vector2D",
    "WalkBone",
    "WalkPose",
    "build_mannequin_topology",
    "build_walker_topology",
]
