"""Skeleton topology: bone hierarchy, limb chains and rig geometry.

A topology is an ordered set of :class:`BoneSpec` records. Each bone pivots on
a joint, hangs off its parent's end point (or the figure root when it has no
parent) and extends ``length`` units along its own orientation. Offsets are
expressed in the parent's local frame.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from functools import cached_property

from bitruvius.models.enums import PartName, WalkBone
from bitruvius.models.gait import Proportions
from bitruvius.models.pose import Vector2D


class TopologyError(ValueError):
    """Raised when a bone hierarchy is malformed."""


# Segment sizes as multiples of the base head unit ``H``.
ANATOMY: dict[str, float] = {
    "HEAD": 1.0,
    "HEAD_WIDTH": 0.8,
    "HEAD_NECK_GAP_OFFSET": 0.1,
    "COLLAR": 0.4,
    "COLLAR_WIDTH": 2 / 3,
    "TORSO": 1.2,
    "TORSO_WIDTH": 0.65,
    "WAIST": 1.0,
    "WAIST_WIDTH": 0.85,
    "UPPER_ARM": 1.8,
    "LOWER_ARM": 1.4,
    "HAND": 0.8,
    "LEG_UPPER": 2.2,
    "LEG_LOWER": 1.8,
    "FOOT": 1.0,
}

# Attachment points, also in ``H`` units.
RIGGING: dict[str, float] = {
    "R_SHOULDER_X": ANATOMY["COLLAR_WIDTH"] / 2.1,
    "L_SHOULDER_X": -ANATOMY["COLLAR_WIDTH"] / 2.1,
    "SHOULDER_Y": ANATOMY["COLLAR"],
    "COLLAR_OFFSET_Y": ANATOMY["COLLAR"] * 0.15,
    "HIP_X": ANATOMY["WAIST_WIDTH"] * 0.4,
    "HIP_Y": ANATOMY["WAIST"] * 0.2,
}

# Distance from the root down to the sole, in ``H`` units.
LOCAL_FLOOR_Y = ANATOMY["LEG_UPPER"] + ANATOMY["LEG_LOWER"] + ANATOMY["FOOT"]

PARENT_MAP: dict[PartName, PartName] = {
    PartName.TORSO: PartName.WAIST,
    PartName.COLLAR: PartName.TORSO,
    PartName.HEAD: PartName.COLLAR,
    PartName.R_SHOULDER: PartName.COLLAR,
    PartName.L_SHOULDER: PartName.COLLAR,
    PartName.R_ELBOW: PartName.R_SHOULDER,
    PartName.L_ELBOW: PartName.L_SHOULDER,
    PartName.R_WRIST: PartName.R_ELBOW,
    PartName.L_WRIST: PartName.L_ELBOW,
    PartName.R_SHIN: PartName.R_THIGH,
    PartName.L_SHIN: PartName.L_THIGH,
    PartName.R_ANKLE: PartName.R_SHIN,
    PartName.L_ANKLE: PartName.L_SHIN,
}

CHILD_MAP: dict[PartName, list[PartName]] = {}
for _child in PartName:
    _parent = PARENT_MAP.get(_child)
    if _parent is not None:
        CHILD_MAP.setdefault(_parent, []).append(_child)

LIMB_SEQUENCES: dict[str, tuple[PartName, ...]] = {
    "r_arm": (PartName.R_SHOULDER, PartName.R_ELBOW, PartName.R_WRIST),
    "l_arm": (PartName.L_SHOULDER, PartName.L_ELBOW, PartName.L_WRIST),
    "r_leg": (PartName.R_THIGH, PartName.R_SHIN, PartName.R_ANKLE),
    "l_leg": (PartName.L_THIGH, PartName.L_SHIN, PartName.L_ANKLE),
}

# Mannequin bone -> MannequinPose field holding its rotation.
PART_POSE_KEYS: dict[PartName, str] = {part: part.value for part in PartName}
PART_POSE_KEYS.update(
    {
        PartName.R_ELBOW: "r_forearm",
        PartName.L_ELBOW: "l_forearm",
        PartName.R_SHIN: "r_calf",
        PartName.L_SHIN: "l_calf",
    }
)

# Left/right bone pairs, in limb order.
BILATERAL_PAIRS: tuple[tuple[PartName, PartName], ...] = tuple(
    zip(LIMB_SEQUENCES["l_arm"] + LIMB_SEQUENCES["l_leg"],
        LIMB_SEQUENCES["r_arm"] + LIMB_SEQUENCES["r_leg"], strict=True)
)

SPINE: tuple[PartName, ...] = (PartName.WAIST, PartName.TORSO, PartName.COLLAR, PartName.HEAD)


@dataclass(frozen=True)
class BoneSpec:
    """One rigid segment of a skeleton."""

    name: str
    parent: str | None
    length: float
    offset: Vector2D = field(default_factory=Vector2D)
    upward: bool = False

    def __post_init__(self) -> None:
        # Enum members are accepted but stored as plain strings.
        object.__setattr__(self, "name", str(self.name))
        if self.parent is not None:
            object.__setattr__(self, "parent", str(self.parent))


@dataclass(frozen=True)
class SkeletonTopology:
    """An immutable, validated bone hierarchy with named limb chains."""

    bones: tuple[BoneSpec, ...]
    limbs: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        names = [b.name for b in self.bones]
        if len(set(names)) != len(names):
            msg = f"duplicate bone names in topology: {sorted(names)}"
            raise TopologyError(msg)
        known = set(names)
        for bone in self.bones:
            if bone.parent is not None and bone.parent not in known:
                msg = f"bone '{bone.name}' has unknown parent '{bone.parent}'"
                raise TopologyError(msg)
        for limb, chain in self.limbs.items():
            missing = [n for n in chain if n not in known]
            if missing:
                msg = f"limb '{limb}' references unknown bones: {missing}"
                raise TopologyError(msg)
        # Touch the traversal so cycles fail at construction time.
        _ = self.order

    @cached_property
    def _by_name(self) -> dict[str, BoneSpec]:
        return {b.name: b for b in self.bones}

    @cached_property
    def order(self) -> tuple[BoneSpec, ...]:
        """Bones sorted so every parent precedes its children.

        Ties keep declaration order.
        """
        placed: set[str] = set()
        result: list[BoneSpec] = []
        pending = list(self.bones)
        while pending:
            ready = [b for b in pending if b.parent is None or b.parent in placed]
            if not ready:
                stuck = ", ".join(b.name for b in pending)
                msg = f"cycle in bone hierarchy involving: {stuck}"
                raise TopologyError(msg)
            for bone in ready:
                placed.add(bone.name)
                result.append(bone)
            pending = [b for b in pending if b.name not in placed]
        return tuple(result)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(b.name for b in self.bones)

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(b.name for b in self.bones if b.parent is None)

    @property
    def leaves(self) -> tuple[str, ...]:
        parents = {b.parent for b in self.bones}
        return tuple(b.name for b in self.bones if b.name not in parents)

    def bone(self, name: str) -> BoneSpec:
        return self._by_name[name]

    def parent(self, name: str) -> str | None:
        return self._by_name[name].parent

    def children(self, name: str) -> list[str]:
        return [b.name for b in self.bones if b.parent == name]

    def ancestors(self, name: str) -> list[str]:
        """Chain of parents from *name* up to its root, nearest first."""
        result: list[str] = []
        current = self._by_name[name].parent
        while current is not None:
            result.append(current)
            current = self._by_name[current].parent
        return result

    def without_offsets(self) -> SkeletonTopology:
        """Copy of this topology with every anchor offset zeroed."""
        bones = tuple(replace(b, offset=Vector2D()) for b in self.bones)
        return SkeletonTopology(bones=bones, limbs=dict(self.limbs))


def build_mannequin_topology(base_unit: float = 100.0) -> SkeletonTopology:
    """Topology of the posable mannequin used for static poses."""
    h = base_unit
    a = ANATOMY
    r = RIGGING
    p = PartName
    bones = (
        BoneSpec(p.WAIST, None, a["WAIST"] * h, upward=True),
        BoneSpec(p.TORSO, p.WAIST, a["TORSO"] * h, upward=True),
        BoneSpec(p.COLLAR, p.TORSO, a["COLLAR"] * h,
                 offset=Vector2D(y=r["COLLAR_OFFSET_Y"] * h), upward=True),
        BoneSpec(p.HEAD, p.COLLAR, a["HEAD"] * h,
                 offset=Vector2D(y=-a["HEAD_NECK_GAP_OFFSET"] * h), upward=True),
        BoneSpec(p.R_SHOULDER, p.COLLAR, a["UPPER_ARM"] * h,
                 offset=Vector2D(x=r["R_SHOULDER_X"] * h, y=r["SHOULDER_Y"] * h)),
        BoneSpec(p.R_ELBOW, p.R_SHOULDER, a["LOWER_ARM"] * h),
        BoneSpec(p.R_WRIST, p.R_ELBOW, a["HAND"] * h),
        BoneSpec(p.L_SHOULDER, p.COLLAR, a["UPPER_ARM"] * h,
                 offset=Vector2D(x=r["L_SHOULDER_X"] * h, y=r["SHOULDER_Y"] * h)),
        BoneSpec(p.L_ELBOW, p.L_SHOULDER, a["LOWER_ARM"] * h),
        BoneSpec(p.L_WRIST, p.L_ELBOW, a["HAND"] * h),
        BoneSpec(p.R_THIGH, None, a["LEG_UPPER"] * h),
        BoneSpec(p.R_SHIN, p.R_THIGH, a["LEG_LOWER"] * h),
        BoneSpec(p.R_ANKLE, p.R_SHIN, a["FOOT"] * h),
        BoneSpec(p.L_THIGH, None, a["LEG_UPPER"] * h),
        BoneSpec(p.L_SHIN, p.L_THIGH, a["LEG_LOWER"] * h),
        BoneSpec(p.L_ANKLE, p.L_SHIN, a["FOOT"] * h),
    )
    limbs = {k: tuple(str(n) for n in v) for k, v in LIMB_SEQUENCES.items()}
    return SkeletonTopology(bones=bones, limbs=limbs)


def build_walker_topology(
    base_unit: float = 150.0,
    proportions: Proportions | None = None,
) -> SkeletonTopology:
    """Topology of the walking figure.

    Segment lengths follow ``proportions``; anchor offsets only follow the
    base unit. The hips attach straight to the figure root.
    """
    props = proportions or Proportions()
    h = base_unit
    a = ANATOMY
    r = RIGGING
    w = WalkBone
    bones = (
        BoneSpec(w.WAIST, None, a["WAIST"] * h * props.pelvis.h, upward=True),
        BoneSpec(w.TORSO, w.WAIST, a["TORSO"] * h * props.torso.h, upward=True),
        BoneSpec(w.COLLAR, w.TORSO, a["COLLAR"] * h * props.collar.h,
                 offset=Vector2D(y=r["COLLAR_OFFSET_Y"] * h), upward=True),
        BoneSpec(w.NECK, w.COLLAR, a["HEAD"] * h * props.head.h,
                 offset=Vector2D(y=-a["HEAD_NECK_GAP_OFFSET"] * h), upward=True),
        BoneSpec(w.R_SHOULDER, w.COLLAR, a["UPPER_ARM"] * h * props.arms.h,
                 offset=Vector2D(x=r["R_SHOULDER_X"] * h, y=r["SHOULDER_Y"] * h)),
        BoneSpec(w.R_ELBOW, w.R_SHOULDER, a["LOWER_ARM"] * h * props.arms.h),
        BoneSpec(w.R_HAND, w.R_ELBOW, a["HAND"] * h * props.hand.h),
        BoneSpec(w.L_SHOULDER, w.COLLAR, a["UPPER_ARM"] * h * props.arms.h,
                 offset=Vector2D(x=r["L_SHOULDER_X"] * h, y=r["SHOULDER_Y"] * h)),
        BoneSpec(w.L_ELBOW, w.L_SHOULDER, a["LOWER_ARM"] * h * props.arms.h),
        BoneSpec(w.L_HAND, w.L_ELBOW, a["HAND"] * h * props.hand.h),
        BoneSpec(w.L_HIP, None, a["LEG_UPPER"] * h * props.legs.h,
                 offset=Vector2D(x=-r["HIP_X"] * h, y=r["HIP_Y"] * h)),
        BoneSpec(w.L_KNEE, w.L_HIP, a["LEG_LOWER"] * h * props.legs.h),
        BoneSpec(w.L_FOOT, w.L_KNEE, a["FOOT"] * h * props.foot.h),
        BoneSpec(w.R_HIP, None, a["LEG_UPPER"] * h * props.legs.h,
                 offset=Vector2D(x=r["HIP_X"] * h, y=r["HIP_Y"] * h)),
        BoneSpec(w.R_KNEE, w.R_HIP, a["LEG_LOWER"] * h * props.legs.h),
        BoneSpec(w.R_FOOT, w.R_KNEE, a["FOOT"] * h * props.foot.h),
    )
    limbs = {
        "r_arm": (w.R_SHOULDER.value, w.R_ELBOW.value, w.R_HAND.value),
        "l_arm": (w.L_SHOULDER.value, w.L_ELBOW.value, w.L_HAND.value),
        "r_leg": (w.R_HIP.value, w.R_KNEE.value, w.R_FOOT.value),
        "l_leg": (w.L_HIP.value, w.L_KNEE.value, w.L_FOOT.value),
    }
    return SkeletonTopology(bones=bones, limbs=limbs)


MANNEQUIN_TOPOLOGY = build_mannequin_topology()
WALKER_TOPOLOGY = build_walker_topology()
