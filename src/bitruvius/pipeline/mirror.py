"""Left/right reflection of mannequin poses."""

from __future__ import annotations

from bitruvius.models.pose import MannequinPose, PoseLibraryEntry, Vector2D
from bitruvius.models.skeleton import BILATERAL_PAIRS, PART_POSE_KEYS
from bitruvius.pipeline.codec import decode_pose, encode_pose

MIRROR_ID_SUFFIX = "_R"
MIRROR_NAME_PREFIX = "RIGHT"
MIRROR_SOURCE = "Bitruvius Generated"


def mirror_pose(pose: MannequinPose) -> MannequinPose:
    """Reflect *pose* across the vertical axis.

    The root x and the body rotation change sign. Each left/right limb pair
    swaps sides with its sign inverted. Spine rotations are kept as they are.
    A side that is absent in *pose* stays absent on the opposite side.
    """
    update: dict[str, object] = {}
    if pose.root is not None:
        update["root"] = Vector2D(x=-pose.root.x, y=pose.root.y)
    if pose.body_rotation is not None:
        update["body_rotation"] = -pose.body_rotation

    for left_part, right_part in BILATERAL_PAIRS:
        left_key = PART_POSE_KEYS[left_part]
        right_key = PART_POSE_KEYS[right_part]
        left = getattr(pose, left_key)
        right = getattr(pose, right_key)
        update[right_key] = None if left is None else -left
        update[left_key] = None if right is None else -right

    return pose.model_copy(update=update)


def mirror_encoded(data: str) -> str:
    """Mirror an encoded pose string."""
    return encode_pose(mirror_pose(decode_pose(data)))


def mirror_entry(entry: PoseLibraryEntry) -> PoseLibraryEntry:
    """Derive the right-handed counterpart of a library entry."""
    return PoseLibraryEntry(
        id=f"{entry.id}{MIRROR_ID_SUFFIX}",
        category=entry.category,
        name=f"{MIRROR_NAME_PREFIX} {entry.name}",
        source=MIRROR_SOURCE,
        data=mirror_encoded(entry.data),
    )
