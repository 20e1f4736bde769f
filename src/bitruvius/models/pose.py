"""Static pose models: mannequin joint angles and pose library records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Vector2D(BaseModel):
    """A point or offset in the figure's 2D plane (+y points down)."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


# Rotation fields of a mannequin pose, in the order they are declared below.
ROTATION_FIELDS: tuple[str, ...] = (
    "body_rotation",
    "waist",
    "torso",
    "collar",
    "head",
    "l_shoulder",
    "l_forearm",
    "l_wrist",
    "r_shoulder",
    "r_forearm",
    "r_wrist",
    "l_thigh",
    "l_calf",
    "l_ankle",
    "r_thigh",
    "r_calf",
    "r_ankle",
)


class MannequinPose(BaseModel):
    """Joint angles (degrees) of the posable mannequin.

    Every field is optional: a pose decoded from a string only carries the
    fields that were present in it. ``offsets`` are extra per-part anchor
    offsets in the parent bone's frame and are never serialised.
    """

    root: Vector2D | None = None
    body_rotation: float | None = None
    waist: float | None = None
    torso: float | None = None
    collar: float | None = None
    head: float | None = None
    l_shoulder: float | None = None
    l_forearm: float | None = None
    l_wrist: float | None = None
    r_shoulder: float | None = None
    r_forearm: float | None = None
    r_wrist: float | None = None
    l_thigh: float | None = None
    l_calf: float | None = None
    l_ankle: float | None = None
    r_thigh: float | None = None
    r_calf: float | None = None
    r_ankle: float | None = None
    offsets: dict[str, Vector2D] = Field(default_factory=dict)

    def rotation(self, name: str) -> float:
        """Return the rotation for *name*, treating an absent field as 0."""
        value = getattr(self, name)
        return 0.0 if value is None else value

    def present_fields(self) -> list[str]:
        """Names of the serialisable fields that carry a value."""
        names = ["root", *ROTATION_FIELDS]
        return [n for n in names if getattr(self, n) is not None]


class PoseLibraryEntry(BaseModel):
    """A single record of the pose library."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    category: str = Field(alias="cat")
    name: str
    source: str = Field(alias="src")
    data: str
