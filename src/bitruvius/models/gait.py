"""Walking-figure models: gait parameters, synthesized poses and offsets."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Documented slider ranges. The synthesizer itself does not enforce them.
GAIT_RANGES: dict[str, tuple[float, float]] = {
    "intensity": (0.0, 2.0),
    "stride": (0.0, 2.0),
    "lean": (-1.0, 1.0),
    "frequency": (0.0, 4.0),
    "gravity": (0.0, 2.0),
    "bounce": (0.0, 2.0),
    "bends": (0.0, 10.0),
    "head_spin": (-1.0, 1.0),
    "mood": (-1.0, 1.0),
    "ground_drag": (0.0, 2.0),
}

# Joint keys shared by WalkPose and PivotOffsets.
WALK_JOINTS: tuple[str, ...] = (
    "neck",
    "collar",
    "torso",
    "l_shoulder",
    "r_shoulder",
    "l_elbow",
    "r_elbow",
    "l_hand",
    "r_hand",
    "l_hip",
    "r_hip",
    "l_knee",
    "r_knee",
    "l_foot",
    "r_foot",
)


class GaitParameters(BaseModel):
    """The ten continuous gait sliders driving the walk cycle."""

    model_config = ConfigDict(frozen=True)

    intensity: float = 0.5
    stride: float = 0.6
    lean: float = 0.1
    frequency: float = 1.0
    gravity: float = 0.5
    bounce: float = 0.4
    bends: float = 0.7
    head_spin: float = 0.0
    mood: float = 0.5
    ground_drag: float = 0.2

    def clamped(self) -> GaitParameters:
        """Return a copy with every parameter clamped to its documented range."""
        data = {
            key: min(max(getattr(self, key), lo), hi)
            for key, (lo, hi) in GAIT_RANGES.items()
        }
        return GaitParameters(**data)


class WalkPose(BaseModel):
    """One frame of the walking figure: joint rotations in degrees.

    ``stride_phase`` is the sine of the gait phase and ``y_offset`` the
    vertical body drop. Values are never wrapped.
    """

    model_config = ConfigDict(frozen=True)

    neck: float = 0.0
    collar: float = 0.0
    torso: float = 0.0
    l_shoulder: float = 0.0
    r_shoulder: float = 0.0
    l_elbow: float = 0.0
    r_elbow: float = 0.0
    l_hand: float = 0.0
    r_hand: float = 0.0
    l_hip: float = 0.0
    r_hip: float = 0.0
    l_knee: float = 0.0
    r_knee: float = 0.0
    l_foot: float = 0.0
    r_foot: float = 0.0
    stride_phase: float = Field(default=0.0, ge=-1.0, le=1.0)
    y_offset: float = 0.0

    def joint_angles(self) -> dict[str, float]:
        return {key: getattr(self, key) for key in WALK_JOINTS}


class PivotOffsets(BaseModel):
    """User-set additive rotation per joint, in whole degrees."""

    neck: int = 0
    collar: int = 0
    torso: int = 0
    l_shoulder: int = 0
    r_shoulder: int = 0
    l_elbow: int = 0
    r_elbow: int = 0
    l_hand: int = 0
    r_hand: int = 0
    l_hip: int = 0
    r_hip: int = 0
    l_knee: int = 0
    r_knee: int = 0
    l_foot: int = 0
    r_foot: int = 0


class HeadSpring(BaseModel):
    """State of the secondary-motion spring that drives the head bobble."""

    model_config = ConfigDict(frozen=True)

    position: float = 0.0
    velocity: float = 0.0


class PieceScale(BaseModel):
    w: float = 1.0
    h: float = 1.0


class Proportions(BaseModel):
    """Per-piece scale factors. Only ``h`` changes segment lengths."""

    head: PieceScale = Field(default_factory=PieceScale)
    collar: PieceScale = Field(default_factory=PieceScale)
    torso: PieceScale = Field(default_factory=PieceScale)
    pelvis: PieceScale = Field(default_factory=PieceScale)
    arms: PieceScale = Field(default_factory=PieceScale)
    hand: PieceScale = Field(default_factory=lambda: PieceScale(w=0.5))
    legs: PieceScale = Field(default_factory=PieceScale)
    foot: PieceScale = Field(default_factory=lambda: PieceScale(w=0.5))
