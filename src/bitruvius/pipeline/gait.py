"""Procedural walk cycle: gait parameters + time -> joint rotations."""

from __future__ import annotations

import logging
import math

from bitruvius.models.gait import (
    WALK_JOINTS,
    GaitParameters,
    HeadSpring,
    PivotOffsets,
    WalkPose,
)

logger = logging.getLogger(__name__)

# Phase advance per millisecond at frequency 1.0.
PHASE_RATE = 0.005

# Head spring constants. Changing them alters the look of the bobble.
SPRING_STIFFNESS = 0.12
SPRING_DAMPING = 0.82
HEAD_FOLLOW = 0.6


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def gait_phase(time_ms: float, frequency: float) -> float:
    """Return the gait phase in ``[0, 2*pi)`` for *time_ms*."""
    return (time_ms * PHASE_RATE * frequency) % math.tau


def calc_ankle_ik(s: float, hip: float, knee: float, torso: float, ground_drag: float) -> float:
    """Approximate the foot angle from its leg's stride value.

    During stance (``s < 0``) the foot cancels the accumulated hip, knee and
    torso rotation so it stays flat. During swing it lifts with the stride and
    trails by an amount proportional to ground drag.
    """
    if s < 0:
        return -(hip + knee + torso)
    return 20 * s + (1 - s) * ground_drag * 40


def advance_head_spring(spring: HeadSpring, target: float) -> HeadSpring:
    """Advance the head spring by one frame toward *target*."""
    force = (target - spring.position) * SPRING_STIFFNESS
    velocity = spring.velocity + force
    velocity *= SPRING_DAMPING
    return HeadSpring(position=spring.position + velocity, velocity=velocity)


def synthesize(
    time_ms: float,
    gait: GaitParameters,
    *,
    secondary_motion: bool = False,
    spring: HeadSpring | None = None,
) -> tuple[WalkPose, HeadSpring]:
    """Compute the walking figure's pose at *time_ms*.

    Returns the pose and the spring state to pass into the next frame. When
    ``secondary_motion`` is off the spring is returned untouched and the head
    bobble contributes nothing.
    """
    if spring is None:
        spring = HeadSpring()

    p = gait_phase(time_ms, gait.frequency)
    stride_val = math.sin(p)
    # sin(p + pi), taken as the exact negation so both legs hit zero together.
    counter_stride = -stride_val

    mood = gait.mood
    hip_mult = (20 + gait.stride * 45) * (0.8 + gait.intensity * 0.4) * (0.5 + mood)
    knee_mult = (10 + gait.stride * 60) * gait.bends * (0.5 + gait.intensity)

    weight_dip = (1 - mood) * 20 + gait.ground_drag * 30
    vertical_oscillation = abs(math.cos(p)) * (15 * gait.bounce)
    bobbing = vertical_oscillation + gait.gravity * 15 + weight_dip

    mood_torso = (mood - 0.5) * -40
    torso_lean = gait.lean * 35 + mood_torso + math.sin(p) * 8 * gait.intensity

    head_bobble = 0.0
    if secondary_motion:
        spring = advance_head_spring(spring, -torso_lean * HEAD_FOLLOW)
        head_bobble = spring.position

    stance_knee = 5 + gait.ground_drag * 25
    l_hip = stride_val * hip_mult
    l_knee = stride_val * knee_mult if stride_val > 0 else stance_knee
    r_hip = counter_stride * hip_mult
    r_knee = counter_stride * knee_mult if counter_stride > 0 else stance_knee

    arm_swing = hip_mult * (0.4 + mood)
    elbow_base = -25 * gait.bends
    elbow_swing = 40 * gait.intensity * (1.2 - mood) * gait.bends

    pose = WalkPose(
        stride_phase=stride_val,
        y_offset=bobbing,
        torso=torso_lean,
        collar=-torso_lean * 0.7 + mood * 15,
        neck=-torso_lean * 0.2 - mood * 20 + gait.head_spin * 180 + head_bobble,
        l_hip=l_hip,
        l_knee=l_knee,
        r_hip=r_hip,
        r_knee=r_knee,
        l_foot=calc_ankle_ik(stride_val, l_hip, l_knee, torso_lean, gait.ground_drag),
        r_foot=calc_ankle_ik(counter_stride, r_hip, r_knee, torso_lean, gait.ground_drag),
        l_shoulder=counter_stride * arm_swing,
        r_shoulder=stride_val * arm_swing,
        l_elbow=elbow_base + counter_stride * elbow_swing,
        r_elbow=elbow_base + stride_val * elbow_swing,
    )
    return pose, spring


def apply_pivot_offsets(pose: WalkPose, offsets: PivotOffsets | None = None) -> dict[str, float]:
    """Sum the user pivot offsets into the synthesized joint angles."""
    angles = pose.joint_angles()
    if offsets is None:
        return angles
    return {key: angles[key] + getattr(offsets, key) for key in WALK_JOINTS}


# ---------------------------------------------------------------------------
# Frame driving
# ---------------------------------------------------------------------------


class GaitClock:
    """Simulation time derived from a monotonic wall clock.

    While paused, elapsed wall time is discarded so that the phase holds still
    and resuming continues from the same point instead of jumping ahead.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._sim_ms = start_ms
        self._last_wall_ms: float | None = None
        self._paused = False

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def time_ms(self) -> float:
        return self._sim_ms

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        # The next tick re-bases on wall time instead of catching up.
        self._paused = False
        self._last_wall_ms = None

    def tick(self, now_ms: float) -> float:
        """Record a frame at wall time *now_ms* and return simulation time."""
        if self._last_wall_ms is not None and not self._paused:
            self._sim_ms += max(now_ms - self._last_wall_ms, 0.0)
        self._last_wall_ms = now_ms
        return self._sim_ms


class WalkCycle:
    """Per-figure walk driver owning its clock and head spring."""

    def __init__(
        self,
        gait: GaitParameters | None = None,
        *,
        secondary_motion: bool = False,
        clock: GaitClock | None = None,
    ) -> None:
        self.gait = gait or GaitParameters()
        self.secondary_motion = secondary_motion
        self.clock = clock or GaitClock()
        self.spring = HeadSpring()
        self.pose = WalkPose()

    def step(self, now_ms: float) -> WalkPose:
        """Advance one frame. A paused clock still yields a pose."""
        sim_ms = self.clock.tick(now_ms)
        if self.clock.paused:
            return self.pose
        self.pose, self.spring = synthesize(
            sim_ms,
            self.gait,
            secondary_motion=self.secondary_motion,
            spring=self.spring,
        )
        return self.pose

    def run(self, frames: int, *, fps: float = 60.0, start_ms: float = 0.0) -> list[WalkPose]:
        """Step through *frames* evenly spaced frames from wall time *start_ms*."""
        if frames < 0:
            msg = "frames must not be negative"
            raise ValueError(msg)
        if fps <= 0:
            msg = "fps must be positive"
            raise ValueError(msg)
        interval = 1000.0 / fps
        logger.debug("Running %d frames at %.1f fps", frames, fps)
        return [self.step(start_ms + i * interval) for i in range(frames)]
