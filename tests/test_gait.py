"""Tests for the procedural walk cycle."""

import math

import pytest

from bitruvius.models import GaitParameters, HeadSpring, PivotOffsets, WalkPose
from bitruvius.pipeline.gait import (
    PHASE_RATE,
    GaitClock,
    WalkCycle,
    advance_head_spring,
    apply_pivot_offsets,
    calc_ankle_ik,
    gait_phase,
    synthesize,
)


def _time_for_phase(p: float, frequency: float = 1.0) -> float:
    return p / (PHASE_RATE * frequency)


def test_default_gait_at_time_zero(default_gait: GaitParameters) -> None:
    pose, _ = synthesize(0.0, default_gait)
    assert pose.stride_phase == 0.0
    assert pose.l_hip == pytest.approx(0.0)
    assert pose.r_hip == pytest.approx(0.0)
    assert pose.l_knee == pytest.approx(10.0)
    assert pose.r_knee == pytest.approx(10.0)
    assert pose.y_offset == pytest.approx(29.5)
    assert pose.torso == pytest.approx(3.5)
    assert pose.collar == pytest.approx(5.05)
    assert pose.neck == pytest.approx(-10.7)
    assert pose.l_elbow == pytest.approx(-17.5)
    assert pose.r_elbow == pytest.approx(-17.5)


def test_both_legs_take_stance_at_zero_stride(default_gait: GaitParameters) -> None:
    # s == 0 is not swing: no hysteresis at the threshold.
    pose, _ = synthesize(0.0, default_gait)
    stance = 5 + default_gait.ground_drag * 25
    assert pose.l_knee == stance
    assert pose.r_knee == stance


def test_synthesize_is_pure(default_gait: GaitParameters) -> None:
    a, spring_a = synthesize(1234.5, default_gait)
    b, spring_b = synthesize(1234.5, default_gait)
    assert a == b
    assert spring_a == spring_b


def test_gait_phase_wraps():
    assert gait_phase(0.0, 1.0) == 0.0
    full_turn = _time_for_phase(math.tau)
    assert gait_phase(full_turn + 100, 1.0) == pytest.approx(gait_phase(100, 1.0))
    for t in (0, 10, 999, 123456):
        assert 0 <= gait_phase(t, 2.5) < math.tau


def test_left_leg_swings_at_quarter_phase(default_gait: GaitParameters) -> None:
    pose, _ = synthesize(_time_for_phase(math.pi / 2), default_gait)
    knee_mult = (10 + 0.6 * 60) * 0.7 * (0.5 + 0.5)
    assert pose.stride_phase == pytest.approx(1.0)
    assert pose.l_hip == pytest.approx(47.0)
    assert pose.r_hip == pytest.approx(-47.0)
    assert pose.l_knee == pytest.approx(knee_mult)
    assert pose.r_knee == pytest.approx(10.0)
    assert pose.l_foot == pytest.approx(20.0)
    # Stance foot cancels hip + knee + torso.
    assert pose.r_foot == pytest.approx(-(pose.r_hip + pose.r_knee + pose.torso))


def test_knees_at_half_phase(default_gait: GaitParameters) -> None:
    # sin(pi) rounds to a tiny positive value, so the left leg is in swing.
    pose, _ = synthesize(math.pi / PHASE_RATE, default_gait)
    assert 0 < pose.stride_phase < 1e-12
    assert 0 < pose.l_knee < 1e-12
    assert pose.r_knee == 10.0
    assert pose.l_foot == pytest.approx(8.0)
    assert pose.r_foot == pytest.approx(-(pose.r_hip + pose.r_knee + pose.torso))
    assert pose.torso == pytest.approx(3.5)


def test_right_leg_swings_at_three_quarter_phase(default_gait: GaitParameters) -> None:
    pose, _ = synthesize(_time_for_phase(3 * math.pi / 2), default_gait)
    assert pose.stride_phase == pytest.approx(-1.0)
    assert pose.r_knee == pytest.approx(32.2)
    assert pose.l_knee == pytest.approx(10.0)
    assert pose.r_foot == pytest.approx(20.0)
    assert pose.l_foot == pytest.approx(-(pose.l_hip + pose.l_knee + pose.torso))


def test_legs_never_swing_together(default_gait: GaitParameters) -> None:
    stance = 5 + default_gait.ground_drag * 25
    for t in range(0, 2000, 17):
        pose, _ = synthesize(float(t), default_gait)
        assert pose.l_knee == stance or pose.r_knee == stance


def test_hips_and_arms_are_antiphase(default_gait: GaitParameters) -> None:
    for t in (50.0, 400.0, 777.0):
        pose, _ = synthesize(t, default_gait)
        assert pose.l_hip == pytest.approx(-pose.r_hip)
        assert pose.l_shoulder == pytest.approx(-pose.r_shoulder)


def test_y_offset_bounds(default_gait: GaitParameters) -> None:
    g = default_gait
    floor = g.gravity * 15 + (1 - g.mood) * 20 + g.ground_drag * 30
    for t in range(0, 1500, 23):
        pose, _ = synthesize(float(t), g)
        assert floor - 1e-9 <= pose.y_offset <= floor + 15 * g.bounce + 1e-9


def test_head_spin_turns_neck():
    still, _ = synthesize(0.0, GaitParameters())
    spun, _ = synthesize(0.0, GaitParameters(head_spin=0.5))
    assert spun.neck - still.neck == pytest.approx(90.0)


def test_out_of_range_parameters_are_not_clamped():
    pose, _ = synthesize(0.0, GaitParameters(lean=3.0))
    assert pose.torso == pytest.approx(3.0 * 35)


def test_calc_ankle_ik():
    assert calc_ankle_ik(-0.5, 10, 20, 5, 0.2) == -35
    assert calc_ankle_ik(0.0, 10, 20, 5, 0.2) == pytest.approx(8.0)
    assert calc_ankle_ik(1.0, 10, 20, 5, 0.2) == pytest.approx(20.0)


def test_spring_untouched_without_secondary_motion(default_gait: GaitParameters) -> None:
    spring = HeadSpring(position=1.5, velocity=-0.3)
    _, out = synthesize(500.0, default_gait, spring=spring)
    assert out == spring


def test_secondary_motion_moves_head(default_gait: GaitParameters) -> None:
    plain, _ = synthesize(0.0, default_gait)
    bobbed, spring = synthesize(0.0, default_gait, secondary_motion=True)
    target = -3.5 * 0.6
    velocity = target * 0.12 * 0.82
    assert spring.velocity == pytest.approx(velocity)
    assert spring.position == pytest.approx(velocity)
    assert bobbed.neck == pytest.approx(plain.neck + velocity)


def test_head_spring_settles_on_target():
    spring = HeadSpring()
    for _ in range(300):
        spring = advance_head_spring(spring, 4.0)
    assert spring.position == pytest.approx(4.0, abs=1e-3)
    assert spring.velocity == pytest.approx(0.0, abs=1e-3)


def test_apply_pivot_offsets(default_gait: GaitParameters) -> None:
    pose, _ = synthesize(0.0, default_gait)
    angles = apply_pivot_offsets(pose, PivotOffsets(l_knee=5, neck=-10))
    assert angles["l_knee"] == pytest.approx(pose.l_knee + 5)
    assert angles["neck"] == pytest.approx(pose.neck - 10)
    assert angles["r_knee"] == pose.r_knee
    assert apply_pivot_offsets(pose) == pose.joint_angles()


# ---------------------------------------------------------------------------
# Clock and cycle
# ---------------------------------------------------------------------------


def test_clock_accumulates_wall_time():
    clock = GaitClock()
    assert clock.tick(1000.0) == 0.0
    assert clock.tick(1016.0) == pytest.approx(16.0)
    assert clock.tick(1032.0) == pytest.approx(32.0)


def test_clock_pause_discards_elapsed_time():
    clock = GaitClock(start_ms=100.0)
    clock.tick(0.0)
    clock.tick(50.0)
    clock.pause()
    assert clock.paused
    clock.tick(5000.0)
    assert clock.time_ms == pytest.approx(150.0)
    clock.resume()
    assert clock.tick(5020.0) == pytest.approx(150.0)
    assert clock.tick(5040.0) == pytest.approx(170.0)


def test_clock_resume_without_paused_ticks_does_not_jump():
    clock = GaitClock()
    clock.tick(0.0)
    clock.tick(100.0)
    clock.pause()
    clock.resume()
    assert clock.tick(10000.0) == pytest.approx(100.0)
    assert clock.tick(10016.0) == pytest.approx(116.0)


def test_clock_ignores_backwards_wall_time():
    clock = GaitClock()
    clock.tick(100.0)
    assert clock.tick(50.0) == 0.0


def test_walk_cycle_first_frame_matches_synthesize(default_gait: GaitParameters) -> None:
    cycle = WalkCycle(default_gait)
    expected, _ = synthesize(0.0, default_gait)
    assert cycle.step(12345.0) == expected


def test_walk_cycle_holds_pose_while_paused(default_gait: GaitParameters) -> None:
    cycle = WalkCycle(default_gait)
    cycle.step(0.0)
    moving = cycle.step(100.0)
    cycle.clock.pause()
    assert cycle.step(900.0) is moving
    cycle.clock.resume()
    assert cycle.step(1000.0) == moving
    resumed = cycle.step(1100.0)
    expected, _ = synthesize(200.0, default_gait)
    assert resumed == expected


def test_walk_cycles_do_not_share_springs(default_gait: GaitParameters) -> None:
    a = WalkCycle(default_gait, secondary_motion=True)
    b = WalkCycle(default_gait, secondary_motion=True)
    for i in range(10):
        a.step(i * 16.0)
    assert a.spring != HeadSpring()
    assert b.spring == HeadSpring()


def test_walk_cycle_run(default_gait: GaitParameters) -> None:
    frames = WalkCycle(default_gait).run(5, fps=50.0)
    assert len(frames) == 5
    assert all(isinstance(f, WalkPose) for f in frames)
    expected, _ = synthesize(80.0, default_gait)
    assert frames[4] == expected


def test_walk_cycle_run_zero_frames():
    assert WalkCycle().run(0) == []


@pytest.mark.parametrize(("frames", "fps"), [(-1, 60.0), (5, 0.0), (5, -30.0)])
def test_walk_cycle_run_rejects_bad_arguments(frames: int, fps: float) -> None:
    with pytest.raises(ValueError):
        WalkCycle().run(frames, fps=fps)
