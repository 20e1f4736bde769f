"""Scalar angle helpers and 2D vector math used by the kinematics pipeline.

All angles are in degrees unless a function name says otherwise.
"""

from __future__ import annotations

import math

from bitruvius.models.pose import Vector2D


def rad(deg: float) -> float:
    return deg * math.pi / 180


def deg(radians: float) -> float:
    return radians * 180 / math.pi


def rotate_vec(x: float, y: float, angle_deg: float) -> Vector2D:
    """Rotate ``(x, y)`` counter-clockwise by *angle_deg* about the origin."""
    r = rad(angle_deg)
    c = math.cos(r)
    s = math.sin(r)
    return Vector2D(x=x * c - y * s, y=x * s + y * c)


def add_vec(a: Vector2D, b: Vector2D) -> Vector2D:
    return Vector2D(x=a.x + b.x, y=a.y + b.y)


def sub_vec(a: Vector2D, b: Vector2D) -> Vector2D:
    return Vector2D(x=a.x - b.x, y=a.y - b.y)


def normalize_deg(angle: float) -> float:
    """Wrap *angle* into ``[0, 360)``."""
    return ((angle % 360) + 360) % 360


def shortest_angle_diff(current: float, start: float) -> float:
    """Signed shortest difference ``current - start`` in ``[-180, 180]``.

    Works for inputs of any magnitude, including values outside
    ``[-360, 360]``.
    """
    diff = normalize_deg(current - start)
    if diff > 180:
        diff -= 360
    return diff


def lerp(start: float, end: float, t: float) -> float:
    return start * (1 - t) + end * t


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate from *a* toward *b* along the shortest arc.

    The result starts from the unwrapped value of *a*, so ``t == 0`` returns
    *a* exactly even when it lies outside ``[0, 360)``.
    """
    delta = normalize_deg(b) - normalize_deg(a)
    if delta > 180:
        delta -= 360
    elif delta < -180:
        delta += 360
    return a + delta * t
