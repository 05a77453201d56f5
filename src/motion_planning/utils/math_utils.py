"""Numeric routines for sampling motion state along a trajectory.

Everything in here is pure: no shared state, safe to call from several
threads on independent inputs.
"""

from __future__ import annotations
from typing import Sequence, Tuple
import math

import numpy as np

from motion_planning.core.types import PathPoint, Pose, TrajectoryPoint


# Intervals shorter than this are treated as zero-duration segments.
TIME_EPSILON = 1e-6

_TWO_PI = 2.0 * math.pi


def normalize_angle(angle: float) -> float:
    """Map ``angle`` to its representative in (-pi, pi]."""
    a = math.fmod(angle + math.pi, _TWO_PI)
    if a < 0.0:
        a += _TWO_PI
    a -= math.pi
    # fmod lands odd multiples of pi on -pi; the range is closed at +pi
    if a <= -math.pi:
        a = math.pi
    return a


def angle_distance(from_angle: float, to_angle: float) -> float:
    """Signed shortest rotation from ``from_angle`` to ``to_angle``."""
    return normalize_angle(to_angle - from_angle)


def lerp(x0: float, t0: float, x1: float, t1: float, t: float,
         eps: float = TIME_EPSILON) -> float:
    """Linear interpolation of a scalar sampled at ``t0`` and ``t1``.

    A zero-duration segment (``|t1 - t0| <= eps``) holds ``x0``.
    """
    if abs(t1 - t0) <= eps:
        return x0
    ratio = (t - t0) / (t1 - t0)
    return x0 + ratio * (x1 - x0)


def slerp(a0: float, t0: float, a1: float, t1: float, t: float,
          eps: float = TIME_EPSILON) -> float:
    """Interpolate an angle along the shorter arc between ``a0`` and ``a1``.

    A zero-duration segment returns ``normalize_angle(a0)``.
    """
    if abs(t1 - t0) <= eps:
        return normalize_angle(a0)
    a0_n = normalize_angle(a0)
    a1_n = normalize_angle(a1)
    d = a1_n - a0_n
    if d > math.pi:
        d -= _TWO_PI
    elif d < -math.pi:
        d += _TWO_PI

    r = (t - t0) / (t1 - t0)
    return normalize_angle(a0_n + d * r)


def interpolate_trajectory_point(p0: TrajectoryPoint, p1: TrajectoryPoint, time: float,
                                 eps: float = TIME_EPSILON) -> TrajectoryPoint:
    """Build the sample at ``time`` between ``p0`` and ``p1``.

    Heading goes through :func:`slerp`, every other field through
    :func:`lerp`. ``time`` is not clamped to ``[p0.relative_time,
    p1.relative_time]``; values outside extrapolate.
    """
    t0 = p0.relative_time
    t1 = p1.relative_time
    pp0 = p0.path_point
    pp1 = p1.path_point

    path_point = PathPoint(
        x=lerp(pp0.x, t0, pp1.x, t1, time, eps),
        y=lerp(pp0.y, t0, pp1.y, t1, time, eps),
        s=lerp(pp0.s, t0, pp1.s, t1, time, eps),
        theta=slerp(pp0.theta, t0, pp1.theta, t1, time, eps),
        kappa=lerp(pp0.kappa, t0, pp1.kappa, t1, time, eps),
        dkappa=lerp(pp0.dkappa, t0, pp1.dkappa, t1, time, eps),
    )
    return TrajectoryPoint(
        path_point=path_point,
        relative_time=time,
        vel=lerp(p0.vel, t0, p1.vel, t1, time, eps),
        acc=lerp(p0.acc, t0, p1.acc, t1, time, eps),
        jerk=lerp(p0.jerk, t0, p1.jerk, t1, time, eps),
        steer_angle=lerp(p0.steer_angle, t0, p1.steer_angle, t1, time, eps),
    )


def curvature(dx: float, dy: float, ddx: float, ddy: float) -> float:
    """Curvature of a planar curve from its first and second derivatives.

    Undefined at zero speed (``dx == dy == 0``); returns ``nan`` there so
    callers can filter the sample out.
    """
    v = dx * dx + dy * dy
    if v == 0.0:
        return math.nan
    u = dx * ddy - dy * ddx
    return u / (v * math.sqrt(v))


def curvature_rate(dx: float, dy: float, ddx: float, ddy: float,
                   dddx: float, dddy: float) -> float:
    """Derivative of curvature along the curve. ``nan`` at zero speed."""
    b = dx * dx + dy * dy
    if b == 0.0:
        return math.nan
    a = dx * dddy - dy * dddx
    c = dx * ddy - dy * ddx
    d = dx * ddx + dy * ddy
    return (a * b - 3.0 * c * d) / (b * b * math.sqrt(b))


def quaternion_to_rotation_matrix(w: float, x: float, y: float, z: float) -> np.ndarray:
    """3x3 rotation matrix of a unit quaternion."""
    return np.array([
        [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
        [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
        [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
    ])


def transform(pose: Pose, point: Sequence[float]) -> Tuple[float, float, float]:
    """Apply the rigid transform ``pose`` to a 3D point."""
    matrix = np.eye(4)
    matrix[:3, :3] = quaternion_to_rotation_matrix(*pose.orientation)
    matrix[:3, 3] = pose.position

    homogeneous = np.array([point[0], point[1], point[2], 1.0])
    out = matrix @ homogeneous
    return float(out[0]), float(out[1]), float(out[2])


def cross_product(origin: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> float:
    """2D cross product of ``p1 - origin`` and ``p2 - origin``.

    Positive for a counter-clockwise (left) turn.
    """
    v1_x, v1_y = p1[0] - origin[0], p1[1] - origin[1]
    v2_x, v2_y = p2[0] - origin[0], p2[1] - origin[1]
    return v1_x * v2_y - v1_y * v2_x
