"""Time-indexed trajectory built from discrete samples."""

from __future__ import annotations
from bisect import bisect_left
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple
import math

import numpy as np

from motion_planning.config import get_time_epsilon
from motion_planning.core.types import PathPoint, TrajectoryPoint
from motion_planning.utils.math_utils import (
    curvature,
    interpolate_trajectory_point,
    normalize_angle,
)


class DiscretizedTrajectory:
    """Trajectory points ordered by ``relative_time``.

    Lookups between samples go through
    :func:`~motion_planning.utils.math_utils.interpolate_trajectory_point`.
    """

    def __init__(self, points: Iterable[TrajectoryPoint] = (), eps: Optional[float] = None):
        self.points: List[TrajectoryPoint] = list(points)
        self.eps = eps if eps is not None else get_time_epsilon()

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> TrajectoryPoint:
        return self.points[index]

    @property
    def times(self) -> List[float]:
        return [p.relative_time for p in self.points]

    @property
    def duration(self) -> float:
        if not self.points:
            return 0.0
        return self.points[-1].relative_time - self.points[0].relative_time

    def append(self, point: TrajectoryPoint) -> None:
        if self.points and point.relative_time < self.points[-1].relative_time:
            raise ValueError(
                f"relative_time {point.relative_time} is earlier than the last point "
                f"({self.points[-1].relative_time})")
        self.points.append(point)

    def evaluate(self, relative_time: float) -> TrajectoryPoint:
        """Sample the trajectory at ``relative_time``.

        Outside the covered time range the nearest end point is held.

        Raises:
            ValueError: if the trajectory is empty.
        """
        if not self.points:
            raise ValueError("Cannot evaluate an empty trajectory")

        times = self.times
        if relative_time <= times[0]:
            return replace(self.points[0], path_point=replace(self.points[0].path_point),
                           relative_time=relative_time)
        if relative_time >= times[-1]:
            return replace(self.points[-1], path_point=replace(self.points[-1].path_point),
                           relative_time=relative_time)

        idx = bisect_left(times, relative_time)
        return interpolate_trajectory_point(self.points[idx - 1], self.points[idx],
                                            relative_time, self.eps)

    def query_nearest_point(self, x: float, y: float) -> int:
        """Index of the point closest to (x, y)."""
        if not self.points:
            raise ValueError("Cannot query an empty trajectory")
        xy = np.array([[p.path_point.x, p.path_point.y] for p in self.points])
        dists = np.linalg.norm(xy - np.array([x, y]), axis=1)
        return int(np.argmin(dists))

    @classmethod
    def from_samples(cls, samples: Sequence[Tuple[float, float, float]],
                     eps: Optional[float] = None) -> 'DiscretizedTrajectory':
        """Build a kinematically consistent trajectory from (x, y, t) samples.

        Velocity, acceleration, jerk and curvature come from finite
        differences. Samples where the speed is zero get zero curvature.
        """
        if len(samples) < 2:
            raise ValueError("At least two samples are required")

        data = np.asarray(samples, dtype=float)
        x, y, t = data[:, 0], data[:, 1], data[:, 2]
        if eps is None:
            eps = get_time_epsilon()
        if np.any(np.diff(t) <= eps):
            raise ValueError("Sample times must be strictly increasing")

        dx = np.gradient(x, t)
        dy = np.gradient(y, t)
        ddx = np.gradient(dx, t)
        ddy = np.gradient(dy, t)
        speed = np.hypot(dx, dy)
        acc = np.gradient(speed, t)
        jerk = np.gradient(acc, t)
        seg = np.hypot(np.diff(x), np.diff(y))
        s = np.concatenate(([0.0], np.cumsum(seg)))

        kappa = np.array([curvature(*args) for args in zip(dx, dy, ddx, ddy)])
        kappa = np.where(np.isnan(kappa), 0.0, kappa)
        dkappa = np.gradient(kappa, t)

        points = []
        for i in range(len(data)):
            theta = normalize_angle(math.atan2(dy[i], dx[i]))
            path_point = PathPoint(x=float(x[i]), y=float(y[i]), s=float(s[i]), theta=theta,
                                   kappa=float(kappa[i]), dkappa=float(dkappa[i]))
            points.append(TrajectoryPoint(path_point=path_point, relative_time=float(t[i]),
                                          vel=float(speed[i]), acc=float(acc[i]),
                                          jerk=float(jerk[i])))
        return cls(points, eps=eps)
