from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum
import math


Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]


class AgentType(Enum):
    """Traffic participant category."""
    VEHICLE = "vehicle"
    PEDESTRIAN = "pedestrian"
    BICYCLE = "bicycle"
    MOTORCYCLE = "motorcycle"
    OBSTACLE = "obstacle"  # static: cones, boxes


@dataclass
class PathPoint:
    """A point on a path.

    Attributes:
        x, y: position in meters.
        s: accumulated arc length in meters.
        theta: heading in radians, normalized to (-pi, pi].
        kappa: curvature, 1/m.
        dkappa: curvature rate, 1/m/s.
    """
    x: float = 0.0
    y: float = 0.0
    s: float = 0.0
    theta: float = 0.0
    kappa: float = 0.0
    dkappa: float = 0.0


@dataclass
class TrajectoryPoint:
    """A time-stamped motion sample."""
    path_point: PathPoint = field(default_factory=PathPoint)
    relative_time: float = 0.0
    vel: float = 0.0
    acc: float = 0.0
    jerk: float = 0.0
    steer_angle: float = 0.0


@dataclass
class Pose:
    """Rigid pose: translation plus unit quaternion (w, x, y, z)."""
    position: Vector3 = (0.0, 0.0, 0.0)
    orientation: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)


@dataclass
class AgentState:
    """State of a tracked traffic participant, ego included.

    Attributes:
        agent_id: integer id, unique within an agent set.
        position_m: (x, y) position in meters.
        velocity_mps: (vx, vy) velocity in m/s.
        heading_rad: heading in radians.
        agent_type: participant category.
        length_m, width_m: bounding box size.
        predicted_trajectory: optional predicted intent.
    """
    agent_id: int
    position_m: Vector2
    velocity_mps: Vector2 = (0.0, 0.0)
    heading_rad: float = 0.0
    agent_type: AgentType = AgentType.VEHICLE
    length_m: float = 4.5
    width_m: float = 1.8
    predicted_trajectory: List[TrajectoryPoint] = field(default_factory=list)

    @property
    def speed_mps(self) -> float:
        return math.hypot(self.velocity_mps[0], self.velocity_mps[1])


# Keyed by agent id; the ego id is one of the keys.
AgentSet = Dict[int, AgentState]


@dataclass
class ReferenceLine:
    """Candidate corridor the ego vehicle could follow."""
    points: List[PathPoint] = field(default_factory=list)
    lane_id: Optional[int] = None
    speed_limit_mps: Optional[float] = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        if not self.points:
            return 0.0
        return self.points[-1].s - self.points[0].s

    @classmethod
    def from_xy(cls, xy: List[Vector2], lane_id: Optional[int] = None,
                speed_limit_mps: Optional[float] = None) -> 'ReferenceLine':
        """Build a reference line from raw (x, y) samples.

        Fills arc length, heading and a finite-difference curvature.
        """
        from motion_planning.utils.math_utils import normalize_angle, curvature

        points: List[PathPoint] = []
        s = 0.0
        n = len(xy)
        for i, (x, y) in enumerate(xy):
            if i > 0:
                s += math.hypot(x - xy[i - 1][0], y - xy[i - 1][1])
            if n < 2:
                theta = 0.0
            else:
                j0, j1 = (i, i + 1) if i < n - 1 else (i - 1, i)
                theta = normalize_angle(math.atan2(xy[j1][1] - xy[j0][1], xy[j1][0] - xy[j0][0]))
            kappa = 0.0
            if 0 < i < n - 1:
                dx = 0.5 * (xy[i + 1][0] - xy[i - 1][0])
                dy = 0.5 * (xy[i + 1][1] - xy[i - 1][1])
                ddx = xy[i + 1][0] - 2.0 * x + xy[i - 1][0]
                ddy = xy[i + 1][1] - 2.0 * y + xy[i - 1][1]
                k = curvature(dx, dy, ddx, ddy)
                kappa = 0.0 if math.isnan(k) else k
            points.append(PathPoint(x=x, y=y, s=s, theta=theta, kappa=kappa))
        return cls(points=points, lane_id=lane_id, speed_limit_mps=speed_limit_mps)

    def project(self, x: float, y: float) -> Tuple[float, float]:
        """Project (x, y) onto the line.

        Returns:
            (s, l): arc length of the foot point and signed lateral
            offset, positive to the left of the travel direction.

        Raises:
            ValueError: if the line has no points.
        """
        from motion_planning.utils.math_utils import cross_product

        if not self.points:
            raise ValueError("Cannot project onto an empty reference line")
        if len(self.points) == 1:
            p = self.points[0]
            return p.s, math.hypot(x - p.x, y - p.y)

        best = (float("inf"), 0.0, 0.0)
        for p0, p1 in zip(self.points[:-1], self.points[1:]):
            seg_x, seg_y = p1.x - p0.x, p1.y - p0.y
            seg_len_sq = seg_x * seg_x + seg_y * seg_y
            if seg_len_sq <= 0.0:
                continue
            ratio = ((x - p0.x) * seg_x + (y - p0.y) * seg_y) / seg_len_sq
            ratio = min(max(ratio, 0.0), 1.0)
            foot_x = p0.x + ratio * seg_x
            foot_y = p0.y + ratio * seg_y
            dist = math.hypot(x - foot_x, y - foot_y)
            if dist < best[0]:
                side = cross_product((p0.x, p0.y), (p1.x, p1.y), (x, y))
                lateral = dist if side >= 0.0 else -dist
                best = (dist, p0.s + ratio * (p1.s - p0.s), lateral)
        if math.isinf(best[0]):
            # all points coincide
            p = self.points[0]
            return p.s, math.hypot(x - p.x, y - p.y)
        return best[1], best[2]


class LateralDecision(Enum):
    """High-level lateral intent."""
    LANE_KEEP = "lane_keep"
    LANE_CHANGE_LEFT = "lane_change_left"
    LANE_CHANGE_RIGHT = "lane_change_right"
    STOP = "stop"


@dataclass
class Behaviour:
    """Driving intent chosen for the current planning cycle.

    Written in place by a strategy when it finds a feasible behaviour.
    """
    target_reference_line: Optional[ReferenceLine] = None
    target_index: int = -1
    decision: LateralDecision = LateralDecision.LANE_KEEP
    target_speed_mps: float = 0.0
    leading_agent_id: Optional[int] = None
    reason: str = ""

    def reset(self) -> None:
        self.target_reference_line = None
        self.target_index = -1
        self.decision = LateralDecision.LANE_KEEP
        self.target_speed_mps = 0.0
        self.leading_agent_id = None
        self.reason = ""
