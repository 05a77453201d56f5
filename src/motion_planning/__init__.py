"""motion_planning: trajectory sampling and behaviour selection core.

Provides the numeric routines that interpolate motion state between
trajectory samples and the pluggable behaviour strategy contract used by
the planner to pick a reference line each cycle.
"""

__version__ = "1.0.0"

# Make key components easily accessible
from motion_planning.core import (
    PathPoint,
    TrajectoryPoint,
    Pose,
    AgentState,
    AgentType,
    ReferenceLine,
    Behaviour,
    LateralDecision,
    BehaviourStrategy,
    DiscretizedTrajectory,
    create_strategy,
)
from motion_planning import strategies  # noqa: F401  registers built-in strategies

__all__ = [
    "PathPoint",
    "TrajectoryPoint",
    "Pose",
    "AgentState",
    "AgentType",
    "ReferenceLine",
    "Behaviour",
    "LateralDecision",
    "BehaviourStrategy",
    "DiscretizedTrajectory",
    "create_strategy",
]
