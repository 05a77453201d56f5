"""Core types and interfaces.

Data structures exchanged with the rest of the planning stack and the
behaviour strategy contract.
"""

from motion_planning.core.types import (
    PathPoint,
    TrajectoryPoint,
    Pose,
    AgentType,
    AgentState,
    AgentSet,
    ReferenceLine,
    LateralDecision,
    Behaviour,
)
from motion_planning.core.strategy import (
    BehaviourStrategy,
    StrategyFactory,
    register_strategy,
    create_strategy,
    list_strategies,
)
from motion_planning.core.trajectory import DiscretizedTrajectory

__all__ = [
    "PathPoint",
    "TrajectoryPoint",
    "Pose",
    "AgentType",
    "AgentState",
    "AgentSet",
    "ReferenceLine",
    "LateralDecision",
    "Behaviour",
    "BehaviourStrategy",
    "StrategyFactory",
    "register_strategy",
    "create_strategy",
    "list_strategies",
    "DiscretizedTrajectory",
]
