"""Concrete behaviour strategies.

Importing this package registers them with the global strategy factory.
"""

from motion_planning.core.strategy import register_strategy
from motion_planning.strategies.corridor import CorridorInfo, analyze_corridor
from motion_planning.strategies.lane_keep import LaneKeepStrategy
from motion_planning.strategies.gap_acceptance import GapAcceptanceStrategy

register_strategy("lane_keep", LaneKeepStrategy)
register_strategy("gap_acceptance", GapAcceptanceStrategy)

__all__ = [
    "CorridorInfo",
    "analyze_corridor",
    "LaneKeepStrategy",
    "GapAcceptanceStrategy",
]
