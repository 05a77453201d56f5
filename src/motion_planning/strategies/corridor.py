"""Agent occupancy of a reference-line corridor, shared by the strategies."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from motion_planning.config import StrategyConfig
from motion_planning.core.types import AgentState, ReferenceLine


@dataclass
class CorridorInfo:
    """Ego position and surrounding traffic relative to one reference line.

    Gaps are measured along the line between reference points, ``inf``
    when no agent is found on that side.
    """
    ego_s: float
    ego_l: float
    front_agent_id: Optional[int] = None
    front_gap_m: float = float("inf")
    rear_agent_id: Optional[int] = None
    rear_gap_m: float = float("inf")
    blocked: bool = False


def analyze_corridor(line: ReferenceLine, ego: AgentState, agents: Iterable[AgentState],
                     config: StrategyConfig) -> CorridorInfo:
    """Project ego and agents onto ``line`` and find the nearest agents in its lane.

    An agent is in the corridor when its lateral offset is within
    ``lane_half_width_m``. The corridor is blocked when the leading agent
    is closer than ``blocking_distance_m`` and slower than
    ``blocked_speed_mps``.
    """
    ego_s, ego_l = line.project(*ego.position_m)
    info = CorridorInfo(ego_s=ego_s, ego_l=ego_l)

    front_speed = 0.0
    for agent in agents:
        s, l = line.project(*agent.position_m)
        if abs(l) > config.lane_half_width_m:
            continue
        ds = s - ego_s
        if ds >= 0.0:
            if ds < info.front_gap_m:
                info.front_gap_m = ds
                info.front_agent_id = agent.agent_id
                front_speed = agent.speed_mps
        elif -ds < info.rear_gap_m:
            info.rear_gap_m = -ds
            info.rear_agent_id = agent.agent_id

    info.blocked = (info.front_agent_id is not None
                    and info.front_gap_m <= config.blocking_distance_m
                    and front_speed < config.blocked_speed_mps)
    return info
