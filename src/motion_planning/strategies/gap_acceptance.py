"""Cost-based lane selection with gap acceptance.

Each candidate reference line gets a cost from the ego's lateral offset
to it and the proximity of the leading agent in its corridor. Lines other
than the one the ego currently drives on must also offer enough free
space in front and behind; blocked lines are never selected.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from motion_planning.config import StrategyConfig, get_global_config
from motion_planning.core.strategy import BehaviourStrategy
from motion_planning.core.types import Behaviour, LateralDecision, ReferenceLine
from motion_planning.strategies.corridor import CorridorInfo, analyze_corridor

logger = logging.getLogger(__name__)


class GapAcceptanceStrategy(BehaviourStrategy):
    """Lane keeping / lane changing driven by gap checks.

    The strategy remembers the line it committed to on the previous cycle,
    by ``lane_id`` when the line has one and by identity otherwise, so a
    reordered candidate list keeps the same commitment. It only leaves it
    for a line that is cheaper by more than ``lane_change_hysteresis``.
    """

    def __init__(self, config: Optional[StrategyConfig] = None):
        super().__init__()
        self.config = config if config is not None else get_global_config().strategy
        self.committed_line: Optional[ReferenceLine] = None

    def reset(self) -> None:
        super().reset()
        self.committed_line = None

    def _is_committed(self, line: ReferenceLine) -> bool:
        committed = self.committed_line
        if committed is None:
            return False
        if committed.lane_id is not None:
            return line.lane_id == committed.lane_id
        return line is committed

    def _cost(self, info: CorridorInfo) -> float:
        cfg = self.config
        cost = cfg.lateral_cost_weight * abs(info.ego_l)
        if info.front_gap_m < cfg.blocking_distance_m:
            cost += cfg.front_gap_cost_weight * (cfg.blocking_distance_m - info.front_gap_m) / cfg.blocking_distance_m
        return cost

    def _gap_ok(self, info: CorridorInfo) -> bool:
        return info.front_gap_m >= self.config.min_front_gap_m and info.rear_gap_m >= self.config.min_rear_gap_m

    def execute(self, behaviour: Behaviour, reference_lines: Sequence[ReferenceLine]) -> bool:
        ego = self.ego_state
        if ego is None:
            logger.warning("No ego state for id %s, call set_agent_set first", self.ego_id)
            return False

        others = self.other_agents()
        infos: List[Tuple[int, ReferenceLine, CorridorInfo]] = [
            (index, line, analyze_corridor(line, ego, others, self.config))
            for index, line in enumerate(reference_lines) if line.points
        ]
        if not infos:
            logger.info("No reference lines to choose from")
            self.committed_line = None
            return False

        current_index = min(infos, key=lambda item: abs(item[2].ego_l))[0]

        feasible: List[Tuple[float, int, ReferenceLine, CorridorInfo]] = []
        for index, line, info in infos:
            if info.blocked:
                logger.debug("Reference line %d blocked by agent %s", index, info.front_agent_id)
                continue
            if index != current_index and not self._gap_ok(info):
                logger.debug("Reference line %d rejected: front gap %.1fm, rear gap %.1fm",
                             index, info.front_gap_m, info.rear_gap_m)
                continue
            feasible.append((self._cost(info), index, line, info))

        if not feasible:
            logger.info("All %d reference lines infeasible", len(infos))
            self.committed_line = None
            return False

        best = min(feasible, key=lambda c: (c[0], c[1]))
        committed = next((c for c in feasible if self._is_committed(c[2])), None)
        if committed is not None and best[0] > committed[0] - self.config.lane_change_hysteresis:
            best = committed

        cost, index, line, info = best
        self.committed_line = line

        if index == current_index:
            decision = LateralDecision.LANE_KEEP
        elif info.ego_l < 0.0:
            # ego is to the right of the target line
            decision = LateralDecision.LANE_CHANGE_LEFT
        else:
            decision = LateralDecision.LANE_CHANGE_RIGHT

        behaviour.target_reference_line = line
        behaviour.target_index = index
        behaviour.decision = decision
        behaviour.target_speed_mps = (line.speed_limit_mps if line.speed_limit_mps is not None
                                      else self.config.default_speed_mps)
        behaviour.leading_agent_id = info.front_agent_id
        behaviour.reason = f"cost {cost:.2f}"
        logger.debug("Selected reference line %d (%s, cost %.2f)", index, decision.value, cost)
        return True
