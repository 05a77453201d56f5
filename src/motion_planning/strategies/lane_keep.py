"""Lane-keep behaviour strategy."""

from __future__ import annotations
import logging
from typing import Optional, Sequence

from motion_planning.config import StrategyConfig, get_global_config
from motion_planning.core.strategy import BehaviourStrategy
from motion_planning.core.types import Behaviour, LateralDecision, ReferenceLine
from motion_planning.strategies.corridor import analyze_corridor

logger = logging.getLogger(__name__)


class LaneKeepStrategy(BehaviourStrategy):
    """Follow the reference line closest to the ego vehicle that is not blocked.

    Without an agent snapshot (or without the ego vehicle in it) no
    behaviour is produced.
    """

    def __init__(self, config: Optional[StrategyConfig] = None):
        super().__init__()
        self.config = config if config is not None else get_global_config().strategy

    def execute(self, behaviour: Behaviour, reference_lines: Sequence[ReferenceLine]) -> bool:
        ego = self.ego_state
        if ego is None:
            logger.warning("No ego state for id %s, call set_agent_set first", self.ego_id)
            return False

        others = self.other_agents()
        candidates = []
        for index, line in enumerate(reference_lines):
            if not line.points:
                logger.debug("Skipping empty reference line %d", index)
                continue
            info = analyze_corridor(line, ego, others, self.config)
            if info.blocked:
                logger.debug("Reference line %d blocked by agent %s at %.1fm",
                             index, info.front_agent_id, info.front_gap_m)
                continue
            candidates.append((abs(info.ego_l), index, line, info))

        if not candidates:
            logger.info("No feasible reference line among %d candidates", len(reference_lines))
            return False

        _, index, line, info = min(candidates, key=lambda c: (c[0], c[1]))
        behaviour.target_reference_line = line
        behaviour.target_index = index
        behaviour.decision = LateralDecision.LANE_KEEP
        behaviour.target_speed_mps = (line.speed_limit_mps if line.speed_limit_mps is not None
                                      else self.config.default_speed_mps)
        behaviour.leading_agent_id = info.front_agent_id
        behaviour.reason = "closest unblocked reference line"
        return True
