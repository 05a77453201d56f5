#!/usr/bin/env python3
"""Run a few planning cycles on a synthetic three-lane road.

A stopped car sits ahead of the ego vehicle in its lane; the chosen
strategy decides which reference line to follow and the ego trajectory
is resampled at the planner rate.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from motion_planning.config import get_global_config, load_config_from_env, load_config_from_yaml
from motion_planning.core import AgentState, Behaviour, DiscretizedTrajectory, ReferenceLine, create_strategy
from motion_planning.utils.logging_utils import setup_logging


def build_lanes():
    xs = [float(x) for x in range(-20, 201, 5)]
    return [
        ReferenceLine.from_xy([(x, -3.5) for x in xs], lane_id=-1, speed_limit_mps=11.0),
        ReferenceLine.from_xy([(x, 0.0) for x in xs], lane_id=0, speed_limit_mps=13.9),
        ReferenceLine.from_xy([(x, 3.5) for x in xs], lane_id=1, speed_limit_mps=13.9),
    ]


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--strategy", default=None, help="Registered strategy name")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--cycles", type=int, default=5)
    parser.add_argument("--dt", type=float, default=0.5)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.config is not None:
        load_config_from_yaml(args.config)
    config = load_config_from_env()
    setup_logging("DEBUG" if args.verbose else config.log_level)
    config.print_summary()
    logger = logging.getLogger("motion_planning.examples")

    strategy = create_strategy(args.strategy or config.strategy.default_strategy, config=config.strategy)
    lanes = build_lanes()
    ego_id = 1
    ego = AgentState(agent_id=ego_id, position_m=(0.0, 0.0), velocity_mps=(10.0, 0.0))
    stopped_car = AgentState(agent_id=7, position_m=(25.0, 0.0))
    behaviour = Behaviour()

    for cycle in range(args.cycles):
        strategy.set_agent_set(ego_id, {ego_id: ego, stopped_car.agent_id: stopped_car})
        if not strategy.execute(behaviour, lanes):
            logger.warning("Cycle %d: no feasible behaviour, holding previous", cycle)
            continue

        target = behaviour.target_reference_line
        _, l0 = target.project(*ego.position_m)
        # drift towards the target lane over two seconds
        samples = []
        for k in range(5):
            t = 0.5 * k
            ratio = min(t / 2.0, 1.0)
            samples.append((ego.position_m[0] + ego.speed_mps * t, ego.position_m[1] - l0 * ratio, t))
        trajectory = DiscretizedTrajectory.from_samples(samples, eps=get_global_config().numeric.time_epsilon)
        nxt = trajectory.evaluate(args.dt)

        logger.info("Cycle %d: %s -> lane %s, speed %.1f m/s, next point (%.2f, %.2f, %.3f rad)",
                    cycle, behaviour.decision.value, target.lane_id, behaviour.target_speed_mps,
                    nxt.path_point.x, nxt.path_point.y, nxt.path_point.theta)
        ego = AgentState(agent_id=ego_id, position_m=(nxt.path_point.x, nxt.path_point.y),
                         velocity_mps=ego.velocity_mps, heading_rad=nxt.path_point.theta)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
