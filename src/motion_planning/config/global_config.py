"""
Global configuration.

Keeps the tunable constants of the planner core in one place.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os

import yaml

logger = logging.getLogger(__name__)


@dataclass
class NumericConfig:
    """Numerical tolerances"""
    time_epsilon: float = 1e-6          # Zero-duration segment threshold (s)


@dataclass
class StrategyConfig:
    """Behaviour strategy parameters"""
    default_strategy: str = "lane_keep"

    # Corridor
    lane_half_width_m: float = 1.75     # Half lane width used for corridor membership
    blocking_distance_m: float = 30.0   # Look-ahead for blocking agents (m)
    blocked_speed_mps: float = 1.0      # Agents slower than this block the corridor

    # Gap acceptance
    min_front_gap_m: float = 10.0       # Required free space ahead on a target line
    min_rear_gap_m: float = 5.0         # Required free space behind on a target line
    lateral_cost_weight: float = 1.0
    front_gap_cost_weight: float = 5.0 # Penalty for a close leading agent
    lane_change_hysteresis: float = 0.5 # Cost margin before switching away from a committed line

    default_speed_mps: float = 8.0      # Used when a reference line has no speed limit


@dataclass
class TransportConfig:
    """Logical channel name to topic / service mapping.

    Owned by the transport layer and handed over at wiring time.
    """
    topics: Dict[str, str] = None
    services: Dict[str, str] = None

    def __post_init__(self):
        if self.topics is None:
            self.topics = {
                "ego_vehicle_status": "/carla/ego_vehicle/vehicle_status",
                "traffic_lights": "/carla/traffic_lights",
                "actor_list": "/carla/actor_list",
                "objects": "/carla/objects",
                "published_trajectory": "/published_trajectory",
                "ego_vehicle_info": "/carla/ego_vehicle/vehicle_info",
                "ego_vehicle_odometry": "/carla/ego_vehicle/odometry",
                "visualized_trajectory": "/visualized_trajectory",
                "initial_pose": "/initialpose",
                "goal_pose": "/move_base_simple/goal",
                "traffic_lights_info": "/carla/traffic_lights_infos",
            }
        if self.services is None:
            self.services = {
                "route": "/carla/ego_vehicle/get_route",
                "actor_waypoint": "/carla_waypoint_publisher/ego_vehicle/get_actor_waypoint",
                "ego_waypoint": "/carla_waypoint_publisher/ego_vehicle/get_waypoint",
            }

    def topic(self, name: str) -> str:
        if name not in self.topics:
            raise ValueError(f"Unknown topic: {name}. Available: {list(self.topics.keys())}")
        return self.topics[name]

    def service(self, name: str) -> str:
        if name not in self.services:
            raise ValueError(f"Unknown service: {name}. Available: {list(self.services.keys())}")
        return self.services[name]


@dataclass
class GlobalConfig:
    """Configuration container"""
    numeric: NumericConfig = None
    strategy: StrategyConfig = None
    transport: TransportConfig = None

    # System
    debug_mode: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if self.numeric is None:
            self.numeric = NumericConfig()
        if self.strategy is None:
            self.strategy = StrategyConfig()
        if self.transport is None:
            self.transport = TransportConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GlobalConfig':
        """Build a config from a nested dict, e.g. a parsed YAML file.

        Raises:
            ValueError: On unknown section or key names
        """
        sections = {
            "numeric": NumericConfig,
            "strategy": StrategyConfig,
            "transport": TransportConfig,
        }
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key in sections:
                section_cls = sections[key]
                known = {f.name for f in fields(section_cls)}
                unknown = set(value or {}) - known
                if unknown:
                    raise ValueError(f"Unknown keys in section '{key}': {sorted(unknown)}")
                value = dict(value or {})
                if section_cls is TransportConfig:
                    # entries override the defaults one by one
                    defaults = TransportConfig()
                    value["topics"] = {**defaults.topics, **(value.get("topics") or {})}
                    value["services"] = {**defaults.services, **(value.get("services") or {})}
                kwargs[key] = section_cls(**value)
            elif key in ("debug_mode", "log_level"):
                kwargs[key] = value
            else:
                raise ValueError(f"Unknown config section: {key}")
        return cls(**kwargs)

    def print_summary(self):
        """Log a short summary"""
        logger.info("=== Global config ===")
        logger.info("Time epsilon: %s", self.numeric.time_epsilon)
        logger.info("Default strategy: %s", self.strategy.default_strategy)
        logger.info("Lane half width: %sm", self.strategy.lane_half_width_m)
        logger.info("Gaps (front/rear): %sm / %sm", self.strategy.min_front_gap_m, self.strategy.min_rear_gap_m)
        logger.info("Log level: %s", self.log_level)


# Global config instance
_global_config = None

def get_global_config() -> GlobalConfig:
    """Return the global config instance"""
    global _global_config
    if _global_config is None:
        _global_config = GlobalConfig()
    return _global_config

def set_global_config(config: GlobalConfig):
    """Replace the global config instance"""
    global _global_config
    _global_config = config

def get_time_epsilon() -> float:
    """Shortcut: current zero-duration threshold"""
    return get_global_config().numeric.time_epsilon


def load_config_from_env():
    """Override the global config from environment variables"""
    config = get_global_config()

    if 'MP_TIME_EPSILON' in os.environ:
        config.numeric.time_epsilon = float(os.environ['MP_TIME_EPSILON'])
    if 'MP_STRATEGY' in os.environ:
        config.strategy.default_strategy = os.environ['MP_STRATEGY']
    if 'MP_LOG_LEVEL' in os.environ:
        config.log_level = os.environ['MP_LOG_LEVEL'].upper()
    if 'MP_DEBUG' in os.environ:
        config.debug_mode = os.environ['MP_DEBUG'].lower() == 'true'

    return config


def load_config_from_yaml(path: Union[str, Path], set_global: bool = True) -> GlobalConfig:
    """Load a config from a YAML file, optionally installing it globally"""
    with open(path, "r", encoding="utf-8") as f:
        data: Optional[Dict[str, Any]] = yaml.safe_load(f)
    config = GlobalConfig.from_dict(data or {})
    if set_global:
        set_global_config(config)
    return config


class ConfigPresets:
    """Preset configurations"""

    @staticmethod
    def conservative() -> GlobalConfig:
        """Large gaps, long look-ahead"""
        config = GlobalConfig()
        config.strategy.min_front_gap_m = 20.0
        config.strategy.min_rear_gap_m = 10.0
        config.strategy.blocking_distance_m = 50.0
        return config

    @staticmethod
    def aggressive() -> GlobalConfig:
        """Short gaps, eager lane changes"""
        config = GlobalConfig()
        config.strategy.default_strategy = "gap_acceptance"
        config.strategy.min_front_gap_m = 6.0
        config.strategy.min_rear_gap_m = 3.0
        config.strategy.lane_change_hysteresis = 0.0
        return config
