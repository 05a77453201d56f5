"""
Configuration management.

Global config access plus environment and YAML loading.
"""

from .global_config import (
    GlobalConfig, NumericConfig, StrategyConfig, TransportConfig,
    get_global_config, set_global_config, get_time_epsilon,
    load_config_from_env, load_config_from_yaml, ConfigPresets
)

__all__ = [
    # Config classes
    'GlobalConfig', 'NumericConfig', 'StrategyConfig', 'TransportConfig',
    # Accessors
    'get_global_config', 'set_global_config', 'get_time_epsilon',
    'load_config_from_env', 'load_config_from_yaml', 'ConfigPresets'
]
