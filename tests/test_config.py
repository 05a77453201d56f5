from __future__ import annotations
import logging

import pytest

from motion_planning.config import (
    ConfigPresets,
    GlobalConfig,
    get_global_config,
    get_time_epsilon,
    load_config_from_env,
    load_config_from_yaml,
)
from motion_planning.utils.logging_utils import setup_logging


def test_defaults() -> None:
    config = GlobalConfig()
    assert config.numeric.time_epsilon == 1e-6
    assert config.strategy.default_strategy == "lane_keep"
    assert config.transport.topic("published_trajectory") == "/published_trajectory"
    assert config.transport.service("route") == "/carla/ego_vehicle/get_route"


def test_transport_unknown_channel() -> None:
    with pytest.raises(ValueError, match="Unknown topic"):
        GlobalConfig().transport.topic("nope")
    with pytest.raises(ValueError, match="Unknown service"):
        GlobalConfig().transport.service("nope")


def test_load_from_env(monkeypatch) -> None:
    monkeypatch.setenv("MP_TIME_EPSILON", "1e-3")
    monkeypatch.setenv("MP_STRATEGY", "gap_acceptance")
    monkeypatch.setenv("MP_LOG_LEVEL", "debug")
    monkeypatch.setenv("MP_DEBUG", "true")
    config = load_config_from_env()
    assert config is get_global_config()
    assert get_time_epsilon() == pytest.approx(1e-3)
    assert config.strategy.default_strategy == "gap_acceptance"
    assert config.log_level == "DEBUG"
    assert config.debug_mode is True


def test_load_from_yaml(tmp_path) -> None:
    path = tmp_path / "planner.yaml"
    path.write_text(
        "numeric:\n"
        "  time_epsilon: 0.001\n"
        "strategy:\n"
        "  min_front_gap_m: 15.0\n"
        "transport:\n"
        "  topics:\n"
        "    published_trajectory: /ego/trajectory\n"
        "log_level: WARNING\n",
        encoding="utf-8",
    )
    config = load_config_from_yaml(path)
    assert config is get_global_config()
    assert config.numeric.time_epsilon == pytest.approx(0.001)
    assert config.strategy.min_front_gap_m == 15.0
    assert config.strategy.min_rear_gap_m == 5.0
    assert config.transport.topic("published_trajectory") == "/ego/trajectory"
    assert config.transport.topic("actor_list") == "/carla/actor_list"
    assert config.log_level == "WARNING"


def test_load_empty_yaml(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    config = load_config_from_yaml(path, set_global=False)
    assert config == GlobalConfig()


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unknown config section"):
        GlobalConfig.from_dict({"planner": {}})
    with pytest.raises(ValueError, match="Unknown keys"):
        GlobalConfig.from_dict({"strategy": {"min_gap": 1.0}})


def test_from_dict_transport_keeps_default_channels() -> None:
    config = GlobalConfig.from_dict({
        "transport": {
            "topics": {"published_trajectory": "/ego/trajectory"},
            "services": {"route": "/ego/get_route"},
        },
    })
    assert config.transport.topic("published_trajectory") == "/ego/trajectory"
    assert config.transport.topic("actor_list") == "/carla/actor_list"
    assert config.transport.service("route") == "/ego/get_route"
    assert config.transport.service("ego_waypoint") == GlobalConfig().transport.service("ego_waypoint")


def test_print_summary_logs(caplog) -> None:
    config = ConfigPresets.conservative()
    with caplog.at_level(logging.INFO, logger="motion_planning.config"):
        config.print_summary()
    assert "=== Global config ===" in caplog.text
    assert f"Default strategy: {config.strategy.default_strategy}" in caplog.text


def test_presets() -> None:
    assert ConfigPresets.conservative().strategy.min_front_gap_m > GlobalConfig().strategy.min_front_gap_m
    assert ConfigPresets.aggressive().strategy.default_strategy == "gap_acceptance"


def test_setup_logging_writes_file(tmp_path) -> None:
    log_file = tmp_path / "logs" / "planner.log"
    logger = setup_logging("debug", log_file=log_file)
    logging.getLogger("motion_planning.test").debug("hello planner")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert logger.name == "motion_planning"
    assert "hello planner" in log_file.read_text(encoding="utf-8")
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)
