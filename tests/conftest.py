"""Pytest configuration and fixtures for motion_planning tests."""

import sys
from pathlib import Path
import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def reset_global_config():
    """Give every test a fresh global config."""
    from motion_planning.config import GlobalConfig, set_global_config

    set_global_config(GlobalConfig())
    yield
    set_global_config(None)


@pytest.fixture
def strategy_config():
    from motion_planning.config import StrategyConfig

    return StrategyConfig()


@pytest.fixture
def ego_state():
    """Ego vehicle at the origin heading along +x at 10 m/s."""
    from motion_planning.core.types import AgentState

    return AgentState(agent_id=1, position_m=(0.0, 0.0), velocity_mps=(10.0, 0.0), heading_rad=0.0)


@pytest.fixture
def straight_line():
    """Straight reference line along the x axis."""
    from motion_planning.core.types import ReferenceLine

    return ReferenceLine.from_xy([(float(x), 0.0) for x in range(-20, 101, 5)], lane_id=0)


@pytest.fixture
def three_lanes():
    """Right, center and left lanes, 3.5 m apart, ego lane in the middle."""
    from motion_planning.core.types import ReferenceLine

    xs = [float(x) for x in range(-50, 151, 5)]
    return [
        ReferenceLine.from_xy([(x, -3.5) for x in xs], lane_id=-1),
        ReferenceLine.from_xy([(x, 0.0) for x in xs], lane_id=0, speed_limit_mps=13.9),
        ReferenceLine.from_xy([(x, 3.5) for x in xs], lane_id=1),
    ]
