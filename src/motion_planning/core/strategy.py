"""Behaviour strategy interface shared by all behaviour-selection algorithms.

A strategy receives a snapshot of the tracked agents once per planning
cycle and then picks a target behaviour among candidate reference lines:

    strategy.set_agent_set(ego_id, agent_set)
    found = strategy.execute(behaviour, reference_lines)

Implementations include:
- LaneKeepStrategy (stay on the closest unblocked reference line)
- GapAcceptanceStrategy (cost-based lane selection with gap checks)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from motion_planning.core.types import AgentSet, AgentState, Behaviour, ReferenceLine


class BehaviourStrategy(ABC):
    """Base interface for behaviour-selection algorithms.

    The only state shared through this interface is the agent snapshot
    stored by :meth:`set_agent_set`. Any internal state machine belongs to
    the concrete strategy. A single instance is meant to be driven by one
    owner; calls are not synchronised.
    """

    def __init__(self):
        self._ego_id: Optional[int] = None
        self._agent_set: AgentSet = {}

    def set_agent_set(self, ego_id: int, agent_set: AgentSet) -> None:
        """Store the ego id and the current agent snapshot.

        The previous snapshot is replaced wholesale.

        Args:
            ego_id: Id of the ego vehicle, a key of ``agent_set``
            agent_set: Mapping from agent id to agent state
        """
        self._ego_id = ego_id
        self._agent_set = dict(agent_set)

    @abstractmethod
    def execute(self, behaviour: Behaviour, reference_lines: Sequence[ReferenceLine]) -> bool:
        """Select a behaviour among ``reference_lines``.

        Implementations must not modify ``reference_lines``. On success the
        chosen behaviour is written into ``behaviour``; on failure its
        content is unspecified and callers should fall back to their
        previous or a safe default behaviour.

        Args:
            behaviour: Output, written in place
            reference_lines: Candidate corridors for this cycle

        Returns:
            found: Whether a feasible behaviour was found
        """

    @property
    def ego_id(self) -> Optional[int]:
        return self._ego_id

    @property
    def agent_set(self) -> AgentSet:
        return self._agent_set

    @property
    def ego_state(self) -> Optional[AgentState]:
        if self._ego_id is None:
            return None
        return self._agent_set.get(self._ego_id)

    def other_agents(self) -> List[AgentState]:
        """All agents of the snapshot except the ego vehicle."""
        return [agent for agent_id, agent in self._agent_set.items() if agent_id != self._ego_id]

    def reset(self) -> None:
        """Drop the stored snapshot and any internal state."""
        self._ego_id = None
        self._agent_set = {}


class StrategyFactory:
    """Factory for creating behaviour strategies by name.

    Example:
        factory = StrategyFactory()
        factory.register('lane_keep', LaneKeepStrategy)
        strategy = factory.create('lane_keep', config=config)
    """

    def __init__(self):
        self._registry: Dict[str, type] = {}

    def register(self, name: str, strategy_class: type[BehaviourStrategy]) -> None:
        """Register a strategy class.

        Args:
            name: Name to register under (e.g., 'lane_keep', 'gap_acceptance')
            strategy_class: The strategy class to register
        """
        self._registry[name] = strategy_class

    def create(self, name: str, **kwargs) -> BehaviourStrategy:
        """Create a strategy instance by name.

        Raises:
            ValueError: If strategy name is not registered
        """
        if name not in self._registry:
            raise ValueError(f"Unknown strategy: {name}. "
                             f"Available: {list(self._registry.keys())}")
        return self._registry[name](**kwargs)

    def list_available(self) -> List[str]:
        """List all registered strategy names."""
        return list(self._registry.keys())


# Global factory instance
_factory = StrategyFactory()


def register_strategy(name: str, strategy_class: type[BehaviourStrategy]) -> None:
    """Register a strategy globally."""
    _factory.register(name, strategy_class)


def create_strategy(name: str, **kwargs) -> BehaviourStrategy:
    """Create a strategy from the global registry."""
    return _factory.create(name, **kwargs)


def list_strategies() -> List[str]:
    """List all globally registered strategies."""
    return _factory.list_available()
