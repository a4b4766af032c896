"""
AI agents for the Dominant territory game.

An agent periodically snapshots the board, narrows the legal cells with
the dominant strategy, searches them with MCTS, and asks the world to
build the chosen outpost. The interfaces module lists what the world has
to provide; dominant_ai.arena contains an in-memory implementation.
"""

from dominant_ai.agent.config import AgentConfig, AgentConfigBuilder, DIFFICULTY_PRESETS
from dominant_ai.agent.interfaces import (
    GridProvider, WorldQuery, PlacementExecutor, Economy
)
from dominant_ai.agent.player import AutoPlayer
from dominant_ai.agent.manager import AIManager, AgentStats

__all__ = [
    'AgentConfig',
    'AgentConfigBuilder',
    'DIFFICULTY_PRESETS',
    'GridProvider',
    'WorldQuery',
    'PlacementExecutor',
    'Economy',
    'AutoPlayer',
    'AIManager',
    'AgentStats'
]
