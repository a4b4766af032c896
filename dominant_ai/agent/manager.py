"""
Management of several AI agents sharing one world.

The AIManager creates an AutoPlayer per configuration, drives all of them
from a single update call, and offers faction-level controls (stop, income)
and a summary of every agent.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional
import logging

from dominant_ai.core.board import PlacementAction
from dominant_ai.core.constants import Faction
from dominant_ai.agent.config import AgentConfig
from dominant_ai.agent.interfaces import Economy, GridProvider, PlacementExecutor, WorldQuery
from dominant_ai.agent.player import AutoPlayer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentStats:
    """Summary of one agent."""
    faction: Faction
    money: int
    is_active: bool
    placements: int


class AIManager:
    """Spawns, drives and stops AI agents."""

    def __init__(
        self,
        grid: GridProvider,
        world: WorldQuery,
        executor: PlacementExecutor,
        economy: Economy
    ):
        self.grid = grid
        self.world = world
        self.executor = executor
        self.economy = economy

        self.players: List[AutoPlayer] = []
        self._listeners: List[Callable[[AutoPlayer, PlacementAction], None]] = []

    def spawn(self, config: AgentConfig) -> AutoPlayer:
        """
        Create an agent from a configuration and start managing it.

        Args:
            config: Agent configuration

        Returns:
            The new agent
        """
        # Opening funds
        self.economy.credit(config.faction, config.starting_money)

        player = AutoPlayer(config, self.grid, self.world, self.executor, self.economy)
        player.add_listener(lambda action, p=player: self._on_placement(p, action))
        self.players.append(player)
        logger.info("Spawned AI: %s with difficulty %s",
                    config.faction.name, config.difficulty.name)
        return player

    def spawn_all(self, configs: Iterable[AgentConfig]) -> List[AutoPlayer]:
        return [self.spawn(config) for config in configs]

    def add_listener(self, listener: Callable[[AutoPlayer, PlacementAction], None]) -> None:
        """Register a callback invoked whenever any agent commits a placement."""
        self._listeners.append(listener)

    def update(self, delta_time: float) -> int:
        """
        Advance every agent's timer.

        Agents run in spawn order; each sees the placements of those that
        ran before it in the same update.

        Returns:
            Number of agents that ran a decision cycle
        """
        return sum(1 for player in self.players if player.update(delta_time))

    def players_of(self, faction: Faction) -> List[AutoPlayer]:
        return [p for p in self.players if p.faction == faction]

    def stop(self, faction: Faction) -> None:
        for player in self.players_of(faction):
            player.stop()

    def stop_all(self) -> None:
        for player in self.players:
            player.stop()

    def distribute_income(self, faction: Faction, amount: int) -> None:
        """Credit income to a faction that has at least one agent."""
        if self.players_of(faction):
            self.economy.credit(faction, amount)

    def get_stats(self) -> Dict[Faction, AgentStats]:
        return {
            player.faction: AgentStats(
                faction=player.faction,
                money=player.money,
                is_active=player.is_active,
                placements=player.stats["placements"],
            )
            for player in self.players
        }

    def find(self, faction: Faction) -> Optional[AutoPlayer]:
        players = self.players_of(faction)
        return players[0] if players else None

    def _on_placement(self, player: AutoPlayer, action: PlacementAction) -> None:
        logger.debug("AI %s placed at %s", player.faction.name, action.grid_position)
        for listener in self._listeners:
            listener(player, action)
