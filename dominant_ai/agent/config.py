"""
Configuration for AI agents.

An AgentConfig carries everything one agent needs: its faction, the
decision timing, how often it places at random, and the search budget.
Difficulty presets tighten these together. Configs are built explicitly
(directly, from a preset, or with AgentConfigBuilder) and handed to the
agent when it is created.
"""
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional

from dominant_ai.core.constants import (
    Faction, Difficulty, DEFAULT_INFLUENCE_RADIUS, DEFAULT_MCTS_EXPLORATION,
    DEFAULT_STARTING_MONEY, DEFAULT_STORE_COST
)
from dominant_ai.mcts.config import MCTSConfig


# Settings that scale with difficulty
DIFFICULTY_PRESETS: Dict[Difficulty, Dict[str, float]] = {
    Difficulty.EASY: {
        "decision_interval": 5.0,
        "max_iterations": 200,
        "random_placement_chance": 0.4,
    },
    Difficulty.NORMAL: {
        "decision_interval": 3.0,
        "max_iterations": 500,
        "random_placement_chance": 0.15,
    },
    Difficulty.HARD: {
        "decision_interval": 2.0,
        "max_iterations": 1000,
        "random_placement_chance": 0.05,
    },
    Difficulty.EXPERT: {
        "decision_interval": 1.5,
        "max_iterations": 2000,
        "random_placement_chance": 0.02,
    },
}


@dataclass(frozen=True)
class AgentConfig:
    """Configuration parameters for one AI agent."""
    faction: Faction = Faction.LAWSON
    difficulty: Difficulty = Difficulty.NORMAL

    # Timing
    decision_interval: float = 3.0
    """Seconds between decisions"""

    # Strategy
    random_placement_chance: float = 0.15
    """Probability of skipping the search and placing on a random legal cell"""

    max_iterations: int = 500
    max_depth: int = 4
    max_candidates: int = 25
    exploration_constant: float = DEFAULT_MCTS_EXPLORATION
    placement_radius: float = DEFAULT_INFLUENCE_RADIUS

    # Economy
    starting_money: int = DEFAULT_STARTING_MONEY
    store_cost: int = DEFAULT_STORE_COST

    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.decision_interval <= 0:
            raise ValueError("decision_interval must be positive")

        if not 0.0 <= self.random_placement_chance <= 1.0:
            raise ValueError("random_placement_chance must be between 0 and 1")

        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")

        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")

        if self.max_candidates <= 0:
            raise ValueError("max_candidates must be positive")

        if self.store_cost < 0:
            raise ValueError("store_cost must be non-negative")

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty, faction: Faction = Faction.LAWSON, **overrides) -> 'AgentConfig':
        """
        Create a configuration from a difficulty preset.

        Args:
            difficulty: Difficulty level
            faction: Faction the agent plays
            **overrides: Any field to set explicitly

        Returns:
            AgentConfig object
        """
        params = dict(DIFFICULTY_PRESETS[difficulty])
        params.update(overrides)
        return cls(faction=faction, difficulty=difficulty, **params)

    def with_difficulty(self, difficulty: Difficulty) -> 'AgentConfig':
        """Copy of this config with a difficulty preset applied."""
        return replace(self, difficulty=difficulty, **DIFFICULTY_PRESETS[difficulty])

    def mcts_config(self) -> MCTSConfig:
        """The search configuration this agent's planner uses."""
        return MCTSConfig(
            iterations=self.max_iterations,
            exploration_weight=self.exploration_constant,
            max_depth=self.max_depth,
            placement_radius=self.placement_radius,
            seed=self.seed,
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class AgentConfigBuilder:
    """
    Step-by-step construction of an AgentConfig.

    Example:
        config = (AgentConfigBuilder(Faction.FAMOMA)
                  .difficulty(Difficulty.HARD)
                  .max_candidates(15)
                  .seed(7)
                  .build())
    """

    def __init__(self, faction: Faction = Faction.LAWSON):
        self._params: Dict[str, object] = {"faction": faction}

    def difficulty(self, difficulty: Difficulty) -> 'AgentConfigBuilder':
        """Apply a difficulty preset; later calls can still override its values."""
        self._params["difficulty"] = difficulty
        self._params.update(DIFFICULTY_PRESETS[difficulty])
        return self

    def decision_interval(self, seconds: float) -> 'AgentConfigBuilder':
        self._params["decision_interval"] = seconds
        return self

    def random_placement_chance(self, chance: float) -> 'AgentConfigBuilder':
        self._params["random_placement_chance"] = chance
        return self

    def search(
        self,
        max_iterations: Optional[int] = None,
        max_depth: Optional[int] = None,
        exploration_constant: Optional[float] = None
    ) -> 'AgentConfigBuilder':
        if max_iterations is not None:
            self._params["max_iterations"] = max_iterations
        if max_depth is not None:
            self._params["max_depth"] = max_depth
        if exploration_constant is not None:
            self._params["exploration_constant"] = exploration_constant
        return self

    def max_candidates(self, count: int) -> 'AgentConfigBuilder':
        self._params["max_candidates"] = count
        return self

    def economy(self, starting_money: int, store_cost: int) -> 'AgentConfigBuilder':
        self._params["starting_money"] = starting_money
        self._params["store_cost"] = store_cost
        return self

    def seed(self, seed: Optional[int]) -> 'AgentConfigBuilder':
        self._params["seed"] = seed
        return self

    def build(self) -> AgentConfig:
        return AgentConfig(**self._params)
