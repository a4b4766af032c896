"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the placement planner,
including the iteration budget, search depth, exploration constant, and the
radius assumed for outposts the planner imagines placing.
"""
from dataclasses import dataclass, fields
from typing import Optional, ClassVar
import math

from dominant_ai.core.constants import (
    DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_DEPTH, DEFAULT_MCTS_EXPLORATION,
    DEFAULT_INFLUENCE_RADIUS
)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS planner,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Number of MCTS iterations to perform per placement decision"""

    exploration_weight: float = DEFAULT_MCTS_EXPLORATION
    """UCB1 exploration constant"""

    max_depth: int = DEFAULT_MCTS_DEPTH
    """Maximum number of placements in a branch, tree plus playout"""

    time_limit: Optional[float] = None
    """Optional time budget in seconds (None = always run every iteration)"""

    # Domain parameters
    placement_radius: float = DEFAULT_INFLUENCE_RADIUS
    """Influence radius of outposts placed during the search"""

    seed: Optional[int] = None
    """Seed for the planner's random generator (None = nondeterministic)"""

    # Constants
    INFINITE_VALUE: ClassVar[float] = float('inf')
    """Value representing infinity in the algorithm"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

        if self.placement_radius < 0:
            raise ValueError("placement_radius must be non-negative")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=200, max_depth=3)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=2000,
            exploration_weight=math.sqrt(2),
            max_depth=6
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"MCTSConfig({params})"
