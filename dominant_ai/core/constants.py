"""
Constants for the Dominant territory game.

This module defines the competing factions (store chains), AI difficulty
levels, and the default weights and distances used by the evaluator,
the candidate filter, and the planner.
"""
from enum import Enum, auto
from typing import Dict, Final, Tuple


class Faction(Enum):
    """Enum representing the competing store chains."""
    SEVEN_ELEBAN = auto()
    LAWSON = auto()
    LAWSON_100 = auto()
    NATURAL_LAWSON = auto()
    FAMOMA = auto()


# Display names for factions (for pretty printing)
FACTION_DISPLAY_NAMES: Final[Dict[Faction, str]] = {
    Faction.SEVEN_ELEBAN: "Seven-Eleban",
    Faction.LAWSON: "Lawson",
    Faction.LAWSON_100: "Lawson 100",
    Faction.NATURAL_LAWSON: "Natural Lawson",
    Faction.FAMOMA: "Famoma",
}

# Single-letter symbols for factions (for terminal board display)
FACTION_SYMBOLS: Final[Dict[Faction, str]] = {
    Faction.SEVEN_ELEBAN: "S",
    Faction.LAWSON: "L",
    Faction.LAWSON_100: "H",
    Faction.NATURAL_LAWSON: "N",
    Faction.FAMOMA: "F",
}


class Difficulty(Enum):
    """Enum representing AI difficulty levels."""
    EASY = auto()
    NORMAL = auto()
    HARD = auto()
    EXPERT = auto()


# Sentinel grid position for "no placement"
INVALID_GRID_POSITION: Final[Tuple[int, int]] = (-1, -1)

# Id given to outposts that only exist inside a hypothetical board
HYPOTHETICAL_OUTPOST_ID: Final[int] = -1

# Influence radius assumed for outposts the AI imagines placing
DEFAULT_INFLUENCE_RADIUS: Final[float] = 4.0

# Evaluator weights
TRIANGLE_WEIGHT: Final[float] = 100.0
TRIANGLE_POTENTIAL_WEIGHT: Final[float] = 50.0
ENEMY_CAPTURE_WEIGHT: Final[float] = 200.0
TERRITORY_WEIGHT: Final[float] = 10.0
CLUSTERING_WEIGHT: Final[float] = 20.0
ENEMY_DISRUPTION_WEIGHT: Final[float] = 80.0

# Evaluator geometry
EDGE_DISRUPTION_DISTANCE: Final[float] = 3.0
TERRITORY_FALLOFF: Final[float] = 0.1
CLUSTER_OPTIMAL_FACTOR: Final[float] = 1.5  # Ideal neighbour distance, in radii
CLUSTER_MIN_NEIGHBOURS: Final[int] = 2
CLUSTER_MAX_NEIGHBOURS: Final[int] = 4

# Candidate filter weights
COMPLETION_WEIGHT: Final[float] = 100.0
FRIENDLY_DISTANCE_WEIGHT: Final[float] = 30.0
ENCIRCLEMENT_WEIGHT: Final[float] = 80.0
DISRUPTION_WEIGHT: Final[float] = 60.0
EXPANSION_WEIGHT: Final[float] = 20.0

# Candidate filter geometry
OPTIMAL_FRIENDLY_DISTANCE: Final[float] = 6.0
FRIENDLY_DISTANCE_FALLOFF: Final[float] = 0.2
FIRST_PLACEMENT_FALLOFF: Final[float] = 0.05

# AI and search settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 1000
DEFAULT_MCTS_DEPTH: Final[int] = 5
DEFAULT_MCTS_EXPLORATION: Final[float] = 1.414  # UCB1 exploration parameter (sqrt(2))
DEFAULT_MAX_CANDIDATES: Final[int] = 20

# Agent economy settings
DEFAULT_STARTING_MONEY: Final[int] = 500
DEFAULT_STORE_COST: Final[int] = 100
