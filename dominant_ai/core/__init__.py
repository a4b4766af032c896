"""
Dominant AI Core Package

This package contains the board model and the geometric scoring used by
the AI, including:
- Board snapshots, outposts and placement actions
- Dominant-triangle geometry
- Board evaluation
- Candidate filtering
- Constants and enums

All core components can be imported directly from this package.
"""

# Board
from dominant_ai.core.board import (
    BoardState, Outpost, PlacementAction, INVALID_ACTION,
    GridPosition, WorldPosition
)

# Geometry
from dominant_ai.core.geometry import (
    are_connected, point_in_triangle, find_triangles
)

# Evaluation and filtering
from dominant_ai.core.evaluator import (
    DominantEvaluator, EvaluatorWeights, ScoreBreakdown
)
from dominant_ai.core.strategy import DominantStrategy, StrategyWeights

# Constants
from dominant_ai.core.constants import (
    Faction, Difficulty,
    FACTION_DISPLAY_NAMES, FACTION_SYMBOLS,
    DEFAULT_INFLUENCE_RADIUS
)

__all__ = [
    # Board
    'BoardState', 'Outpost', 'PlacementAction', 'INVALID_ACTION',
    'GridPosition', 'WorldPosition',

    # Geometry
    'are_connected', 'point_in_triangle', 'find_triangles',

    # Evaluation
    'DominantEvaluator', 'EvaluatorWeights', 'ScoreBreakdown',
    'DominantStrategy', 'StrategyWeights',

    # Constants
    'Faction', 'Difficulty',
    'FACTION_DISPLAY_NAMES', 'FACTION_SYMBOLS',
    'DEFAULT_INFLUENCE_RADIUS'
]
