"""
Dominant AI - Monte Carlo Tree Search agents for a territory-control game.

This package provides the board evaluation, candidate filtering and MCTS
planning used by AI store chains that compete to enclose territory with
dominant triangles, along with a decision loop that drives them.
"""

__version__ = "0.1.0"
__author__ = "Dominant AI Team"

# Make key components available at package level
from dominant_ai.core.board import BoardState, Outpost, PlacementAction, INVALID_ACTION
from dominant_ai.core.constants import Faction, Difficulty
from dominant_ai.core.evaluator import DominantEvaluator
from dominant_ai.core.strategy import DominantStrategy
from dominant_ai.mcts.search import MCTSPlanner
from dominant_ai.agent.player import AutoPlayer

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
