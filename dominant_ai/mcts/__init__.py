"""
Monte Carlo Tree Search (MCTS) placement planner.

This package searches for the best outpost placement on a board snapshot.
Each iteration works in four steps:

1. Selection: Starting from the root node, select child nodes using UCB1 until reaching
   a leaf node or a node that hasn't been fully expanded.
2. Expansion: Create a new child node by placing on a previously untried candidate cell.
3. Simulation: From the new node, randomly place outposts down to the depth limit
   and score the resulting board with the dominant evaluator.
4. Backpropagation: Update the statistics of all nodes in the path with the score.

The planner can be configured with different iteration budgets, search depths
and exploration constants.
"""

from dominant_ai.mcts.node import SearchNode, SearchTree
from dominant_ai.mcts.search import (
    MCTSPlanner,
    mcts_search,
    generate_actions,
    select_node,
    expand_node,
    simulate_playout,
    backpropagate,
    select_best_action
)
from dominant_ai.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=1000,          # Number of MCTS iterations per placement
    exploration_weight=1.414,  # UCB1 exploration parameter (sqrt(2))
    max_depth=5,              # Placements per branch, tree plus playout
    time_limit=None,          # Optional time limit in seconds (None = no limit)
)

__all__ = [
    'MCTSPlanner',
    'SearchNode',
    'SearchTree',
    'MCTSConfig',
    'mcts_search',
    'generate_actions',
    'select_node',
    'expand_node',
    'simulate_playout',
    'backpropagate',
    'select_best_action',
    'DEFAULT_CONFIG'
]
