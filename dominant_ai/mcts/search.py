"""
Monte Carlo Tree Search (MCTS) placement planner.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Descend the tree with UCB1 to a node that can still grow
2. Expansion: Add a child for one untried candidate placement
3. Simulation: Randomly place more outposts and evaluate the final board
4. Backpropagation: Add the score to every node on the path to the root

The search runs exactly `iterations` iterations unless a time limit is
configured. The answer is the most visited child of the root.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import random
import time

from dominant_ai.core.board import (
    BoardState, Outpost, PlacementAction, INVALID_ACTION, GridPosition, WorldPosition
)
from dominant_ai.core.constants import Faction
from dominant_ai.core.evaluator import DominantEvaluator
from dominant_ai.mcts.config import MCTSConfig
from dominant_ai.mcts.node import SearchNode, SearchTree


def generate_actions(
    cells: Sequence[GridPosition],
    faction: Faction,
    cell_to_world: Callable[[GridPosition], WorldPosition]
) -> List[PlacementAction]:
    """
    Turn grid cells into placement actions for a faction.

    Args:
        cells: Candidate cells
        faction: Faction placing the outpost
        cell_to_world: Converts a grid cell to its world position

    Returns:
        One unscored action per cell, in input order
    """
    return [
        PlacementAction(
            grid_position=tuple(cell),
            world_position=tuple(cell_to_world(cell)),
            faction=faction,
            score=0.0,
        )
        for cell in cells
    ]


def mcts_search(
    tree: SearchTree,
    actions: Sequence[PlacementAction],
    evaluator: DominantEvaluator,
    rng: random.Random
) -> Tuple[PlacementAction, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search from the root of a tree.

    Args:
        tree: Tree holding the root board (grown in place)
        actions: Candidate placements the search may use at every depth
        evaluator: Scores simulated boards
        rng: Source of every random choice

    Returns:
        Tuple of (best action, search statistics)
    """
    config = tree.config
    stats: Dict[str, Any] = {
        "iterations": 0,
        "stopped_early": False,
        "total_simulation_steps": 0,
        "time_elapsed": 0.0,
    }

    if not actions:
        stats["node_count"] = len(tree)
        return INVALID_ACTION, stats

    start_time = time.perf_counter()

    for _ in range(config.iterations):
        # Check time limit if specified
        if config.time_limit is not None and time.perf_counter() - start_time > config.time_limit:
            stats["stopped_early"] = True
            break

        # 1. Selection
        node = select_node(tree)

        # 2. Expansion
        node = expand_node(tree, node, actions, rng)

        # 3. Simulation
        score, steps = simulate_playout(node, actions, evaluator, config, rng)

        # 4. Backpropagation
        backpropagate(tree, node, score)

        stats["iterations"] += 1
        stats["total_simulation_steps"] += steps

    stats["time_elapsed"] = time.perf_counter() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["node_count"] = len(tree)
    stats["max_depth"] = tree.max_depth()
    stats.update(get_action_statistics(tree))

    return select_best_action(tree), stats


def select_node(tree: SearchTree) -> SearchNode:
    """
    Descend from the root to the node the next iteration should grow.

    Children are picked by UCB1. The descent stops at a leaf, or at a node
    that still has untried placements and room below max_depth.
    """
    node = tree.root
    while node.children:
        if not node.fully_expanded and node.depth < tree.config.max_depth:
            break
        node = tree.select_child(node)
    return node


def expand_node(
    tree: SearchTree,
    node: SearchNode,
    actions: Sequence[PlacementAction],
    rng: random.Random
) -> SearchNode:
    """
    Grow the tree below a node if it still can.

    Returns:
        The new child, or the node itself at max depth or when fully expanded
    """
    if node.fully_expanded or node.depth >= tree.config.max_depth:
        return node
    return tree.expand(node, actions, rng)


def simulate_playout(
    node: SearchNode,
    actions: Sequence[PlacementAction],
    evaluator: DominantEvaluator,
    config: MCTSConfig,
    rng: random.Random
) -> Tuple[float, int]:
    """
    Random playout from a node.

    The node's faction keeps placing outposts on uniformly chosen free
    candidate cells until the branch reaches max_depth or no candidate is
    left, then the board is evaluated for that faction.

    Returns:
        Tuple of (final board score, number of placements made)
    """
    board = node.board.clone()
    steps = 0

    while steps < config.max_depth - node.depth:
        free = [a for a in actions if not board.is_occupied(a.grid_position)]
        if not free:
            break

        action = rng.choice(free)
        board.add_outpost(Outpost.hypothetical(
            action.grid_position, action.world_position,
            node.faction, config.placement_radius
        ))
        steps += 1

    return evaluator.evaluate(board, node.faction), steps


def backpropagate(tree: SearchTree, node: SearchNode, score: float) -> None:
    """Add a simulation score to a node and all of its ancestors."""
    current: Optional[SearchNode] = node
    while current is not None:
        current.update(score)
        current = tree.parent(current)


def select_best_action(tree: SearchTree) -> PlacementAction:
    """
    The action of the most visited root child, scored with its mean.

    Returns:
        Best action, or INVALID_ACTION if the root was never expanded
    """
    best = tree.best_child()
    if best is None or best.visit_count == 0:
        return INVALID_ACTION
    return best.action.with_score(best.total_score / best.visit_count)


def get_action_statistics(tree: SearchTree) -> Dict[str, Dict[GridPosition, float]]:
    """
    Visit counts and mean scores of every root child.

    Returns:
        Dictionary with "action_visits" and "action_scores", keyed by cell
    """
    visits: Dict[GridPosition, float] = {}
    scores: Dict[GridPosition, float] = {}
    for child in tree.children(tree.root):
        cell = child.action.grid_position
        visits[cell] = child.visit_count
        scores[cell] = child.mean_score
    return {"action_visits": visits, "action_scores": scores}


def get_principal_variation(tree: SearchTree, max_depth: int = 10) -> List[Tuple[PlacementAction, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Returns:
        List of (action, mean score) pairs
    """
    return [(n.action, n.mean_score) for n in tree.principal_variation(max_depth)]


class MCTSPlanner:
    """
    Finds the best outpost placement with Monte Carlo Tree Search.

    A planner is owned by one agent. Each call builds a fresh tree from the
    snapshot it is given and discards it afterwards, apart from keeping the
    last tree and statistics for inspection.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        evaluator: Optional[DominantEvaluator] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the planner.

        Args:
            config: MCTS configuration parameters
            evaluator: Board evaluator used to score playouts
            rng: Random generator (defaults to one seeded from config.seed)
        """
        self.config = config or MCTSConfig()
        self.evaluator = evaluator or DominantEvaluator(
            placement_radius=self.config.placement_radius
        )
        self.rng = rng or random.Random(self.config.seed)

        self.last_stats: Dict[str, Any] = {}
        self.last_tree: Optional[SearchTree] = None

    def find_best_placement(
        self,
        board: BoardState,
        faction: Faction,
        cells: Sequence[GridPosition],
        cell_to_world: Callable[[GridPosition], WorldPosition]
    ) -> PlacementAction:
        """
        Search for the best placement among candidate cells.

        Args:
            board: Board snapshot (not modified)
            faction: Faction to plan for
            cells: Candidate cells, usually already filtered
            cell_to_world: Converts a grid cell to its world position

        Returns:
            Best action with its mean simulation score, or INVALID_ACTION
            when there is nothing to place
        """
        if not cells:
            self.last_stats = {"iterations": 0}
            self.last_tree = None
            return INVALID_ACTION

        actions = generate_actions(cells, faction, cell_to_world)
        return self.search(board, faction, actions)

    def search(
        self,
        board: BoardState,
        faction: Faction,
        actions: Sequence[PlacementAction]
    ) -> PlacementAction:
        """Search over prepared placement actions."""
        tree = SearchTree(board.clone(), faction, self.config)
        action, stats = mcts_search(tree, actions, self.evaluator, self.rng)

        self.last_tree = tree
        self.last_stats = stats
        return action

    def get_principal_variation(self) -> List[Tuple[PlacementAction, float]]:
        if self.last_tree is None:
            return []
        return get_principal_variation(self.last_tree)

    def __str__(self) -> str:
        return f"MCTSPlanner({self.config.iterations} iterations, depth {self.config.max_depth})"
