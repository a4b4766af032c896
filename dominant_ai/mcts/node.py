"""
Monte Carlo Tree Search nodes for placement planning.

This module defines the SearchNode record and the SearchTree that owns
every node of one search. Nodes refer to their parent and children by
integer index into the tree, so the tree is a flat list with no reference
cycles and is dropped as a whole when the decision is made.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence
import math
import random

from dominant_ai.core.board import BoardState, Outpost, PlacementAction, INVALID_ACTION
from dominant_ai.core.constants import Faction
from dominant_ai.mcts.config import MCTSConfig


@dataclass
class SearchNode:
    """
    A node in the search tree.

    Each node holds the board reached by the placements along its path and
    the statistics of the simulations that passed through it.
    """
    index: int
    board: BoardState
    faction: Faction
    action: PlacementAction = INVALID_ACTION  # Placement that led here
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    visit_count: int = 0
    total_score: float = 0.0
    depth: int = 0
    fully_expanded: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def mean_score(self) -> float:
        """Average simulation score, 0.0 if never visited."""
        if self.visit_count == 0:
            return 0.0
        return self.total_score / self.visit_count

    def update(self, score: float) -> None:
        """Record one simulation result."""
        self.visit_count += 1
        self.total_score += score

    def __str__(self) -> str:
        return (f"SearchNode(#{self.index}, depth={self.depth}, "
                f"action={self.action.grid_position}, "
                f"visits={self.visit_count}, "
                f"score={self.total_score:.2f}, "
                f"children={len(self.children)})")


class SearchTree:
    """
    Arena of search nodes for a single decision.

    The root is always index 0. Child boards are independent clones of
    their parent's board with one extra outpost.
    """

    def __init__(self, board: BoardState, faction: Faction, config: Optional[MCTSConfig] = None):
        """
        Create a tree whose root holds the given board.

        Args:
            board: Board snapshot to plan from
            faction: Faction the search plans for
            config: MCTS configuration parameters
        """
        self.config = config or MCTSConfig()
        self.faction = faction
        self.nodes: List[SearchNode] = [
            SearchNode(index=0, board=board, faction=faction)
        ]

    @property
    def root(self) -> SearchNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self.nodes)

    def node(self, index: int) -> SearchNode:
        return self.nodes[index]

    def children(self, node: SearchNode) -> List[SearchNode]:
        return [self.nodes[i] for i in node.children]

    def parent(self, node: SearchNode) -> Optional[SearchNode]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def max_depth(self) -> int:
        """Depth of the deepest node created so far."""
        return max(n.depth for n in self.nodes)

    def ucb_score(self, child: SearchNode, parent_visits: int) -> float:
        """
        Calculate the UCB1 score for a child node.

        UCB1 = mean_score + exploration_weight * sqrt(ln(parent_visits) / child_visits)

        Args:
            child: Child node to calculate score for
            parent_visits: Visit count of the child's parent

        Returns:
            UCB1 score
        """
        # If the child has never been visited, treat it as having infinite value
        if child.visit_count == 0:
            return MCTSConfig.INFINITE_VALUE

        exploitation = child.total_score / child.visit_count
        exploration = math.sqrt(math.log(max(1, parent_visits)) / child.visit_count)
        return exploitation + self.config.exploration_weight * exploration

    def select_child(self, node: SearchNode) -> SearchNode:
        """
        Select the child with the highest UCB1 value.

        Ties go to the child created first.
        """
        if not node.children:
            raise ValueError("Cannot select child from node with no children")

        return max(
            self.children(node),
            key=lambda child: self.ucb_score(child, node.visit_count)
        )

    def untried_actions(
        self,
        node: SearchNode,
        actions: Sequence[PlacementAction]
    ) -> List[PlacementAction]:
        """Actions that are not yet children and whose cell is still free."""
        tried = {self.nodes[i].action.grid_position for i in node.children}
        return [
            a for a in actions
            if a.grid_position not in tried
            and not node.board.is_occupied(a.grid_position)
        ]

    def expand(
        self,
        node: SearchNode,
        actions: Sequence[PlacementAction],
        rng: random.Random
    ) -> SearchNode:
        """
        Add one child for a uniformly chosen untried action.

        Returns:
            The new child, or the node itself when nothing is left to try
        """
        untried = self.untried_actions(node, actions)
        if not untried:
            node.fully_expanded = True
            return node

        action = rng.choice(untried)

        board = node.board.clone()
        board.add_outpost(Outpost.hypothetical(
            action.grid_position, action.world_position,
            node.faction, self.config.placement_radius
        ))

        child = SearchNode(
            index=len(self.nodes),
            board=board,
            faction=node.faction,
            action=action,
            parent=node.index,
            depth=node.depth + 1,
        )
        self.nodes.append(child)
        node.children.append(child.index)

        if len(untried) == 1:
            node.fully_expanded = True

        return child

    def best_child(self) -> Optional[SearchNode]:
        """
        The most visited child of the root.

        Visit count is preferred over mean score: a child that was explored
        often is a safer answer than one that got lucky a few times.
        """
        if not self.root.children:
            return None
        return max(self.children(self.root), key=lambda c: c.visit_count)

    def principal_variation(self, max_depth: int = 10) -> List[SearchNode]:
        """Follow the most visited child from the root down."""
        path: List[SearchNode] = []
        current = self.root
        while current.children and len(path) < max_depth:
            current = max(self.children(current), key=lambda c: c.visit_count)
            path.append(current)
        return path
