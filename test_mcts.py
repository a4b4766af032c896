#!/usr/bin/env python
"""
Tests for the MCTS placement planner.
"""
import math
import random
import unittest

from dominant_ai.core.board import BoardState, Outpost, INVALID_ACTION
from dominant_ai.core.constants import Faction
from dominant_ai.core.evaluator import DominantEvaluator
from dominant_ai.mcts.config import MCTSConfig
from dominant_ai.mcts.node import SearchNode, SearchTree
from dominant_ai.mcts.search import MCTSPlanner, generate_actions, mcts_search


def to_world(cell):
    return (float(cell[0]), 0.0, float(cell[1]))


def make_board(width=8, height=8, outposts=()):
    cells = [(x, y) for x in range(width) for y in range(height)]
    return BoardState.from_snapshot(width, height, outposts, cells)


class TestMCTSConfig(unittest.TestCase):
    """Test case for MCTSConfig."""

    def test_validation(self):
        """Test that invalid parameters raise ValueError."""
        with self.assertRaises(ValueError):
            MCTSConfig(iterations=0)
        with self.assertRaises(ValueError):
            MCTSConfig(exploration_weight=-1.0)
        with self.assertRaises(ValueError):
            MCTSConfig(max_depth=0)
        with self.assertRaises(ValueError):
            MCTSConfig(time_limit=0.0)

    def test_presets_and_dict(self):
        self.assertEqual(MCTSConfig.fast().iterations, 200)
        self.assertEqual(MCTSConfig.deep().max_depth, 6)

        config = MCTSConfig.from_dict({"iterations": 50, "unknown": True})
        self.assertEqual(config.iterations, 50)
        self.assertEqual(MCTSConfig.from_dict(config.to_dict()), config)


class TestSearchTree(unittest.TestCase):
    """Test case for SearchTree."""

    def setUp(self):
        """Set up test fixtures."""
        self.tree = SearchTree(make_board(), Faction.LAWSON, MCTSConfig(exploration_weight=1.414))

    def add_child(self, visits, total):
        root = self.tree.root
        child = SearchNode(
            index=len(self.tree.nodes),
            board=root.board,
            faction=root.faction,
            parent=root.index,
            visit_count=visits,
            total_score=total,
            depth=1,
        )
        self.tree.nodes.append(child)
        root.children.append(child.index)
        return child

    def test_ucb_score(self):
        child = self.add_child(visits=2, total=10.0)
        expected = 5.0 + 1.414 * math.sqrt(math.log(8) / 2)
        self.assertAlmostEqual(self.tree.ucb_score(child, 8), expected)

    def test_unvisited_child_is_infinite(self):
        child = self.add_child(visits=0, total=0.0)
        self.assertEqual(self.tree.ucb_score(child, 8), float('inf'))

    def test_select_child_without_children_raises(self):
        with self.assertRaises(ValueError):
            self.tree.select_child(self.tree.root)

    def test_best_child_uses_visits(self):
        """Test that the most visited child wins even with a lower mean."""
        often = self.add_child(visits=10, total=100.0)
        self.add_child(visits=2, total=1000.0)
        self.assertIs(self.tree.best_child(), often)

    def test_expand_marks_fully_expanded(self):
        actions = generate_actions([(0, 0), (1, 1)], Faction.LAWSON, to_world)
        rng = random.Random(0)
        root = self.tree.root

        first = self.tree.expand(root, actions, rng)
        self.assertFalse(root.fully_expanded)
        second = self.tree.expand(root, actions, rng)
        self.assertTrue(root.fully_expanded)

        cells = {first.action.grid_position, second.action.grid_position}
        self.assertEqual(cells, {(0, 0), (1, 1)})
        self.assertTrue(first.board.is_occupied(first.action.grid_position))
        self.assertFalse(root.board.is_occupied(first.action.grid_position))


class TestMCTSSearch(unittest.TestCase):
    """Test case for the search loop and MCTSPlanner."""

    def setUp(self):
        """Set up test fixtures."""
        self.board = make_board()
        self.cells = [(1, 1), (3, 3), (4, 4), (6, 2), (2, 6)]

    def planner(self, **kwargs):
        params = {"iterations": 100, "max_depth": 3, "seed": 7}
        params.update(kwargs)
        return MCTSPlanner(MCTSConfig(**params))

    def test_runs_exact_iterations(self):
        """Test that every iteration passes through the root and one root child."""
        planner = self.planner()
        action = planner.find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)

        self.assertTrue(action.is_valid)
        self.assertIn(action.grid_position, self.cells)
        self.assertEqual(planner.last_stats["iterations"], 100)

        tree = planner.last_tree
        self.assertEqual(tree.root.visit_count, 100)
        self.assertEqual(sum(c.visit_count for c in tree.children(tree.root)), 100)

    def test_tree_respects_max_depth(self):
        planner = self.planner(iterations=300, max_depth=2)
        planner.find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)
        self.assertLessEqual(planner.last_tree.max_depth(), 2)
        self.assertLessEqual(planner.last_stats["max_depth"], 2)

    def test_result_is_most_visited_child(self):
        planner = self.planner()
        action = planner.find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)

        best = planner.last_tree.best_child()
        self.assertEqual(action.grid_position, best.action.grid_position)
        self.assertAlmostEqual(action.score, best.mean_score)

    def test_empty_cells(self):
        planner = self.planner()
        action = planner.find_best_placement(self.board, Faction.LAWSON, [], to_world)
        self.assertIs(action, INVALID_ACTION)

    def test_all_cells_occupied(self):
        """Test that candidates already occupied on the board yield no action."""
        outposts = [
            Outpost(i + 1, cell, to_world(cell), Faction.FAMOMA)
            for i, cell in enumerate(self.cells)
        ]
        board = make_board(outposts=outposts)
        action = self.planner().find_best_placement(board, Faction.LAWSON, self.cells, to_world)
        self.assertFalse(action.is_valid)

    def test_single_cell(self):
        """Test that a single candidate is returned with its mean score."""
        planner = self.planner(iterations=20)
        action = planner.find_best_placement(self.board, Faction.LAWSON, [(4, 4)], to_world)

        self.assertEqual(action.grid_position, (4, 4))
        self.assertEqual(action.faction, Faction.LAWSON)

        # Nothing else to place, so every playout scores the same board
        after = self.board.clone()
        after.add_outpost(Outpost.hypothetical((4, 4), to_world((4, 4)), Faction.LAWSON))
        expected = DominantEvaluator().evaluate(after, Faction.LAWSON)
        self.assertAlmostEqual(action.score, expected)

    def test_same_seed_same_result(self):
        first = self.planner().find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)
        second = self.planner().find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)
        self.assertEqual(first, second)

    def test_board_is_not_modified(self):
        outposts_before = list(self.board.outposts)
        available_before = set(self.board.available_cells)
        self.planner().find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)

        self.assertEqual(self.board.outposts, outposts_before)
        self.assertEqual(self.board.available_cells, available_before)

    def test_time_limit_stops_early(self):
        tree = SearchTree(self.board.clone(), Faction.LAWSON,
                          MCTSConfig(iterations=100000, time_limit=1e-9))
        actions = generate_actions(self.cells, Faction.LAWSON, to_world)
        _, stats = mcts_search(tree, actions, DominantEvaluator(), random.Random(0))

        self.assertTrue(stats["stopped_early"])
        self.assertLess(stats["iterations"], 100000)

    def test_action_statistics(self):
        planner = self.planner()
        planner.find_best_placement(self.board, Faction.LAWSON, self.cells, to_world)
        stats = planner.last_stats

        self.assertEqual(set(stats["action_visits"]), set(self.cells))
        self.assertEqual(sum(stats["action_visits"].values()), 100)
        self.assertGreater(stats["node_count"], len(self.cells))
        self.assertTrue(planner.get_principal_variation())


if __name__ == "__main__":
    unittest.main()
