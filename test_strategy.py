#!/usr/bin/env python
"""
Tests for the dominant-strategy candidate filter.
"""
import math
import unittest

from dominant_ai.core.board import BoardState, Outpost
from dominant_ai.core.constants import Faction
from dominant_ai.core.strategy import DominantStrategy
from dominant_ai.mcts.search import generate_actions


def to_world(cell):
    return (float(cell[0]), 0.0, float(cell[1]))


def outpost(x, z, faction=Faction.LAWSON, outpost_id=1):
    return Outpost(outpost_id, (x, z), (float(x), 0.0, float(z)), faction, False, 4.0)


def candidates(cells, faction=Faction.LAWSON):
    return generate_actions(cells, faction, to_world)


class TestDominantStrategy(unittest.TestCase):
    """Test case for DominantStrategy."""

    def setUp(self):
        """Set up test fixtures."""
        self.strategy = DominantStrategy()
        self.empty = BoardState(width=10, height=10)

    def test_small_input_is_returned_unchanged(self):
        actions = candidates([(0, 0), (1, 1)])
        result = self.strategy.filter_candidates(self.empty, Faction.LAWSON, actions, 5)
        self.assertIs(result, actions)

    def test_output_is_bounded_subset(self):
        actions = candidates([(x, y) for x in range(10) for y in range(10)])
        result = self.strategy.filter_candidates(self.empty, Faction.LAWSON, actions, 5)

        self.assertEqual(len(result), 5)
        for action in result:
            self.assertIn(action, actions)

    def test_ties_keep_input_order(self):
        """Test that equally scored candidates keep their relative order."""
        actions = candidates([(0, 0), (6, 5), (4, 5), (5, 6), (5, 4)])
        result = self.strategy.filter_candidates(self.empty, Faction.LAWSON, actions, 3)
        self.assertEqual([a.grid_position for a in result], [(6, 5), (4, 5), (5, 6)])

    def test_first_placement_prefers_centre(self):
        actions = candidates([(0, 0), (9, 9), (5, 5), (0, 9)])
        result = self.strategy.filter_candidates(self.empty, Faction.LAWSON, actions, 1)
        self.assertEqual(result[0].grid_position, (5, 5))

    def test_triangle_completion_wins(self):
        """Test that a cell closing an own triangle beats far-away cells."""
        board = BoardState.from_snapshot(10, 10, [outpost(0, 0), outpost(4, 0, outpost_id=2)])
        actions = candidates([(9, 9), (2, 3), (9, 0)])
        result = self.strategy.filter_candidates(board, Faction.LAWSON, actions, 1)
        self.assertEqual(result[0].grid_position, (2, 3))

    def test_expansion_points_towards_centre(self):
        board = BoardState.from_snapshot(20, 20, [outpost(4, 4)])
        actions = candidates([(0, 0), (8, 8), (0, 8)])
        result = self.strategy.filter_candidates(board, Faction.LAWSON, actions, 1)
        self.assertEqual(result[0].grid_position, (8, 8))

    def test_encirclement_bonus(self):
        """Test the bonus for closing an own triangle around an enemy."""
        own = [outpost(0, 0), outpost(4, 0, outpost_id=2)]
        with_enemy = BoardState.from_snapshot(10, 10, own + [outpost(2, 1, Faction.FAMOMA, 3)])
        without_enemy = BoardState.from_snapshot(10, 10, own)
        action = candidates([(2, 4)])

        gained = (self.strategy.score_candidates(with_enemy, Faction.LAWSON, action)[0][1]
                  - self.strategy.score_candidates(without_enemy, Faction.LAWSON, action)[0][1])
        self.assertAlmostEqual(gained, 80.0)

    def test_disruption_requires_single_enemy_faction(self):
        same = BoardState.from_snapshot(10, 10, [
            outpost(0, 0, Faction.FAMOMA, 1),
            outpost(5, 0, Faction.FAMOMA, 2),
            outpost(0, 5, Faction.FAMOMA, 3),
        ])
        mixed = BoardState.from_snapshot(10, 10, [
            outpost(0, 0, Faction.FAMOMA, 1),
            outpost(5, 0, Faction.SEVEN_ELEBAN, 2),
            outpost(0, 5, Faction.FAMOMA, 3),
        ])
        action = candidates([(1, 1)])

        gained = (self.strategy.score_candidates(same, Faction.LAWSON, action)[0][1]
                  - self.strategy.score_candidates(mixed, Faction.LAWSON, action)[0][1])
        self.assertAlmostEqual(gained, 60.0)

    def test_outpost_at_centre_scores_are_finite(self):
        """Test the zero-length expansion direction."""
        board = BoardState.from_snapshot(10, 10, [outpost(5, 5)])
        actions = candidates([(x, 0) for x in range(10)])
        for _, score in self.strategy.score_candidates(board, Faction.LAWSON, actions):
            self.assertTrue(math.isfinite(score))


if __name__ == "__main__":
    unittest.main()
