#!/usr/bin/env python
"""
Tests for the board snapshot and the dominant-triangle geometry.
"""
import itertools
import unittest

from dominant_ai.core.board import BoardState, Outpost, PlacementAction, INVALID_ACTION
from dominant_ai.core.constants import Faction
from dominant_ai.core.geometry import (
    are_connected, point_in_triangle, point_strictly_in_triangle,
    distance_to_segment, find_triangles, find_triangles_by_faction
)


def outpost(x, z, faction=Faction.LAWSON, radius=4.0, outpost_id=1):
    return Outpost(
        id=outpost_id,
        grid_position=(int(x), int(z)),
        world_position=(float(x), 0.0, float(z)),
        faction=faction,
        influence_radius=radius,
    )


class TestBoardState(unittest.TestCase):
    """Test case for BoardState."""

    def setUp(self):
        """Set up test fixtures."""
        self.board = BoardState.from_snapshot(
            10, 10,
            outposts=[outpost(1, 1), outpost(5, 5, Faction.FAMOMA, outpost_id=2)],
            available_cells=[(0, 0), (1, 1), (2, 2)],
        )

    def test_snapshot_keeps_cells_disjoint(self):
        """Test that occupied cells are never listed as available."""
        self.assertEqual(self.board.occupied_cells, {(1, 1), (5, 5)})
        self.assertEqual(self.board.available_cells, {(0, 0), (2, 2)})
        self.assertFalse(self.board.occupied_cells & self.board.available_cells)

    def test_outposts_by_faction(self):
        """Test faction queries."""
        self.assertEqual([o.grid_position for o in self.board.outposts_of(Faction.LAWSON)], [(1, 1)])
        self.assertEqual([o.grid_position for o in self.board.outposts_not_of(Faction.LAWSON)], [(5, 5)])

    def test_clone_is_independent(self):
        """Test that changes to a clone do not leak into the original."""
        clone = self.board.clone()
        clone.add_outpost(outpost(0, 0, outpost_id=3))

        self.assertEqual(len(self.board.outposts), 2)
        self.assertNotIn((0, 0), self.board.occupied_cells)
        self.assertIn((0, 0), self.board.available_cells)
        self.assertEqual(len(clone.outposts), 3)
        self.assertNotIn((0, 0), clone.available_cells)

    def test_remove_outpost_frees_cell(self):
        """Test that removing an outpost makes its cell available again."""
        first = self.board.outposts[0]
        self.board.remove_outpost(first)
        self.assertNotIn((1, 1), self.board.occupied_cells)
        self.assertIn((1, 1), self.board.available_cells)

    def test_add_to_occupied_cell_raises(self):
        """Test that two outposts cannot share a cell."""
        with self.assertRaises(ValueError):
            self.board.add_outpost(outpost(1, 1, Faction.FAMOMA, outpost_id=9))

    def test_remove_missing_outpost_raises(self):
        with self.assertRaises(ValueError):
            self.board.remove_outpost(outpost(7, 7, outpost_id=9))


class TestPlacementAction(unittest.TestCase):
    """Test case for PlacementAction."""

    def test_invalid_sentinel(self):
        """Test the invalid sentinel."""
        self.assertFalse(INVALID_ACTION.is_valid)
        self.assertEqual(INVALID_ACTION.grid_position, (-1, -1))
        self.assertEqual(INVALID_ACTION.score, float('-inf'))

    def test_validity_requires_both_coordinates(self):
        self.assertTrue(PlacementAction((0, 0)).is_valid)
        self.assertFalse(PlacementAction((-1, 3)).is_valid)
        self.assertFalse(PlacementAction((3, -1)).is_valid)

    def test_with_score_copies(self):
        action = PlacementAction((2, 3), (2.0, 0.0, 3.0), Faction.LAWSON)
        scored = action.with_score(12.5)
        self.assertEqual(scored.score, 12.5)
        self.assertEqual(action.score, 0.0)
        self.assertEqual(scored.grid_position, (2, 3))


class TestGeometry(unittest.TestCase):
    """Test case for the geometry helpers."""

    def test_connected_boundary_is_inclusive(self):
        """Test that outposts exactly 2r apart are connected."""
        self.assertTrue(are_connected(outpost(0, 0), outpost(8, 0)))
        b = Outpost(2, (8, 0), (8.001, 0.0, 0.0), Faction.LAWSON, False, 4.0)
        self.assertFalse(are_connected(outpost(0, 0), b))

    def test_connected_uses_larger_radius(self):
        """Test that the larger radius decides connectivity, in both orders."""
        big = outpost(0, 0, radius=4.0)
        small = outpost(7, 0, radius=1.0)
        self.assertTrue(are_connected(big, small))
        self.assertTrue(are_connected(small, big))

    def test_zero_radius_never_connects(self):
        self.assertFalse(are_connected(outpost(0, 0, radius=0.0), outpost(1, 0, radius=0.0)))

    def test_connectivity_includes_vertical_axis(self):
        """Test that the vertical axis counts towards distance."""
        a = Outpost(1, (0, 0), (0.0, 0.0, 0.0), Faction.LAWSON, False, 4.0)
        b = Outpost(2, (0, 0), (0.0, 9.0, 0.0), Faction.LAWSON, False, 4.0)
        self.assertFalse(are_connected(a, b))

    def test_point_in_triangle_any_vertex_order(self):
        """Test that containment does not depend on vertex order."""
        vertices = [(0.0, 0.0), (3.0, 0.0), (0.0, 3.0)]
        points = {
            (1.0, 1.0): True,     # inside
            (1.5, 0.0): True,     # on an edge
            (0.0, 0.0): True,     # on a vertex
            (3.0, 3.0): False,    # outside
            (-0.5, 1.0): False,   # outside
        }
        for perm in itertools.permutations(vertices):
            for point, expected in points.items():
                self.assertEqual(point_in_triangle(point, perm), expected,
                                 f"{point} with vertices {perm}")

    def test_strictly_inside_excludes_edges(self):
        triangle = ((0.0, 0.0), (3.0, 0.0), (0.0, 3.0))
        for perm in itertools.permutations(triangle):
            self.assertTrue(point_strictly_in_triangle((1.0, 1.0), perm))
            self.assertFalse(point_strictly_in_triangle((1.5, 0.0), perm))

    def test_distance_to_segment(self):
        self.assertAlmostEqual(distance_to_segment((1.0, 1.0), (0.0, 0.0), (4.0, 0.0)), 1.0)
        self.assertAlmostEqual(distance_to_segment((6.0, 0.0), (0.0, 0.0), (4.0, 0.0)), 2.0)
        self.assertAlmostEqual(distance_to_segment((3.0, 4.0), (0.0, 0.0), (0.0, 0.0)), 5.0)

    def test_find_triangles(self):
        """Test that only pairwise-connected triples count."""
        triangle = [outpost(0, 0), outpost(3, 0), outpost(0, 3)]
        self.assertEqual(len(find_triangles(triangle)), 1)
        self.assertEqual(len(find_triangles(triangle + [outpost(30, 30)])), 1)
        self.assertEqual(len(find_triangles(triangle[:2])), 0)

        # Four mutually connected outposts form four triangles
        square = triangle + [outpost(3, 3)]
        self.assertEqual(len(find_triangles(square)), 4)

    def test_find_triangles_by_faction_never_mixes(self):
        mixed = [
            outpost(0, 0, Faction.FAMOMA),
            outpost(3, 0, Faction.FAMOMA),
            outpost(0, 3, Faction.SEVEN_ELEBAN),
        ]
        self.assertEqual(find_triangles_by_faction(mixed), [])


if __name__ == "__main__":
    unittest.main()
