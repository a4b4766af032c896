"""
Geometry helpers for dominant-triangle evaluation.

Distances between outposts are measured in 3D world space. Containment and
edge tests project world positions onto the ground plane by dropping the
vertical (y) axis.

Triangle enumeration is O(n^3) in the number of outposts of one faction.
Outpost counts are expected in the tens; boards with hundreds of outposts
would want a grid-bucket index to prune candidate triples.
"""
from __future__ import annotations
import math
from typing import Dict, List, Sequence, Tuple

from dominant_ai.core.board import Outpost, WorldPosition
from dominant_ai.core.constants import Faction

Point2D = Tuple[float, float]
Triangle = Tuple[Point2D, Point2D, Point2D]


def planar(position: WorldPosition) -> Point2D:
    """Project a world position onto the ground plane (x, z)."""
    return (position[0], position[2])


def distance(a: WorldPosition, b: WorldPosition) -> float:
    """Euclidean distance between two world positions."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


def distance_2d(a: Point2D, b: Point2D) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def are_connected(a: Outpost, b: Outpost) -> bool:
    """
    Check whether two outposts can form a triangle edge.

    Uses the larger of the two radii, so a big outpost can reach a small
    one that could not reach it back on its own radius.
    """
    reach = 2.0 * max(a.influence_radius, b.influence_radius)
    return distance(a.world_position, b.world_position) <= reach


def edge_sign(p: Point2D, a: Point2D, b: Point2D) -> float:
    """Signed area test of p against the directed edge a->b."""
    return (p[0] - b[0]) * (a[1] - b[1]) - (a[0] - b[0]) * (p[1] - b[1])


def point_in_triangle(p: Point2D, triangle: Triangle) -> bool:
    """
    Check whether a point lies inside or on a triangle.

    The point is inside when the three edge signs are not mixed, which
    holds for either winding and any rotation of the vertices.
    """
    a, b, c = triangle
    d1 = edge_sign(p, a, b)
    d2 = edge_sign(p, b, c)
    d3 = edge_sign(p, c, a)

    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def point_strictly_in_triangle(p: Point2D, triangle: Triangle) -> bool:
    """Check whether a point lies inside a triangle and off all its edges."""
    a, b, c = triangle
    d1 = edge_sign(p, a, b)
    d2 = edge_sign(p, b, c)
    d3 = edge_sign(p, c, a)
    return (d1 > 0 and d2 > 0 and d3 > 0) or (d1 < 0 and d2 < 0 and d3 < 0)


def distance_to_segment(p: Point2D, a: Point2D, b: Point2D) -> float:
    """Shortest distance from a point to the segment a-b."""
    abx, aby = b[0] - a[0], b[1] - a[1]
    length_sq = abx * abx + aby * aby
    if length_sq == 0.0:
        # Degenerate edge
        return distance_2d(p, a)

    t = ((p[0] - a[0]) * abx + (p[1] - a[1]) * aby) / length_sq
    t = min(1.0, max(0.0, t))
    closest = (a[0] + t * abx, a[1] + t * aby)
    return distance_2d(p, closest)


def is_near_triangle_edge(p: Point2D, triangle: Triangle, threshold: float) -> bool:
    """Check whether a point is within threshold of any triangle edge."""
    for i in range(3):
        if distance_to_segment(p, triangle[i], triangle[(i + 1) % 3]) <= threshold:
            return True
    return False


def find_triangles(outposts: Sequence[Outpost]) -> List[Triangle]:
    """
    Find every pairwise-connected triple of outposts.

    Callers pass outposts of a single faction. Triangles are returned as
    planar vertex tuples in index order.
    """
    triangles: List[Triangle] = []
    n = len(outposts)

    for i in range(n - 2):
        for j in range(i + 1, n - 1):
            if not are_connected(outposts[i], outposts[j]):
                continue
            for k in range(j + 1, n):
                if are_connected(outposts[j], outposts[k]) and are_connected(outposts[i], outposts[k]):
                    triangles.append((
                        planar(outposts[i].world_position),
                        planar(outposts[j].world_position),
                        planar(outposts[k].world_position),
                    ))

    return triangles


def find_triangles_by_faction(outposts: Sequence[Outpost]) -> List[Triangle]:
    """Find triangles within each faction of a mixed list of outposts."""
    by_faction: Dict[Faction, List[Outpost]] = {}
    for outpost in outposts:
        by_faction.setdefault(outpost.faction, []).append(outpost)

    triangles: List[Triangle] = []
    for faction_outposts in by_faction.values():
        triangles.extend(find_triangles(faction_outposts))
    return triangles
