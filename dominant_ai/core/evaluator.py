"""
Board evaluation based on the dominant strategy.

The evaluator scores a board from one faction's point of view by summing
six weighted heuristics built around dominant triangles: three connected
outposts of the same faction that claim the area between them.

1. Triangle completion: own triangles, plus a bonus per enemy inside one
2. Triangle potential: connected pairs of own outposts
3. Enemy capture: (enemy, own triangle) containment pairs
4. Territory control: own outposts near the board centre
5. Clustering: own outposts spaced at a comfortable distance
6. Enemy disruption: own outposts sitting on or inside enemy triangles

The evaluator holds no state between calls, so identical boards always get
bit-identical scores.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Sequence

from dominant_ai.core.board import BoardState, Outpost, PlacementAction
from dominant_ai.core.constants import (
    Faction, DEFAULT_INFLUENCE_RADIUS,
    TRIANGLE_WEIGHT, TRIANGLE_POTENTIAL_WEIGHT, ENEMY_CAPTURE_WEIGHT,
    TERRITORY_WEIGHT, CLUSTERING_WEIGHT, ENEMY_DISRUPTION_WEIGHT,
    EDGE_DISRUPTION_DISTANCE, TERRITORY_FALLOFF, CLUSTER_OPTIMAL_FACTOR,
    CLUSTER_MIN_NEIGHBOURS, CLUSTER_MAX_NEIGHBOURS
)
from dominant_ai.core.geometry import (
    Triangle, planar, distance, distance_2d, are_connected, point_in_triangle,
    point_strictly_in_triangle, is_near_triangle_edge, find_triangles, find_triangles_by_faction
)


@dataclass(frozen=True)
class EvaluatorWeights:
    """Weights for the six evaluation heuristics."""
    triangle: float = TRIANGLE_WEIGHT
    triangle_potential: float = TRIANGLE_POTENTIAL_WEIGHT
    enemy_capture: float = ENEMY_CAPTURE_WEIGHT
    territory: float = TERRITORY_WEIGHT
    clustering: float = CLUSTERING_WEIGHT
    enemy_disruption: float = ENEMY_DISRUPTION_WEIGHT


@dataclass(frozen=True)
class ScoreBreakdown:
    """Weighted contribution of each heuristic to a board score."""
    triangle: float = 0.0
    triangle_potential: float = 0.0
    enemy_capture: float = 0.0
    territory: float = 0.0
    clustering: float = 0.0
    enemy_disruption: float = 0.0

    @property
    def total(self) -> float:
        # Summed in a fixed order so totals are reproducible
        return (self.triangle + self.triangle_potential + self.enemy_capture
                + self.territory + self.clustering + self.enemy_disruption)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def __sub__(self, other: ScoreBreakdown) -> ScoreBreakdown:
        return ScoreBreakdown(**{
            f.name: getattr(self, f.name) - getattr(other, f.name)
            for f in fields(self)
        })


class DominantEvaluator:
    """
    Scores boards for a faction using dominant-triangle heuristics.

    Instances are cheap and stateless apart from their weights; they can be
    shared between planners.
    """

    def __init__(
        self,
        weights: EvaluatorWeights = EvaluatorWeights(),
        placement_radius: float = DEFAULT_INFLUENCE_RADIUS
    ):
        """
        Initialize the evaluator.

        Args:
            weights: Heuristic weights
            placement_radius: Radius given to outposts created by evaluate_delta
        """
        self.weights = weights
        self.placement_radius = placement_radius

    def evaluate(self, board: BoardState, faction: Faction) -> float:
        """
        Score a board from a faction's point of view.

        Args:
            board: Board to evaluate
            faction: Faction to score for

        Returns:
            Sum of the weighted heuristics
        """
        return self.breakdown(board, faction).total

    def breakdown(self, board: BoardState, faction: Faction) -> ScoreBreakdown:
        """
        Score a board and report each heuristic's weighted contribution.

        Args:
            board: Board to evaluate
            faction: Faction to score for

        Returns:
            ScoreBreakdown whose total equals evaluate(board, faction)
        """
        mine = board.outposts_of(faction)
        enemies = board.outposts_not_of(faction)
        w = self.weights

        # Own triangles feed both completion and capture
        triangles = find_triangles(mine) if len(mine) >= 3 else []

        return ScoreBreakdown(
            triangle=self._triangle_completion(triangles, enemies) * w.triangle,
            triangle_potential=self._triangle_potential(mine) * w.triangle_potential,
            enemy_capture=self._enemy_capture(triangles, enemies) * w.enemy_capture,
            territory=self._territory_control(mine, board) * w.territory,
            clustering=self._clustering(mine) * w.clustering,
            enemy_disruption=self._enemy_disruption(mine, enemies) * w.enemy_disruption,
        )

    def evaluate_delta(
        self,
        board: BoardState,
        action: PlacementAction,
        faction: Faction
    ) -> float:
        """
        Score change for a faction if an action were applied.

        The placed outpost belongs to the action's faction (or to the scoring
        faction when the action carries none) and gets placement_radius.
        """
        after = self._board_with(board, action, faction)
        return self.evaluate(after, faction) - self.evaluate(board, faction)

    def breakdown_delta(
        self,
        board: BoardState,
        action: PlacementAction,
        faction: Faction
    ) -> ScoreBreakdown:
        """Per-heuristic version of evaluate_delta."""
        after = self._board_with(board, action, faction)
        return self.breakdown(after, faction) - self.breakdown(board, faction)

    def _board_with(
        self,
        board: BoardState,
        action: PlacementAction,
        faction: Faction
    ) -> BoardState:
        owner = action.faction if action.faction is not None else faction
        after = board.clone()
        after.add_outpost(Outpost.hypothetical(
            action.grid_position, action.world_position, owner, self.placement_radius
        ))
        return after

    def _triangle_completion(
        self,
        triangles: List[Triangle],
        enemies: Sequence[Outpost]
    ) -> float:
        score = 0.0
        for triangle in triangles:
            score += 1.0
            for enemy in enemies:
                if point_in_triangle(planar(enemy.world_position), triangle):
                    score += 2.0
        return score

    def _triangle_potential(self, mine: Sequence[Outpost]) -> float:
        score = 0.0
        for i in range(len(mine) - 1):
            for j in range(i + 1, len(mine)):
                if are_connected(mine[i], mine[j]):
                    score += 1.0
        return score

    def _enemy_capture(
        self,
        triangles: List[Triangle],
        enemies: Sequence[Outpost]
    ) -> float:
        score = 0.0
        for enemy in enemies:
            point = planar(enemy.world_position)
            for triangle in triangles:
                if point_in_triangle(point, triangle):
                    score += 1.0
        return score

    def _territory_control(self, mine: Sequence[Outpost], board: BoardState) -> float:
        center = board.center
        score = 0.0
        for outpost in mine:
            dist = distance_2d(outpost.grid_position, center)
            score += 1.0 / (1.0 + dist * TERRITORY_FALLOFF)
        return score

    def _clustering(self, mine: Sequence[Outpost]) -> float:
        if len(mine) < 2:
            return 0.0

        score = 0.0
        for i, outpost in enumerate(mine):
            optimal = outpost.influence_radius * CLUSTER_OPTIMAL_FACTOR
            if optimal <= 0.0:
                # Zero radius never clusters
                continue

            nearby = 0
            for j, other in enumerate(mine):
                if i == j:
                    continue
                dist = distance(outpost.world_position, other.world_position)
                if dist <= optimal * 2.0:
                    nearby += 1
                    score += max(0.0, 1.0 - abs(dist - optimal) / optimal)

            if CLUSTER_MIN_NEIGHBOURS <= nearby <= CLUSTER_MAX_NEIGHBOURS:
                score += 1.0

        return score

    def _enemy_disruption(
        self,
        mine: Sequence[Outpost],
        enemies: Sequence[Outpost]
    ) -> float:
        if len(enemies) < 3:
            return 0.0

        enemy_triangles = find_triangles_by_faction(enemies)
        score = 0.0
        for outpost in mine:
            point = planar(outpost.world_position)
            for triangle in enemy_triangles:
                if is_near_triangle_edge(point, triangle, EDGE_DISRUPTION_DISTANCE):
                    score += 0.5
                if point_strictly_in_triangle(point, triangle):
                    score += 1.0
        return score
