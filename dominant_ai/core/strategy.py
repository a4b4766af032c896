"""
Candidate filtering based on the dominant strategy.

Searching every free cell is too expensive, so before the tree search
each candidate placement is scored with five quick heuristics and only
the best few are kept:

1. Triangle completion: closes (or nearly closes) an own triangle
2. Friendly distance: nearest own outpost sits at a comfortable distance
3. Encirclement: forms an own triangle around an enemy outpost
4. Enemy disruption: lands inside an enemy triangle
5. Territory expansion: points away from the own centroid towards the
   board centre (or simply near the centre for a first placement)
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from dominant_ai.core.board import BoardState, Outpost, PlacementAction
from dominant_ai.core.constants import (
    Faction, DEFAULT_INFLUENCE_RADIUS, DEFAULT_MAX_CANDIDATES,
    COMPLETION_WEIGHT, FRIENDLY_DISTANCE_WEIGHT, ENCIRCLEMENT_WEIGHT,
    DISRUPTION_WEIGHT, EXPANSION_WEIGHT, OPTIMAL_FRIENDLY_DISTANCE,
    FRIENDLY_DISTANCE_FALLOFF, FIRST_PLACEMENT_FALLOFF
)
from dominant_ai.core.geometry import planar, distance, distance_2d, point_in_triangle


@dataclass(frozen=True)
class StrategyWeights:
    """Weights and distances for the candidate filter."""
    completion: float = COMPLETION_WEIGHT
    friendly_distance: float = FRIENDLY_DISTANCE_WEIGHT
    encirclement: float = ENCIRCLEMENT_WEIGHT
    disruption: float = DISRUPTION_WEIGHT
    expansion: float = EXPANSION_WEIGHT
    optimal_distance: float = OPTIMAL_FRIENDLY_DISTANCE
    candidate_radius: float = DEFAULT_INFLUENCE_RADIUS


class DominantStrategy:
    """
    Narrows placement candidates to the most promising ones.

    Every filter term uses a single connection limit of twice the candidate
    radius, for existing outposts as well as for the candidate itself.
    """

    def __init__(self, weights: StrategyWeights = StrategyWeights()):
        self.weights = weights

    @property
    def reach(self) -> float:
        return self.weights.candidate_radius * 2.0

    def filter_candidates(
        self,
        board: BoardState,
        faction: Faction,
        candidates: List[PlacementAction],
        max_candidates: int = DEFAULT_MAX_CANDIDATES
    ) -> List[PlacementAction]:
        """
        Keep the highest-scoring candidates.

        Args:
            board: Current board
            faction: Faction choosing a placement
            candidates: Every legal placement
            max_candidates: How many candidates to keep

        Returns:
            The input list itself when it is already small enough, otherwise
            the top max_candidates by descending score. Ties keep their input
            order.
        """
        if len(candidates) <= max_candidates:
            return candidates

        scored = self.score_candidates(board, faction, candidates)
        scored.sort(key=lambda item: item[1], reverse=True)
        return [action for action, _ in scored[:max_candidates]]

    def score_candidates(
        self,
        board: BoardState,
        faction: Faction,
        candidates: Sequence[PlacementAction]
    ) -> List[Tuple[PlacementAction, float]]:
        """Score every candidate, keeping input order."""
        mine = board.outposts_of(faction)
        enemies = board.outposts_not_of(faction)
        return [
            (candidate, self.score_candidate(candidate, mine, enemies, board))
            for candidate in candidates
        ]

    def score_candidate(
        self,
        candidate: PlacementAction,
        mine: Sequence[Outpost],
        enemies: Sequence[Outpost],
        board: BoardState
    ) -> float:
        """Weighted sum of the five filter heuristics for one candidate."""
        w = self.weights
        score = 0.0
        score += self._triangle_completion(candidate, mine) * w.completion
        score += self._friendly_distance(candidate, mine) * w.friendly_distance
        score += self._encirclement(candidate, mine, enemies) * w.encirclement
        score += self._enemy_triangle_disruption(candidate, enemies) * w.disruption
        score += self._territory_expansion(candidate, mine, board) * w.expansion
        return score

    def _triangle_completion(self, candidate: PlacementAction, mine: Sequence[Outpost]) -> float:
        if len(mine) < 2:
            return 0.0

        pos = candidate.world_position
        connections = 0

        for i in range(len(mine)):
            if distance(pos, mine[i].world_position) > self.reach:
                continue

            for j in range(i + 1, len(mine)):
                dist_j = distance(pos, mine[j].world_position)
                dist_ij = distance(mine[i].world_position, mine[j].world_position)
                if dist_j <= self.reach and dist_ij <= self.reach:
                    # Candidate closes a triangle
                    return 1.0

            connections += 1

        if connections >= 2:
            return 0.5
        if connections >= 1:
            return 0.2
        return 0.0

    def _friendly_distance(self, candidate: PlacementAction, mine: Sequence[Outpost]) -> float:
        if not mine:
            return 0.5

        nearest = min(distance(candidate.world_position, o.world_position) for o in mine)
        deviation = abs(nearest - self.weights.optimal_distance)
        return 1.0 / (1.0 + deviation * FRIENDLY_DISTANCE_FALLOFF)

    def _encirclement(
        self,
        candidate: PlacementAction,
        mine: Sequence[Outpost],
        enemies: Sequence[Outpost]
    ) -> float:
        if len(mine) < 2 or not enemies:
            return 0.0

        pos = candidate.world_position
        enemy_points = [planar(e.world_position) for e in enemies]
        score = 0.0

        for i in range(len(mine)):
            for j in range(i + 1, len(mine)):
                a, b = mine[i], mine[j]
                if (distance(pos, a.world_position) > self.reach
                        or distance(pos, b.world_position) > self.reach
                        or distance(a.world_position, b.world_position) > self.reach):
                    continue

                triangle = (planar(pos), planar(a.world_position), planar(b.world_position))
                for point in enemy_points:
                    if point_in_triangle(point, triangle):
                        score += 1.0

        return score

    def _enemy_triangle_disruption(
        self,
        candidate: PlacementAction,
        enemies: Sequence[Outpost]
    ) -> float:
        if len(enemies) < 3:
            return 0.0

        point = planar(candidate.world_position)
        score = 0.0
        n = len(enemies)

        for i in range(n - 2):
            for j in range(i + 1, n - 1):
                for k in range(j + 1, n):
                    e1, e2, e3 = enemies[i], enemies[j], enemies[k]
                    if not (e1.faction == e2.faction == e3.faction):
                        continue
                    if (distance(e1.world_position, e2.world_position) > self.reach
                            or distance(e2.world_position, e3.world_position) > self.reach
                            or distance(e1.world_position, e3.world_position) > self.reach):
                        continue

                    triangle = (
                        planar(e1.world_position),
                        planar(e2.world_position),
                        planar(e3.world_position),
                    )
                    if point_in_triangle(point, triangle):
                        score += 1.0

        return score

    def _territory_expansion(
        self,
        candidate: PlacementAction,
        mine: Sequence[Outpost],
        board: BoardState
    ) -> float:
        cell = candidate.grid_position

        if not mine:
            # First placement: stay near the centre
            dist = distance_2d(cell, board.center)
            return 1.0 / (1.0 + dist * FIRST_PLACEMENT_FALLOFF)

        centroid = np.mean(np.array([o.grid_position for o in mine], dtype=float), axis=0)
        expansion_dir = np.array(board.center, dtype=float) - centroid
        candidate_dir = np.array(cell, dtype=float) - centroid

        expansion_norm = np.linalg.norm(expansion_dir)
        candidate_norm = np.linalg.norm(candidate_dir)
        if expansion_norm == 0.0 or candidate_norm == 0.0:
            # No direction to compare against
            return 0.5

        alignment = float(np.dot(expansion_dir / expansion_norm, candidate_dir / candidate_norm))
        return (alignment + 1.0) * 0.5
