"""
In-memory game world for running AI agents outside a game engine.

GridArena implements every interface an agent needs: a grid of building
slots, the authoritative list of outposts, placement, and per-faction
funds. It is used by the command-line demo and the tests.
"""
from __future__ import annotations
from typing import Dict, List, Optional
import itertools

import numpy as np

from dominant_ai.core.board import GridPosition, Outpost, WorldPosition
from dominant_ai.core.constants import (
    Faction, FACTION_SYMBOLS, DEFAULT_INFLUENCE_RADIUS
)
from dominant_ai.agent.interfaces import Economy, GridProvider, PlacementExecutor, WorldQuery


class GridArena(GridProvider, WorldQuery, PlacementExecutor, Economy):
    """
    A rectangular grid world with building slots, outposts and funds.

    Cells are building slots unless blocked. World positions lie on the
    ground plane: (x * cell_size, 0, y * cell_size).
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        cell_size: float = 1.0,
        building_density: float = 1.0,
        outpost_radius: float = DEFAULT_INFLUENCE_RADIUS,
        seed: Optional[int] = None
    ):
        """
        Create an arena.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            cell_size: World units per cell
            building_density: Fraction of cells that are building slots
            outpost_radius: Influence radius of every built outpost
            seed: Seed for the building-slot layout
        """
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        if not 0.0 <= building_density <= 1.0:
            raise ValueError("building_density must be between 0 and 1")

        self._width = width
        self._height = height
        self.cell_size = cell_size
        self.outpost_radius = outpost_radius

        rng = np.random.default_rng(seed)
        self.slots = rng.random((width, height)) < building_density

        self.outposts: List[Outpost] = []
        self.funds: Dict[Faction, int] = {}
        self._ids = itertools.count(1)

    # Grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, cell: GridPosition) -> bool:
        return 0 <= cell[0] < self._width and 0 <= cell[1] < self._height

    def is_cell_legal(self, cell: GridPosition) -> bool:
        return self.in_bounds(cell) and bool(self.slots[cell[0], cell[1]])

    def block(self, cell: GridPosition) -> None:
        """Turn a cell into a non-building cell (road, park, ...)."""
        self.slots[cell[0], cell[1]] = False

    def grid_to_world(self, cell: GridPosition) -> WorldPosition:
        return (cell[0] * self.cell_size, 0.0, cell[1] * self.cell_size)

    # World

    def current_outposts(self) -> List[Outpost]:
        return list(self.outposts)

    def outpost_at(self, cell: GridPosition) -> Optional[Outpost]:
        for outpost in self.outposts:
            if outpost.grid_position == cell:
                return outpost
        return None

    def place(
        self,
        cell: GridPosition,
        faction: Faction,
        is_primary_agent_owned: bool = False,
        radius: Optional[float] = None
    ) -> Optional[Outpost]:
        """
        Build an outpost directly, bypassing the economy.

        Returns:
            The new outpost, or None if the cell is illegal or taken
        """
        if not self.is_cell_legal(cell) or self.outpost_at(cell) is not None:
            return None

        outpost = Outpost(
            id=next(self._ids),
            grid_position=cell,
            world_position=self.grid_to_world(cell),
            faction=faction,
            is_primary_agent_owned=is_primary_agent_owned,
            influence_radius=self.outpost_radius if radius is None else radius,
        )
        self.outposts.append(outpost)
        return outpost

    def remove(self, outpost: Outpost) -> None:
        self.outposts.remove(outpost)

    def execute_placement(self, cell: GridPosition, faction: Faction) -> bool:
        return self.place(tuple(cell), faction) is not None

    # Economy

    def balance(self, faction: Faction) -> int:
        return self.funds.get(faction, 0)

    def can_afford(self, faction: Faction, amount: int) -> bool:
        return self.balance(faction) >= amount

    def deduct(self, faction: Faction, amount: int) -> None:
        if not self.can_afford(faction, amount):
            raise ValueError(f"{faction.name} cannot afford {amount}")
        self.funds[faction] = self.balance(faction) - amount

    def credit(self, faction: Faction, amount: int) -> None:
        self.funds[faction] = self.balance(faction) + amount

    # Display

    def count_by_faction(self) -> Dict[Faction, int]:
        counts: Dict[Faction, int] = {}
        for outpost in self.outposts:
            counts[outpost.faction] = counts.get(outpost.faction, 0) + 1
        return counts

    def render(self) -> str:
        """Text picture of the grid: faction letters, '.' for free slots, '#' for blocked."""
        rows = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                outpost = self.outpost_at((x, y))
                if outpost is not None:
                    row.append(FACTION_SYMBOLS[outpost.faction])
                elif self.slots[x, y]:
                    row.append(".")
                else:
                    row.append("#")
            rows.append(" ".join(row))
        return "\n".join(rows)
