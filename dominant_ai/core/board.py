"""
Board snapshot for the Dominant territory game.

This module defines the data the AI plans against:
- Outpost: an immutable record of one placed store
- PlacementAction: a proposed placement, with the INVALID_ACTION sentinel
- BoardState: a snapshot of every outpost plus the occupied and free cells

A BoardState is built fresh from the live world at the start of each
decision, cloned freely during search, and thrown away afterwards.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Set, Tuple

from dominant_ai.core.constants import (
    Faction, INVALID_GRID_POSITION, HYPOTHETICAL_OUTPOST_ID,
    DEFAULT_INFLUENCE_RADIUS
)

GridPosition = Tuple[int, int]
WorldPosition = Tuple[float, float, float]


@dataclass(frozen=True)
class Outpost:
    """
    A single placed store.

    Outposts are never mutated; moving one or changing its radius is
    modelled as removing it and adding a new record.
    """
    id: int
    grid_position: GridPosition
    world_position: WorldPosition
    faction: Faction
    is_primary_agent_owned: bool = False
    influence_radius: float = DEFAULT_INFLUENCE_RADIUS

    @classmethod
    def hypothetical(
        cls,
        grid_position: GridPosition,
        world_position: WorldPosition,
        faction: Faction,
        radius: float = DEFAULT_INFLUENCE_RADIUS
    ) -> Outpost:
        """Create an outpost that only exists on a simulated board."""
        return cls(
            id=HYPOTHETICAL_OUTPOST_ID,
            grid_position=grid_position,
            world_position=world_position,
            faction=faction,
            is_primary_agent_owned=False,
            influence_radius=radius,
        )


@dataclass(frozen=True)
class PlacementAction:
    """A proposed outpost placement and the score the AI gave it."""
    grid_position: GridPosition
    world_position: WorldPosition = (0.0, 0.0, 0.0)
    faction: Optional[Faction] = None
    score: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Both grid coordinates are non-negative."""
        return self.grid_position[0] >= 0 and self.grid_position[1] >= 0

    def with_score(self, score: float) -> PlacementAction:
        """Return a copy of this action carrying a new score."""
        return replace(self, score=score)

    def to_outpost(self, radius: float = DEFAULT_INFLUENCE_RADIUS) -> Outpost:
        """The hypothetical outpost this action would create."""
        return Outpost.hypothetical(
            self.grid_position, self.world_position, self.faction, radius
        )

    def __str__(self) -> str:
        if not self.is_valid:
            return "PlacementAction(INVALID)"
        faction = self.faction.name if self.faction is not None else "?"
        return f"Place {faction} at {self.grid_position} (score {self.score:.2f})"


# Returned whenever there is no legal placement to make
INVALID_ACTION = PlacementAction(
    grid_position=INVALID_GRID_POSITION,
    score=float('-inf'),
)


@dataclass
class BoardState:
    """
    Snapshot of the board the AI evaluates.

    Invariants: occupied_cells and available_cells are disjoint, and every
    outpost's grid position is in occupied_cells.
    """
    width: int
    height: int
    outposts: List[Outpost] = field(default_factory=list)
    occupied_cells: Set[GridPosition] = field(default_factory=set)
    available_cells: Set[GridPosition] = field(default_factory=set)

    @classmethod
    def from_snapshot(
        cls,
        width: int,
        height: int,
        outposts: Iterable[Outpost],
        available_cells: Iterable[GridPosition] = ()
    ) -> BoardState:
        """
        Build a board from a world snapshot.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            outposts: Every outpost currently on the board
            available_cells: Cells a new outpost could legally go on

        Returns:
            New BoardState
        """
        board = cls(width=width, height=height)
        board.available_cells = set(available_cells)
        for outpost in outposts:
            board.add_outpost(outpost)
        return board

    @property
    def center(self) -> Tuple[float, float]:
        """Centre of the board in grid coordinates."""
        return (self.width / 2.0, self.height / 2.0)

    def clone(self) -> BoardState:
        """
        Create an independent copy of this board.

        Outpost records are immutable, so copying the containers is enough
        for the clone to share no mutable state with the original.
        """
        return BoardState(
            width=self.width,
            height=self.height,
            outposts=list(self.outposts),
            occupied_cells=set(self.occupied_cells),
            available_cells=set(self.available_cells),
        )

    def is_occupied(self, cell: GridPosition) -> bool:
        return cell in self.occupied_cells

    def add_outpost(self, outpost: Outpost) -> None:
        """
        Place an outpost on the board.

        Raises:
            ValueError: If the outpost's cell is already occupied
        """
        if outpost.grid_position in self.occupied_cells:
            raise ValueError(f"Cell {outpost.grid_position} is already occupied")
        self.outposts.append(outpost)
        self.occupied_cells.add(outpost.grid_position)
        self.available_cells.discard(outpost.grid_position)

    def remove_outpost(self, outpost: Outpost) -> None:
        """
        Remove an outpost and free its cell.

        Raises:
            ValueError: If the outpost is not on this board
        """
        self.outposts.remove(outpost)
        self.occupied_cells.discard(outpost.grid_position)
        self.available_cells.add(outpost.grid_position)

    def apply(self, action: PlacementAction, radius: float = DEFAULT_INFLUENCE_RADIUS) -> Outpost:
        """Commit a placement action as a hypothetical outpost and return it."""
        outpost = action.to_outpost(radius)
        self.add_outpost(outpost)
        return outpost

    def outposts_of(self, faction: Faction) -> List[Outpost]:
        """Outposts owned by a faction, in placement order."""
        return [o for o in self.outposts if o.faction == faction]

    def outposts_not_of(self, faction: Faction) -> List[Outpost]:
        """Outposts owned by every other faction, in placement order."""
        return [o for o in self.outposts if o.faction != faction]

    def __str__(self) -> str:
        return (f"BoardState({self.width}x{self.height}, "
                f"outposts={len(self.outposts)}, "
                f"available={len(self.available_cells)})")
