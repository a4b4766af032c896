"""
Contracts for the world an AI agent plays in.

The agent never touches the live board directly. It reads the grid and the
placed outposts through these interfaces, and asks the world to commit a
placement and charge for it once it has decided.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from dominant_ai.core.board import GridPosition, Outpost, WorldPosition
from dominant_ai.core.constants import Faction


class GridProvider(ABC):
    """Grid topology and coordinate conversion."""

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def is_cell_legal(self, cell: GridPosition) -> bool:
        """
        Check whether an outpost may be built on a cell.

        Args:
            cell: Grid position to check

        Returns:
            True if the cell is a building slot, False otherwise
        """
        pass

    @abstractmethod
    def grid_to_world(self, cell: GridPosition) -> WorldPosition:
        """
        Convert a grid cell to its world position.

        Args:
            cell: Grid position to convert

        Returns:
            (x, y, z) world position, y being the vertical axis
        """
        pass


class WorldQuery(ABC):
    """Read access to the outposts currently on the board."""

    @abstractmethod
    def current_outposts(self) -> List[Outpost]:
        pass


class PlacementExecutor(ABC):
    """Commits placements to the authoritative board."""

    @abstractmethod
    def execute_placement(self, cell: GridPosition, faction: Faction) -> bool:
        """
        Build an outpost for a faction.

        Args:
            cell: Grid position to build on
            faction: Faction that owns the new outpost

        Returns:
            True if the outpost was built, False if the cell was no longer free
        """
        pass


class Economy(ABC):
    """Funds held by each faction."""

    @abstractmethod
    def balance(self, faction: Faction) -> int:
        pass

    @abstractmethod
    def can_afford(self, faction: Faction, amount: int) -> bool:
        pass

    @abstractmethod
    def deduct(self, faction: Faction, amount: int) -> None:
        pass

    @abstractmethod
    def credit(self, faction: Faction, amount: int) -> None:
        pass
