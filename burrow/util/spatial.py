"""
A spatial hash grid for fast "what is standing here?" lookups.

`GameWorld.is_occupied` is backed by this index, so population and player
placement test each candidate cell in O(1) average time instead of scanning
every entity in the world.
"""

import abc
from collections import defaultdict
from typing import Generic, Protocol, TypeAlias, TypeVar

from burrow.types import WorldTileCoord

Coord: TypeAlias = tuple[int, int]


class HasPosition(Protocol):
    """A protocol for objects that have integer x and y attributes."""

    x: int
    y: int


T = TypeVar("T", bound=HasPosition)


class SpatialIndex(abc.ABC, Generic[T]):
    """Abstract base class for a spatial indexing data structure."""

    @abc.abstractmethod
    def add(self, obj: T) -> None:
        """Add an object to the index."""

    @abc.abstractmethod
    def update(self, obj: T) -> None:
        """Update the position of an object that has moved."""

    @abc.abstractmethod
    def get_at_point(self, x: WorldTileCoord, y: WorldTileCoord) -> list[T]:
        """Get all objects at a specific tile (x, y)."""


class SpatialHashGrid(SpatialIndex[T]):
    """
    Buckets objects by fixed-size grid cells.

    Objects are stored in a dictionary mapping cell coordinates to the set of
    objects inside that cell, so a point query only has to look at one cell.
    """

    def __init__(self, cell_size: int = 16):
        if cell_size <= 0:
            raise ValueError("Cell size must be a positive integer.")
        self.cell_size = cell_size
        self.grid: dict[Coord, set[T]] = defaultdict(set)
        self._obj_to_cell: dict[T, Coord] = {}

    def __len__(self) -> int:
        return len(self._obj_to_cell)

    def _hash(self, x: int, y: int) -> Coord:
        return x // self.cell_size, y // self.cell_size

    def add(self, obj: T) -> None:
        cell_xy = self._hash(obj.x, obj.y)
        self.grid[cell_xy].add(obj)
        self._obj_to_cell[obj] = cell_xy

    def update(self, obj: T) -> None:
        old_cell_xy = self._obj_to_cell.get(obj)
        new_cell_xy = self._hash(obj.x, obj.y)

        if old_cell_xy == new_cell_xy:
            return

        if old_cell_xy is not None:
            cell = self.grid.get(old_cell_xy)
            if cell is not None:
                cell.discard(obj)
                if not cell:
                    del self.grid[old_cell_xy]

        self.grid[new_cell_xy].add(obj)
        self._obj_to_cell[obj] = new_cell_xy

    def get_at_point(self, x: int, y: int) -> list[T]:
        cell_contents = self.grid.get(self._hash(x, y), ())
        # A cell covers a region; filter for the exact coordinates.
        return [obj for obj in cell_contents if obj.x == x and obj.y == y]
