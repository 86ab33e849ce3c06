"""Geometry primitives for dungeon generation: rooms, overlap tests and lines."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import tcod.los

from burrow.types import TileCoord, WorldPos, WorldTilePos

if TYPE_CHECKING:
    from burrow.util.rng import RNG


@dataclass(frozen=True)
class RectangularRoom:
    """Axis-aligned room in tile coordinates.

    ``(x, y)`` is the bottom-left corner. The outermost ring of cells is the
    room's wall perimeter; everything strictly inside it is floor.
    """

    x: TileCoord
    y: TileCoord
    width: TileCoord
    height: TileCoord

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Room dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def x2(self) -> TileCoord:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def y2(self) -> TileCoord:
        """Exclusive top edge."""
        return self.y + self.height

    def center(self) -> WorldTilePos:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, pos: WorldTilePos) -> bool:
        x, y = pos
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def is_on_perimeter(self, pos: WorldTilePos) -> bool:
        x, y = pos
        if not self.contains(pos):
            return False
        return x in (self.x, self.x2 - 1) or y in (self.y, self.y2 - 1)

    def is_interior(self, pos: WorldTilePos) -> bool:
        return self.contains(pos) and not self.is_on_perimeter(pos)

    def cells(self) -> Iterator[WorldTilePos]:
        """Yield every cell of the bounding box, column by column."""
        for x in range(self.x, self.x2):
            for y in range(self.y, self.y2):
                yield (x, y)

    def interior_cells(self) -> Iterator[WorldTilePos]:
        for x in range(self.x + 1, self.x2 - 1):
            for y in range(self.y + 1, self.y2 - 1):
                yield (x, y)

    @property
    def has_interior(self) -> bool:
        return self.width >= 3 and self.height >= 3

    def random_interior_point(self, rng: RNG) -> WorldTilePos:
        """Return a uniformly random cell strictly inside the perimeter."""
        if not self.has_interior:
            raise ValueError(f"{self!r} has no interior cells")
        return (
            rng.randrange(self.x + 1, self.x2 - 1),
            rng.randrange(self.y + 1, self.y2 - 1),
        )

    def intersects(self, other: RectangularRoom, margin: int = 1) -> bool:
        """True if this room, grown by ``margin`` on each side, touches ``other``.

        With the default margin of 1 two rooms must be separated by at least
        one empty column or row, so their walls never fuse.
        """
        if margin < 0:
            raise ValueError(f"Overlap margin must be non-negative, got {margin}")
        # Far edges are exclusive, so a margin of 1 compares x2 against x directly.
        grow = margin - 1
        return (
            self.x - grow <= other.x2
            and self.x2 + grow >= other.x
            and self.y - grow <= other.y2
            and self.y2 + grow >= other.y
        )


def overlaps(
    room: RectangularRoom, others: Iterable[RectangularRoom], margin: int = 1
) -> bool:
    """Return True if ``room`` intersects any room in ``others``."""
    return any(room.intersects(other, margin) for other in others)


def rasterize_line(start: WorldTilePos, end: WorldTilePos) -> list[WorldTilePos]:
    """Return Bresenham line points from ``start`` to ``end``, both inclusive."""
    return [(int(x), int(y)) for x, y in tcod.los.bresenham(start, end).tolist()]


# =============================================================================
# BOUNDS CHECKING AND CONVERSION HELPERS
# =============================================================================


def is_valid_world_tile_pos(
    pos: WorldTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if world tile position is within map bounds."""
    x, y = pos
    return 0 <= x < map_width and 0 <= y < map_height


def cell_center(pos: WorldTilePos) -> WorldPos:
    """Continuous world position of the centre of a tile."""
    x, y = pos
    return (x + 0.5, y + 0.5)


def world_to_cell(world_pos: WorldPos) -> WorldTilePos:
    """Tile containing a continuous world position."""
    wx, wy = world_pos
    return (math.floor(wx), math.floor(wy))
