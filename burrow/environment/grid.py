"""Two-layer tile grid backed by NumPy arrays.

The dungeon is stored as two independent layers of tile type IDs:

- ``FLOOR``: walkable ground, including stairs.
- ``OBSTACLE``: walls and anything else that blocks movement.

Each cell holds at most one tile per layer; ``TILE_TYPE_ID_VOID`` means the
layer is empty at that cell. Arrays are indexed ``[x, y]`` (Fortran order),
matching the rest of the tile-based code.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from burrow.environment import tile_types
from burrow.environment.tile_types import TILE_TYPE_ID_VOID
from burrow.types import TileCoord, WorldTilePos
from burrow.util.coordinates import is_valid_world_tile_pos


class GridLayer(Enum):
    """Named layers of the tile grid."""

    FLOOR = "floor"
    OBSTACLE = "obstacle"


class TileGrid:
    """In-memory implementation of the two-layer tile grid."""

    def __init__(self, width: TileCoord, height: TileCoord) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width: TileCoord = width
        self.height: TileCoord = height
        self.layers: dict[GridLayer, np.ndarray] = {
            layer: np.full(
                (width, height), fill_value=TILE_TYPE_ID_VOID, dtype=np.uint8, order="F"
            )
            for layer in GridLayer
        }

    @property
    def floor(self) -> np.ndarray:
        return self.layers[GridLayer.FLOOR]

    @property
    def obstacle(self) -> np.ndarray:
        return self.layers[GridLayer.OBSTACLE]

    def in_bounds(self, pos: WorldTilePos) -> bool:
        return is_valid_world_tile_pos(pos, self.width, self.height)

    def _check_bounds(self, pos: WorldTilePos) -> None:
        # NumPy would silently wrap negative indices.
        if not self.in_bounds(pos):
            raise IndexError(
                f"Tile {pos} is outside the {self.width}x{self.height} grid"
            )

    def get_tile(self, layer: GridLayer, pos: WorldTilePos) -> int | None:
        """Return the tile type ID on ``layer`` at ``pos``, or None if empty."""
        self._check_bounds(pos)
        tile_id = int(self.layers[layer][pos])
        return None if tile_id == TILE_TYPE_ID_VOID else tile_id

    def set_tile(
        self, layer: GridLayer, pos: WorldTilePos, tile_id: int | None
    ) -> None:
        """Store ``tile_id`` on ``layer`` at ``pos``; None clears the cell."""
        self._check_bounds(pos)
        self.layers[layer][pos] = TILE_TYPE_ID_VOID if tile_id is None else tile_id

    def composite(self) -> np.ndarray:
        """Single map of tile IDs with floor tiles drawn over obstacles."""
        return np.where(self.floor != TILE_TYPE_ID_VOID, self.floor, self.obstacle)

    @property
    def walkable(self) -> np.ndarray:
        """Boolean array where True means nothing blocks the cell."""
        return tile_types.get_walkable_map(self.floor) & (
            self.obstacle == TILE_TYPE_ID_VOID
        )
