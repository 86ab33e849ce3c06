"""Carving rooms and corridors into a two-layer tile grid.

Every write here keeps one invariant: a cell never holds a floor tile and an
obstacle tile at the same time. Floor always wins; walls only go where the
floor layer is still empty, so a corridor passing through a room's wall
leaves an opening.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from burrow.environment.grid import GridLayer
from burrow.environment.tile_types import TILE_TYPE_ID_FLOOR, TILE_TYPE_ID_WALL

if TYPE_CHECKING:
    from burrow.environment.generators.base import TileLayers
    from burrow.types import WorldTilePos
    from burrow.util.coordinates import RectangularRoom


def set_floor_tile(grid: TileLayers, pos: WorldTilePos) -> None:
    """Clear any obstacle at ``pos`` and lay a floor tile."""
    if grid.get_tile(GridLayer.OBSTACLE, pos) is not None:
        grid.set_tile(GridLayer.OBSTACLE, pos, None)
    grid.set_tile(GridLayer.FLOOR, pos, TILE_TYPE_ID_FLOOR)


def set_wall_tile_if_empty(grid: TileLayers, pos: WorldTilePos) -> bool:
    """Place a wall at ``pos`` unless there is floor there.

    Returns:
        True if the cell already had floor and was left alone.
    """
    if grid.get_tile(GridLayer.FLOOR, pos) is not None:
        return True
    grid.set_tile(GridLayer.OBSTACLE, pos, TILE_TYPE_ID_WALL)
    return False


def carve_room(grid: TileLayers, room: RectangularRoom) -> None:
    """Floor the interior of ``room`` and wall its perimeter."""
    for pos in room.cells():
        if room.is_on_perimeter(pos):
            set_wall_tile_if_empty(grid, pos)
        else:
            set_floor_tile(grid, pos)


def carve_corridor_cell(grid: TileLayers, pos: WorldTilePos) -> None:
    """Floor one corridor cell and wall in its 3x3 neighbourhood."""
    set_floor_tile(grid, pos)
    x, y = pos
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            set_wall_tile_if_empty(grid, (nx, ny))
