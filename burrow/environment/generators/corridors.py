"""L-shaped corridors between room centres."""

from __future__ import annotations

from typing import TYPE_CHECKING

from burrow.environment.carving import carve_corridor_cell
from burrow.util.coordinates import rasterize_line

if TYPE_CHECKING:
    from burrow.environment.generators.base import TileLayers
    from burrow.types import WorldTilePos
    from burrow.util.coordinates import RectangularRoom
    from burrow.util.rng import RNG


def choose_elbow(
    start: WorldTilePos, end: WorldTilePos, rng: RNG
) -> WorldTilePos:
    """Pick the bend of an L-shaped path from ``start`` to ``end``."""
    if rng.random() < 0.5:
        # Horizontal first, then vertical.
        return (end[0], start[1])
    # Vertical first, then horizontal.
    return (start[0], end[1])


def corridor_path(
    start: WorldTilePos, end: WorldTilePos, rng: RNG
) -> list[WorldTilePos]:
    elbow = choose_elbow(start, end, rng)
    return rasterize_line(start, elbow) + rasterize_line(elbow, end)


def tunnel_between(
    grid: TileLayers,
    room_a: RectangularRoom,
    room_b: RectangularRoom,
    rng: RNG,
) -> list[WorldTilePos]:
    """Carve an L-shaped corridor from the centre of ``room_a`` to ``room_b``.

    Returns:
        The carved cells in path order. The elbow cell appears twice, once as
        the end of the first leg and once as the start of the second.
    """
    path = corridor_path(room_a.center(), room_b.center(), rng)
    for pos in path:
        carve_corridor_cell(grid, pos)
    return path
