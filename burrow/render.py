"""Plain-text rendering of a generated dungeon."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from burrow.environment import tile_types

if TYPE_CHECKING:
    from burrow.environment.grid import TileGrid
    from burrow.game.entities import Entity


def render_glyphs(grid: TileGrid, entities: Iterable[Entity] = ()) -> np.ndarray:
    """Character codes for every cell, indexed ``[x, y]``.

    Floor tiles are drawn over obstacles and entities over both. Later
    entities win, so pass the player last to keep it visible.
    """
    glyphs = tile_types.get_glyph_map(grid.composite()).copy()
    for entity in entities:
        if grid.in_bounds(entity.position):
            glyphs[entity.position] = ord(entity.kind.glyph)
    return glyphs


def render_text(grid: TileGrid, entities: Iterable[Entity] = ()) -> str:
    """Render the map as lines of text, top row first.

    The grid's origin is its bottom-left corner, so rows are flipped on the
    way out.
    """
    glyphs = render_glyphs(grid, entities)
    return "\n".join(
        "".join(map(chr, glyphs[:, y])).rstrip()
        for y in range(grid.height - 1, -1, -1)
    )


def tile_census(grid: TileGrid) -> dict[str, int]:
    """Count the visible tiles of each type, keyed by display name.

    Empty cells are left out.
    """
    ids, counts = np.unique(grid.composite(), return_counts=True)
    return {
        tile_types.get_tile_type_name_by_id(int(tile_id)): int(count)
        for tile_id, count in zip(ids, counts, strict=True)
        if tile_id != tile_types.TILE_TYPE_ID_VOID
    }
