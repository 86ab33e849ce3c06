from __future__ import annotations

from random import Random

from burrow.environment.generators import DungeonGenerator, DungeonParams
from burrow.environment.grid import TileGrid
from burrow.game.game_world import GameWorld


def make_generator(
    params: DungeonParams,
    seed: int | None = None,
    *,
    world: GameWorld | None = None,
) -> tuple[DungeonGenerator, TileGrid, GameWorld]:
    """Build a generator wired to a fresh grid and world.

    With a ``seed`` every draw comes from one ``Random(seed)``; otherwise the
    module RNG streams (reset per test by conftest) are used.
    """
    grid = TileGrid(params.map_width, params.map_height)
    world = world if world is not None else GameWorld()
    generator = DungeonGenerator(
        params,
        grid,
        world,
        world,
        seeded_rng=Random(seed) if seed is not None else None,
    )
    return generator, grid, world


SCENARIO_PARAMS = DungeonParams(
    map_width=40,
    map_height=40,
    room_min_size=4,
    room_max_size=8,
    max_rooms=10,
    max_monsters_per_room=2,
    max_items_per_room=2,
)
