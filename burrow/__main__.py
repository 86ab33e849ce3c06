"""Generate a dungeon and print it."""

from __future__ import annotations

import argparse
import logging

from burrow import config
from burrow.environment.generators import (
    DungeonGenerationError,
    DungeonGenerator,
    DungeonParams,
)
from burrow.environment.grid import TileGrid
from burrow.game.game_world import GameWorld
from burrow.render import render_text, tile_census
from burrow.util import rng

logger = logging.getLogger(__name__)


def parse_seed(value: str) -> int | str:
    """Integers seed as integers, anything else as a string."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burrow", description="Generate a rooms-and-corridors dungeon"
    )
    parser.add_argument("--width", type=int, default=config.MAP_WIDTH)
    parser.add_argument("--height", type=int, default=config.MAP_HEIGHT)
    parser.add_argument(
        "--seed",
        type=parse_seed,
        default=config.RANDOM_SEED,
        help="Master seed; integers and strings both work",
    )
    parser.add_argument("--max-rooms", type=int, default=config.MAX_ROOMS)
    parser.add_argument("--room-min-size", type=int, default=config.ROOM_MIN_SIZE)
    parser.add_argument("--room-max-size", type=int, default=config.ROOM_MAX_SIZE)
    parser.add_argument(
        "--max-monsters", type=int, default=config.MAX_MONSTERS_PER_ROOM
    )
    parser.add_argument("--max-items", type=int, default=config.MAX_ITEMS_PER_ROOM)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log generation details"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    rng.init(args.seed)

    params = DungeonParams(
        map_width=args.width,
        map_height=args.height,
        room_max_size=args.room_max_size,
        room_min_size=args.room_min_size,
        max_rooms=args.max_rooms,
        max_monsters_per_room=args.max_monsters,
        max_items_per_room=args.max_items,
    )
    grid = TileGrid(params.map_width, params.map_height)
    world = GameWorld()

    try:
        dungeon = DungeonGenerator(params, grid, world, world).generate()
    except (ValueError, DungeonGenerationError) as e:
        logger.error("%s", e)
        return 1

    # Player last so it is drawn over anything sharing its cell.
    entities = [a for a in world.actors if not a.is_player] + [dungeon.player]
    print(render_text(grid, entities))
    print()
    print(
        f"Seed {args.seed!r}: {len(dungeon.rooms)} room(s), "
        f"{dungeon.rejected} placement(s) rejected"
    )
    census = ", ".join(
        f"{count} {name}" for name, count in sorted(tile_census(grid).items())
    )
    print(f"  tiles: {census}; {int(grid.walkable.sum())} walkable")
    for index, room in enumerate(dungeon.rooms):
        population = dungeon.populations[index]
        print(
            f"  room {index}: ({room.x}, {room.y}) {room.width}x{room.height}, "
            f"{len(population.monsters)} monster(s), {len(population.items)} item(s)"
        )
    print(f"  up stairs {dungeon.up_stairs}, down stairs {dungeon.down_stairs}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
