"""Dungeon-style map generation with rooms and corridors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from burrow import config
from burrow.environment.carving import carve_room
from burrow.environment.grid import GridLayer
from burrow.environment.tile_types import (
    TILE_TYPE_ID_DOWN_STAIRS,
    TILE_TYPE_ID_UP_STAIRS,
)
from burrow.game.spawn_tables import ITEM_SPAWN_TABLE, MONSTER_SPAWN_TABLE, SpawnTable
from burrow.util import rng
from burrow.util.coordinates import RectangularRoom, cell_center

from .base import (
    ActorRegistry,
    BaseMapGenerator,
    EntityFactory,
    NoRoomsGeneratedError,
    PlayerPlacementError,
    TileLayers,
)
from .corridors import tunnel_between
from .placement import RoomPlacementSampler
from .population import EntityPopulator, PopulationResult

if TYPE_CHECKING:
    from burrow.game.entities import Entity
    from burrow.types import TileCoord, WorldTilePos
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)

_room_rng = rng.get("map.rooms")
_corridor_rng = rng.get("map.corridors")
_stairs_rng = rng.get("map.stairs")
_population_rng = rng.get("world.population")


@dataclass(frozen=True)
class DungeonParams:
    """Inputs to one generation pass."""

    map_width: TileCoord = config.MAP_WIDTH
    map_height: TileCoord = config.MAP_HEIGHT
    room_max_size: int = config.ROOM_MAX_SIZE
    room_min_size: int = config.ROOM_MIN_SIZE
    max_rooms: int = config.MAX_ROOMS
    max_monsters_per_room: int = config.MAX_MONSTERS_PER_ROOM
    max_items_per_room: int = config.MAX_ITEMS_PER_ROOM
    max_player_placement_attempts: int = config.MAX_PLAYER_PLACEMENT_ATTEMPTS

    def validate(self) -> None:
        """Raise ValueError if the parameters cannot produce a valid map."""
        positive = {
            "map_width": self.map_width,
            "map_height": self.map_height,
            "room_max_size": self.room_max_size,
            "room_min_size": self.room_min_size,
            "max_rooms": self.max_rooms,
            "max_player_placement_attempts": self.max_player_placement_attempts,
        }
        for name, value in positive.items():
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.max_monsters_per_room < 0:
            raise ValueError(
                f"max_monsters_per_room must be >= 0, got {self.max_monsters_per_room}"
            )
        if self.max_items_per_room < 0:
            raise ValueError(
                f"max_items_per_room must be >= 0, got {self.max_items_per_room}"
            )
        # Stairs, spawns and the player all need a cell inside the walls.
        if self.room_min_size < 3:
            raise ValueError(
                f"room_min_size must be at least 3, got {self.room_min_size}"
            )
        if self.room_min_size >= self.room_max_size:
            raise ValueError(
                f"room_min_size ({self.room_min_size}) must be less than "
                f"room_max_size ({self.room_max_size})"
            )
        if (
            self.map_width - self.room_max_size < 1
            or self.map_height - self.room_max_size < 1
        ):
            raise ValueError(
                f"room_max_size ({self.room_max_size}) is too large for a "
                f"{self.map_width}x{self.map_height} map"
            )


class GenerationPhase(Enum):
    IDLE = auto()
    PLACING_ROOMS = auto()
    CONNECTING_AND_POPULATING = auto()
    PLACING_STAIRS_AND_PLAYER = auto()
    DONE = auto()


@dataclass
class GeneratedDungeon:
    """A container for everything one generation pass produced.

    Attributes:
        rooms: Accepted rooms in acceptance order.
        corridors: Carved corridor paths; ``corridors[i]`` joins ``rooms[i]``
            and ``rooms[i + 1]``.
        populations: Per-room spawn results, parallel to ``rooms``.
        down_stairs: Cell of the down stairs, inside the last room.
        up_stairs: Cell of the up stairs and player start, inside the first room.
        player: The created or relocated player entity.
        rejected: Placement attempts turned down because the candidate
            overlapped an accepted room.
    """

    rooms: list[RectangularRoom]
    corridors: list[list[WorldTilePos]]
    populations: list[PopulationResult]
    down_stairs: WorldTilePos
    up_stairs: WorldTilePos
    player: Entity
    rejected: int
    spawned: list[Entity] = field(default_factory=list)


class DungeonGenerator(BaseMapGenerator):
    """Generates a chain of rooms joined by corridors and fills them.

    Every accepted room is carved, tunnelled to the room accepted just before
    it and populated, in that order. Rooms are only ever connected to their
    predecessor, so the dungeon's room graph is a simple path.

    Pass ``seeded_rng`` to drive every random draw from a single stream;
    otherwise each step uses its own ``burrow.util.rng`` domain.
    """

    def __init__(
        self,
        params: DungeonParams,
        grid: TileLayers,
        factory: EntityFactory,
        registry: ActorRegistry,
        *,
        seeded_rng: RNG | None = None,
        monster_table: SpawnTable = MONSTER_SPAWN_TABLE,
        item_table: SpawnTable = ITEM_SPAWN_TABLE,
        room_margin: int = config.ROOM_OVERLAP_MARGIN,
    ) -> None:
        params.validate()
        super().__init__(params.map_width, params.map_height)
        self.params = params
        self.grid = grid
        self.factory = factory
        self.registry = registry
        self.phase = GenerationPhase.IDLE
        self.rooms: list[RectangularRoom] = []

        self._room_rng: RNG = seeded_rng or _room_rng
        self._corridor_rng: RNG = seeded_rng or _corridor_rng
        self._stairs_rng: RNG = seeded_rng or _stairs_rng

        self.sampler = RoomPlacementSampler(
            params.map_width,
            params.map_height,
            params.room_min_size,
            params.room_max_size,
            self._room_rng,
            margin=room_margin,
        )
        self.populator = EntityPopulator(
            factory,
            registry,
            seeded_rng or _population_rng,
            monster_table=monster_table,
            item_table=item_table,
        )

    def generate(self) -> GeneratedDungeon:
        self.rooms = []
        corridors: list[list[WorldTilePos]] = []
        populations: list[PopulationResult] = []
        rejected = 0

        for _ in range(self.params.max_rooms):
            self.phase = GenerationPhase.PLACING_ROOMS
            new_room = self.sampler.try_place(self.rooms)
            if new_room is None:
                rejected += 1
                continue

            self.phase = GenerationPhase.CONNECTING_AND_POPULATING
            carve_room(self.grid, new_room)
            if self.rooms:
                corridors.append(
                    tunnel_between(
                        self.grid, self.rooms[-1], new_room, self._corridor_rng
                    )
                )
            populations.append(
                self.populator.populate(
                    new_room,
                    self.params.max_monsters_per_room,
                    self.params.max_items_per_room,
                )
            )
            self.rooms.append(new_room)

        if not self.rooms:
            self.phase = GenerationPhase.IDLE
            raise NoRoomsGeneratedError(self.params.max_rooms)

        self.phase = GenerationPhase.PLACING_STAIRS_AND_PLAYER
        down_stairs = self.rooms[-1].random_interior_point(self._stairs_rng)
        self.grid.set_tile(GridLayer.FLOOR, down_stairs, TILE_TYPE_ID_DOWN_STAIRS)

        up_stairs = self._find_player_start(self.rooms[0])
        self.grid.set_tile(GridLayer.FLOOR, up_stairs, TILE_TYPE_ID_UP_STAIRS)
        player = self._place_player(up_stairs)

        self.phase = GenerationPhase.DONE
        logger.info(
            "Generated %d room(s), rejected %d candidate(s); %d entities spawned",
            len(self.rooms),
            rejected,
            sum(len(p.monsters) + len(p.items) for p in populations),
        )
        return GeneratedDungeon(
            rooms=list(self.rooms),
            corridors=corridors,
            populations=populations,
            down_stairs=down_stairs,
            up_stairs=up_stairs,
            player=player,
            rejected=rejected,
            spawned=[e for p in populations for e in (*p.monsters, *p.items)],
        )

    def _find_player_start(self, room: RectangularRoom) -> WorldTilePos:
        """Draw interior cells of ``room`` until one is free of actors."""
        for _ in range(self.params.max_player_placement_attempts):
            pos = room.random_interior_point(self._stairs_rng)
            if not self.registry.is_occupied(pos):
                return pos
        raise PlayerPlacementError(self.params.max_player_placement_attempts)

    def _place_player(self, pos: WorldTilePos) -> Entity:
        player = self.registry.get_player()
        if player is not None:
            self.registry.relocate_player(player, cell_center(pos))
            return player
        return self.factory.create_entity("Player", pos)
