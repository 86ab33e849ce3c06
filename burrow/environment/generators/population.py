"""Spawning monsters and items inside freshly carved rooms."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from burrow.game.spawn_tables import ITEM_SPAWN_TABLE, MONSTER_SPAWN_TABLE, SpawnTable

if TYPE_CHECKING:
    from burrow.environment.generators.base import ActorRegistry, EntityFactory
    from burrow.game.entities import Entity
    from burrow.util.coordinates import RectangularRoom
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass
class PopulationResult:
    """What ``EntityPopulator.populate`` put into one room."""

    room: RectangularRoom
    monster_count: int = 0
    item_count: int = 0
    monsters: list[Entity] = field(default_factory=list)
    items: list[Entity] = field(default_factory=list)
    monsters_aborted: bool = False
    items_aborted: bool = False


class EntityPopulator:
    """Places a random number of monsters and items in a room.

    Each spawn slot draws a cell strictly inside the room. If that cell is
    already occupied, the rest of that loop is abandoned for the room rather
    than retried; the monster and item loops abort independently.
    """

    def __init__(
        self,
        factory: EntityFactory,
        registry: ActorRegistry,
        rng: RNG,
        monster_table: SpawnTable = MONSTER_SPAWN_TABLE,
        item_table: SpawnTable = ITEM_SPAWN_TABLE,
    ) -> None:
        self.factory = factory
        self.registry = registry
        self.monster_table = monster_table
        self.item_table = item_table
        self._rng = rng

    def populate(
        self, room: RectangularRoom, max_monsters: int, max_items: int
    ) -> PopulationResult:
        result = PopulationResult(
            room=room,
            monster_count=self._rng.randint(0, max_monsters),
            item_count=self._rng.randint(0, max_items),
        )

        result.monsters_aborted = self._fill_slots(
            room, result.monster_count, self.monster_table, result.monsters
        )
        result.items_aborted = self._fill_slots(
            room, result.item_count, self.item_table, result.items
        )
        return result

    def _fill_slots(
        self,
        room: RectangularRoom,
        count: int,
        table: SpawnTable,
        spawned: list[Entity],
    ) -> bool:
        """Spawn up to ``count`` entities from ``table``.

        Returns:
            True if a slot landed on an occupied cell and the loop stopped.
        """
        for _ in range(count):
            pos = room.random_interior_point(self._rng)
            if self.registry.is_occupied(pos):
                logger.debug(
                    "Spawn cell %s in %s is occupied; skipping %d remaining slot(s)",
                    pos,
                    room,
                    count - len(spawned),
                )
                return True
            spawned.append(self.factory.create_entity(table.draw(self._rng), pos))
        return False
