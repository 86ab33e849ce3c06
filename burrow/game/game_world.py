from __future__ import annotations

import itertools
import logging

from burrow.game.entities import Entity, EntityCategory, get_entity_kind
from burrow.types import ActorId, WorldPos, WorldTilePos
from burrow.util.spatial import SpatialHashGrid

logger = logging.getLogger(__name__)


class GameWorld:
    """
    Holds every entity generation has placed.

    Acts as both the entity factory (``create_entity``) and the actor
    registry (``is_occupied``, ``get_player``, ``relocate_player``) that the
    dungeon generator talks to. Entities are kept in creation order and
    indexed by cell in a spatial hash grid.
    """

    def __init__(self) -> None:
        self.actors: list[Entity] = []
        self.actor_spatial_index: SpatialHashGrid[Entity] = SpatialHashGrid(
            cell_size=16
        )
        self._actor_id_registry: dict[ActorId, Entity] = {}
        self._next_actor_id = itertools.count(1)
        self.player: Entity | None = None

    def create_entity(self, kind_name: str, pos: WorldTilePos) -> Entity:
        """Instantiate an entity of the named kind at ``pos`` and register it."""
        kind = get_entity_kind(kind_name)
        x, y = pos
        entity = Entity(ActorId(next(self._next_actor_id)), kind, x, y)
        self.add_actor(entity)
        if kind.category is EntityCategory.PLAYER and self.player is None:
            self.player = entity
        logger.debug("Created %s at %s", kind_name, pos)
        return entity

    def add_actor(self, actor: Entity) -> None:
        """Adds an actor to the world and registers it with the spatial index."""
        self.actors.append(actor)
        self.actor_spatial_index.add(actor)
        self._actor_id_registry[actor.actor_id] = actor

    def get_actors_at_location(self, pos: WorldTilePos) -> list[Entity]:
        x, y = pos
        return self.actor_spatial_index.get_at_point(x, y)

    def is_occupied(self, pos: WorldTilePos) -> bool:
        """True if any entity, item or monster alike, stands on ``pos``."""
        return bool(self.get_actors_at_location(pos))

    def get_player(self) -> Entity | None:
        return self.player

    def relocate_player(self, player: Entity, world_pos: WorldPos) -> None:
        """Move ``player`` to a continuous world position."""
        if player.actor_id not in self._actor_id_registry:
            raise ValueError(f"{player!r} is not registered with this world")
        player.place_at(world_pos)
        self.actor_spatial_index.update(player)
        logger.debug("Relocated player to %s", player.position)
