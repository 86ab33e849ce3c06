"""
Entities placed by dungeon generation.

EntityKind:
    The static description of a kind of thing that can be spawned: its name,
    text glyph and category. Kinds are registered by name so generation code
    can refer to them as plain strings ("Orc", "Potion of Health").

Entity:
    One instance of a kind standing on a grid cell. Entities also carry a
    continuous ``world_pos`` used by smooth rendering, which is the centre of
    their cell unless they have been relocated elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from burrow.types import ActorId, WorldPos, WorldTileCoord, WorldTilePos
from burrow.util.coordinates import cell_center, world_to_cell


class EntityCategory(Enum):
    PLAYER = auto()
    MONSTER = auto()
    ITEM = auto()


@dataclass(frozen=True)
class EntityKind:
    name: str
    glyph: str
    category: EntityCategory


_entity_kinds: dict[str, EntityKind] = {}


def register_entity_kind(kind: EntityKind) -> EntityKind:
    """Register ``kind`` under its name.

    Raises:
        ValueError: If a kind with the same name is already registered.
    """
    if kind.name in _entity_kinds:
        raise ValueError(f"Entity kind '{kind.name}' is already registered.")
    _entity_kinds[kind.name] = kind
    return kind


def get_entity_kind(name: str) -> EntityKind:
    try:
        return _entity_kinds[name]
    except KeyError:
        raise ValueError(f"Unknown entity kind: {name!r}") from None


PLAYER = register_entity_kind(EntityKind("Player", "@", EntityCategory.PLAYER))

ORC = register_entity_kind(EntityKind("Orc", "o", EntityCategory.MONSTER))
TROLL = register_entity_kind(EntityKind("Troll", "T", EntityCategory.MONSTER))

POTION_OF_HEALTH = register_entity_kind(
    EntityKind("Potion of Health", "!", EntityCategory.ITEM)
)
FIREBALL_SCROLL = register_entity_kind(
    EntityKind("Fireball Scroll", "~", EntityCategory.ITEM)
)
CONFUSION_SCROLL = register_entity_kind(
    EntityKind("Confusion Scroll", "~", EntityCategory.ITEM)
)
LIGHTNING_SCROLL = register_entity_kind(
    EntityKind("Lightning Scroll", "~", EntityCategory.ITEM)
)


class Entity:
    """Anything generation places on the map: the player, monsters and items."""

    def __init__(
        self,
        actor_id: ActorId,
        kind: EntityKind,
        x: WorldTileCoord,
        y: WorldTileCoord,
    ) -> None:
        self.actor_id = actor_id
        self.kind = kind
        self.x = x
        self.y = y
        self.world_pos: WorldPos = cell_center((x, y))

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def position(self) -> WorldTilePos:
        return (self.x, self.y)

    @property
    def is_player(self) -> bool:
        return self.kind.category is EntityCategory.PLAYER

    def place_at(self, world_pos: WorldPos) -> None:
        """Move to a continuous world position, updating the grid cell."""
        self.world_pos = world_pos
        self.x, self.y = world_to_cell(world_pos)

    def __repr__(self) -> str:
        return (
            f"Entity(id={self.actor_id}, kind={self.name!r}, x={self.x}, y={self.y})"
        )
