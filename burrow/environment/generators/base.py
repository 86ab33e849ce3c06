"""Base classes and collaborator interfaces for map generation."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from burrow.environment.grid import GridLayer
    from burrow.game.entities import Entity
    from burrow.types import TileCoord, WorldPos, WorldTilePos


class TileLayers(Protocol):
    """Anything that stores at most one tile per layer per cell."""

    def get_tile(self, layer: GridLayer, pos: WorldTilePos) -> int | None: ...

    def set_tile(
        self, layer: GridLayer, pos: WorldTilePos, tile_id: int | None
    ) -> None: ...


class EntityFactory(Protocol):
    def create_entity(self, kind_name: str, pos: WorldTilePos) -> Entity: ...


class ActorRegistry(Protocol):
    def is_occupied(self, pos: WorldTilePos) -> bool: ...

    def get_player(self) -> Entity | None: ...

    def relocate_player(self, player: Entity, world_pos: WorldPos) -> None: ...


class DungeonGenerationError(Exception):
    """Base class for generation failures."""


class NoRoomsGeneratedError(DungeonGenerationError):
    """Every room placement attempt was rejected."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"No rooms generated after {attempts} placement attempts - "
            "check map size and room size parameters"
        )
        self.attempts = attempts


class PlayerPlacementError(DungeonGenerationError):
    """No free cell for the player was found in the first room."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not find an unoccupied player start after {attempts} attempts"
        )
        self.attempts = attempts


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation algorithms."""

    def __init__(self, map_width: TileCoord, map_height: TileCoord) -> None:
        self.map_width = map_width
        self.map_height = map_height

    @abc.abstractmethod
    def generate(self) -> Any:
        """Generate the map layout and return its structural data."""
        raise NotImplementedError
