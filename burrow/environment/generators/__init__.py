"""Map generation algorithms for Burrow.

- DungeonGenerator: classic rooms-and-corridors dungeon. Rooms are placed by
  rejection sampling, chained together with L-shaped corridors and filled
  with monsters, items, stairs and the player start.

The pieces it is built from are usable on their own:
- RoomPlacementSampler: draws non-overlapping rooms
- tunnel_between: carves an L-shaped corridor between two rooms
- EntityPopulator: spawns monsters and items from weighted tables
"""

from .base import (
    ActorRegistry,
    BaseMapGenerator,
    DungeonGenerationError,
    EntityFactory,
    NoRoomsGeneratedError,
    PlayerPlacementError,
    TileLayers,
)
from .corridors import tunnel_between
from .dungeon import DungeonGenerator, DungeonParams, GeneratedDungeon, GenerationPhase
from .placement import RoomPlacementSampler
from .population import EntityPopulator, PopulationResult

__all__ = [
    "ActorRegistry",
    "BaseMapGenerator",
    "DungeonGenerationError",
    "DungeonGenerator",
    "DungeonParams",
    "EntityFactory",
    "EntityPopulator",
    "GeneratedDungeon",
    "GenerationPhase",
    "NoRoomsGeneratedError",
    "PlayerPlacementError",
    "PopulationResult",
    "RoomPlacementSampler",
    "TileLayers",
    "tunnel_between",
]
