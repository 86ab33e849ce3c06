from __future__ import annotations

from typing import NewType

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================


TileCoord = int  # Always integer tile position

# Dungeon grid coordinates - absolute cell positions on the generated map.
# The origin is the bottom-left corner of the map.
WorldTileCoord = TileCoord  # Example: x=5, y=3
WorldTilePos = tuple[
    WorldTileCoord, WorldTileCoord
]  # Example: (5, 3) = tile 5,3 on map

# =============================================================================
# CONTINUOUS WORLD COORDINATES (Floats)
# =============================================================================

# Positions used by actors that render between cells. A cell (x, y) has its
# centre at (x + 0.5, y + 0.5).
WorldCoord = float
WorldPos = tuple[WorldCoord, WorldCoord]

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Unique identifier handed out to every entity created in a GameWorld.
ActorId = NewType("ActorId", int)

# Random seed for deterministic generation (map generation, etc.)
# Can be an int for numeric seeds or a descriptive string like "cellar1".
RandomSeed = int | str | None
