"""
Configuration constants.

Centralizes the default generation parameters and logging settings used
throughout the codebase. Organized by functional area for easy maintenance.
"""

import logging

from burrow.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED: RandomSeed = "cellar1"

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = logging.WARNING
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# =============================================================================
# MAP GENERATION
# =============================================================================

# Map dimensions in tiles
MAP_WIDTH = 80
MAP_HEIGHT = 45

# Room size range. Sizes are drawn from [ROOM_MIN_SIZE, ROOM_MAX_SIZE).
ROOM_MIN_SIZE = 6
ROOM_MAX_SIZE = 10

# Number of placement attempts, not a guaranteed room count.
MAX_ROOMS = 30

# Overlap margin between rooms, so neighbouring walls never fuse.
ROOM_OVERLAP_MARGIN = 1

# =============================================================================
# POPULATION
# =============================================================================

MAX_MONSTERS_PER_ROOM = 2
MAX_ITEMS_PER_ROOM = 2

# Upper bound on re-draws when the chosen player start cell is occupied.
MAX_PLAYER_PLACEMENT_ATTEMPTS = 1000
