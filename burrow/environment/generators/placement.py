"""Rejection sampling of non-overlapping rooms."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from burrow.util.coordinates import RectangularRoom, overlaps

if TYPE_CHECKING:
    from burrow.types import TileCoord
    from burrow.util.rng import RNG

logger = logging.getLogger(__name__)


class RoomPlacementSampler:
    """Draws candidate rooms inside the map and rejects overlapping ones.

    Sizes are drawn from ``[room_min_size, room_max_size)`` and positions from
    ``[0, map_dimension - size - 1)``, which leaves the far row and column of
    the map unused.
    """

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        room_min_size: int,
        room_max_size: int,
        rng: RNG,
        margin: int = 1,
    ) -> None:
        if room_min_size >= room_max_size:
            raise ValueError(
                f"room_min_size ({room_min_size}) must be less than "
                f"room_max_size ({room_max_size})"
            )
        if map_width - room_max_size < 1 or map_height - room_max_size < 1:
            raise ValueError(
                f"Rooms up to {room_max_size - 1} tiles do not fit in a "
                f"{map_width}x{map_height} map"
            )
        self.map_width = map_width
        self.map_height = map_height
        self.room_min_size = room_min_size
        self.room_max_size = room_max_size
        self.margin = margin
        self._rng = rng

    def sample(self) -> RectangularRoom:
        """Draw one candidate room without checking it against anything."""
        width = self._rng.randrange(self.room_min_size, self.room_max_size)
        height = self._rng.randrange(self.room_min_size, self.room_max_size)

        x = self._rng.randrange(0, self.map_width - width - 1)
        y = self._rng.randrange(0, self.map_height - height - 1)

        return RectangularRoom(x, y, width, height)

    def try_place(
        self, accepted: Sequence[RectangularRoom]
    ) -> RectangularRoom | None:
        """Make one placement attempt.

        Returns:
            The candidate room, or None if it overlaps an accepted room.
        """
        candidate = self.sample()
        if overlaps(candidate, accepted, self.margin):
            logger.debug("Rejected %s: overlaps an existing room", candidate)
            return None
        return candidate
