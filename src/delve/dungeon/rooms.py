from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..core.random import RandomLike
from ..map.grid import Coord

logger = logging.getLogger(__name__)

# Minimum number of wall tiles kept between a room and the edge of the level.
ROOM_MARGIN = 1

# Both rooms are inflated by this many tiles before the intersection test.
ROOM_MIN_DISTANCE = 1


@dataclass(frozen=True)
class RoomBounds:
    """Axis-aligned room rectangle: upper-left corner plus size, in tiles."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Coord:
        # Integer division rounds toward the lower-right for even sizes.
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def x_end(self) -> int:
        return self.x + self.width

    @property
    def y_end(self) -> int:
        return self.y + self.height

    def cells(self) -> Iterator[Coord]:
        for y in range(self.y, self.y_end):
            for x in range(self.x, self.x_end):
                yield (x, y)

    def inflated(self, distance: int) -> "RoomBounds":
        return RoomBounds(
            self.x - distance,
            self.y - distance,
            self.width + 2 * distance,
            self.height + 2 * distance,
        )

    def intersects(self, other: "RoomBounds") -> bool:
        """Half-open overlap test on both axes."""
        return _ranges_overlap((self.x, self.x_end), (other.x, other.x_end)) and _ranges_overlap(
            (self.y, self.y_end), (other.y, other.y_end)
        )

    def near(self, other: "RoomBounds", distance: int) -> bool:
        """True if the rooms overlap once both are inflated by ``distance``."""
        return self.inflated(distance).intersects(other.inflated(distance))


def _ranges_overlap(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    if a[0] > b[0]:
        a, b = b, a
    return a[1] > b[0]


def place_rooms(
    room_count: int,
    region_size: Tuple[int, int],
    min_room_size: int,
    max_room_size: int,
    rng: RandomLike,
    *,
    margin: int = ROOM_MARGIN,
    min_distance: int = ROOM_MIN_DISTANCE,
) -> List[RoomBounds]:
    """Place up to ``room_count`` rooms by rejection sampling.

    Each attempt draws a size in ``[min_room_size, max_room_size]`` and a corner
    that keeps the room ``margin`` tiles away from the region edge. A candidate
    that comes within ``min_distance`` of an accepted room is discarded and the
    next attempt begins; there are no retries, so fewer rooms than requested is
    an expected outcome.
    """
    width, height = region_size
    if room_count < 0:
        raise ValueError("room_count must be >= 0")
    if margin < 0 or min_distance < 0:
        raise ValueError("margin and min_distance must be >= 0")
    if min_room_size <= 0 or max_room_size < min_room_size:
        raise ValueError(
            f"Invalid room size range [{min_room_size}, {max_room_size}]"
        )
    if max_room_size + 2 * margin > min(width, height):
        raise ValueError(
            f"Rooms up to {max_room_size} tiles with margin {margin} do not fit in a {width}x{height} region"
        )

    rooms: List[RoomBounds] = []
    for _ in range(room_count):
        w = rng.randint(min_room_size, max_room_size)
        h = rng.randint(min_room_size, max_room_size)
        x = rng.randint(margin, width - margin - w)
        y = rng.randint(margin, height - margin - h)
        candidate = RoomBounds(x, y, w, h)
        if any(candidate.near(room, min_distance) for room in rooms):
            continue
        rooms.append(candidate)

    logger.debug("place_rooms: accepted %d of %d candidates", len(rooms), room_count)
    return rooms
