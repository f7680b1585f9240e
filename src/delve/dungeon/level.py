from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..core.random import RandomLike, RandomSource
from ..map.grid import TileGrid
from ..map.tiles import Tile, is_navigable
from ..render.glyphs import Glyph, glyph_at, render_ascii
from .corridors import HALLWAY_RANDOMNESS, ROOM_WEIGHT, route_corridors
from .rooms import ROOM_MARGIN, ROOM_MIN_DISTANCE, place_rooms
from .stairs import STAIR_PLACEMENT_ATTEMPTS, LevelExits, place_stairs

if TYPE_CHECKING:  # pragma: no cover
    from ..config import GenerationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DungeonLevel:
    """A generated level: a frozen tile grid plus its stair coordinates.

    Shared read-only by every observer; discovery memory lives with the
    observers, not here.
    """

    grid: TileGrid
    exits: LevelExits

    def __post_init__(self) -> None:
        if not self.grid.frozen:
            raise ValueError("DungeonLevel requires a frozen TileGrid")

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def tile(self, x: int, y: int) -> Tile:
        return self.grid.get(x, y)

    def __str__(self) -> str:
        return render_ascii(self.grid)


def generate_level(
    room_count: int,
    grid_size: Tuple[int, int],
    min_room_size: int,
    max_room_size: int,
    up_stair_count: int,
    down_stair_count: int,
    rng: RandomLike,
    *,
    randomness: float = HALLWAY_RANDOMNESS,
    room_weight: float = ROOM_WEIGHT,
    margin: int = ROOM_MARGIN,
    min_distance: int = ROOM_MIN_DISTANCE,
    stair_attempts: int = STAIR_PLACEMENT_ATTEMPTS,
) -> Tuple[DungeonLevel, LevelExits]:
    """Build a level: rooms, then hallways between consecutive rooms, then stairs.

    ``rng`` is consumed in that order and nowhere else, so a seeded source
    reproduces the same level.
    """
    width, height = grid_size
    grid = TileGrid(width, height, Tile.WALL)

    rooms = place_rooms(
        room_count,
        grid_size,
        min_room_size,
        max_room_size,
        rng,
        margin=margin,
        min_distance=min_distance,
    )
    if not rooms:
        logger.warning("Level %dx%d has no rooms", width, height)
    for room in rooms:
        for x, y in room.cells():
            grid.set(x, y, Tile.FLOOR)

    route_corridors(grid, rooms, rng, randomness=randomness, room_weight=room_weight)
    exits = place_stairs(grid, up_stair_count, down_stair_count, rng, max_attempts=stair_attempts)

    level = DungeonLevel(grid.freeze(), exits)
    logger.debug(
        "Generated %dx%d level: %d rooms, %d hallway tiles, exits=%s",
        width,
        height,
        len(rooms),
        grid.count(Tile.HALLWAY),
        exits,
    )
    return level, exits


def generate_from_settings(
    settings: "GenerationSettings", rng: Optional[RandomLike] = None
) -> Tuple[DungeonLevel, LevelExits]:
    """Generate a level from a GenerationSettings bundle.

    When ``rng`` is omitted a RandomSource seeded with ``settings.seed`` is used.
    """
    source = rng if rng is not None else RandomSource(settings.seed)
    return generate_level(
        settings.room_count,
        (settings.width, settings.height),
        settings.min_room_size,
        settings.max_room_size,
        settings.up_stairs,
        settings.down_stairs,
        source,
        randomness=settings.hallway_randomness,
        room_weight=settings.room_weight,
        margin=settings.room_margin,
        min_distance=settings.room_min_distance,
        stair_attempts=settings.stair_attempts,
    )


def tile_at(level: DungeonLevel, x: int, y: int) -> Tile:
    """Tile at (x, y); raises IndexError outside the level."""
    return level.grid.get(x, y)


def render_glyph(level: DungeonLevel, x: int, y: int) -> Glyph:
    """Display glyph for (x, y); raises IndexError outside the level."""
    return glyph_at(level.grid, x, y)


__all__ = [
    "DungeonLevel",
    "LevelExits",
    "generate_level",
    "generate_from_settings",
    "tile_at",
    "render_glyph",
    "is_navigable",
]
