from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..core.random import RandomLike
from ..exceptions import GenerationError
from ..map.grid import Coord, TileGrid
from ..map.tiles import Tile

logger = logging.getLogger(__name__)

# Random samples allowed per stair before generation is reported as failed.
STAIR_PLACEMENT_ATTEMPTS = 10_000


@dataclass(frozen=True)
class LevelExits:
    """Stair coordinates of a level, in placement order."""

    upstairs: Tuple[Coord, ...] = ()
    downstairs: Tuple[Coord, ...] = ()


def _place_one(grid: TileGrid, stair: Tile, rng: RandomLike, max_attempts: int) -> Coord:
    for _ in range(max_attempts):
        x = rng.randrange(grid.width)
        y = rng.randrange(grid.height)
        if grid.get(x, y) == Tile.FLOOR:
            grid.set(x, y, stair)
            return (x, y)
    raise GenerationError(
        f"Could not find a floor tile for {stair.name.lower()} after {max_attempts} samples"
    )


def place_stairs(
    grid: TileGrid,
    up_count: int,
    down_count: int,
    rng: RandomLike,
    *,
    max_attempts: int = STAIR_PLACEMENT_ATTEMPTS,
) -> LevelExits:
    """Convert random floor cells into stairs, up-stairs first.

    Every placement re-samples against the current grid, so a converted cell can
    never be picked twice. Raises GenerationError when the level has run out of
    floor or a placement exhausts ``max_attempts`` samples.
    """
    if up_count < 0 or down_count < 0:
        raise ValueError("stair counts must be >= 0")
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")

    floors = grid.count(Tile.FLOOR)
    if up_count + down_count > floors:
        raise GenerationError(
            f"Requested {up_count + down_count} stairs but only {floors} floor tiles are available"
        )

    upstairs: List[Coord] = [_place_one(grid, Tile.UPSTAIR, rng, max_attempts) for _ in range(up_count)]
    downstairs: List[Coord] = [_place_one(grid, Tile.DOWNSTAIR, rng, max_attempts) for _ in range(down_count)]
    logger.debug("Placed stairs: up=%s down=%s", upstairs, downstairs)
    return LevelExits(upstairs=tuple(upstairs), downstairs=tuple(downstairs))
