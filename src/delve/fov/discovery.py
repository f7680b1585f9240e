from __future__ import annotations

import logging
import math
from enum import Enum
from typing import List, Optional, Set

from ..dungeon.level import DungeonLevel
from ..map.grid import Coord
from .visibility import LightMap, all_lit, level_transparency, visible

logger = logging.getLogger(__name__)

KnownCells = List[List[bool]]


class FogTileState(str, Enum):
    UNSEEN = "unseen"         # never seen
    SEEN = "seen"             # discovered earlier, not in sight now
    VISIBLE = "visible"       # in sight this turn


def new_known_cells(level: DungeonLevel) -> KnownCells:
    """An all-False discovery grid shaped like ``level`` ([height][width])."""
    return [[False for _ in range(level.width)] for _ in range(level.height)]


def _check_shape(known: KnownCells, level: DungeonLevel) -> None:
    if len(known) != level.height or any(len(row) != level.width for row in known):
        raise ValueError(
            f"Discovery grid does not match level dimensions {level.width}x{level.height}"
        )


def update_discovery(
    known: KnownCells,
    observer_pos: Coord,
    level: DungeonLevel,
    radius: Optional[float] = None,
    lighting: Optional[LightMap] = None,
) -> Set[Coord]:
    """
    Mark every cell the observer can currently see as known.

    Entries are only ever set, never cleared. Returns the cells visible from
    ``observer_pos`` on this call.

    Raises ValueError when ``known`` is not shaped like the level or the radius is
    negative, and IndexError when the observer stands outside the level.
    """
    _check_shape(known, level)
    if radius is not None and radius < 0:
        raise ValueError("radius must be >= 0")
    ox, oy = observer_pos
    if not level.grid.is_within(ox, oy):
        raise IndexError(f"Observer out of bounds: {observer_pos}")

    transparency = level_transparency(level)
    light = lighting or all_lit

    min_x, max_x, min_y, max_y = 0, level.width - 1, 0, level.height - 1
    if radius is not None:
        # Nothing at or beyond the radius can pass the distance test.
        reach = max(0, math.ceil(radius) - 1)
        min_x, max_x = max(min_x, ox - reach), min(max_x, ox + reach)
        min_y, max_y = max(min_y, oy - reach), min(max_y, oy + reach)

    seen: Set[Coord] = set()
    for y in range(min_y, max_y + 1):
        row = known[y]
        for x in range(min_x, max_x + 1):
            if visible(observer_pos, (x, y), radius, transparency, light):
                row[x] = True
                seen.add((x, y))

    logger.debug("Discovery update at %s radius %s -> %d visible tiles", observer_pos, radius, len(seen))
    return seen


class DiscoveryMap:
    """
    An observer's fog of war over a DungeonLevel.

    Responsibilities:
    - Calculates the cells visible from the observer each turn.
    - Remembers every cell that has ever been visible (monotonic).
    - Reports tile state (unseen/seen/visible) for renderers.
    """

    def __init__(
        self,
        level: DungeonLevel,
        vision_radius: Optional[float] = None,
        lighting: Optional[LightMap] = None,
    ) -> None:
        if vision_radius is not None and vision_radius < 0:
            raise ValueError("vision_radius must be >= 0")
        self.level = level
        self.vision_radius = vision_radius
        self.lighting = lighting
        self._known: KnownCells = new_known_cells(level)
        self._visible: Set[Coord] = set()
        logger.debug("DiscoveryMap initialized: %dx%d radius=%s", level.width, level.height, vision_radius)

    def update(self, observer_pos: Coord) -> Set[Coord]:
        """Recompute what is visible from ``observer_pos`` and remember it."""
        self._visible = update_discovery(
            self._known, observer_pos, self.level, self.vision_radius, self.lighting
        )
        return set(self._visible)

    def get_state(self, x: int, y: int) -> FogTileState:
        if not self.level.grid.is_within(x, y):
            raise IndexError("Tile out of bounds")
        if (x, y) in self._visible:
            return FogTileState.VISIBLE
        if self._known[y][x]:
            return FogTileState.SEEN
        return FogTileState.UNSEEN

    def is_known(self, x: int, y: int) -> bool:
        if not self.level.grid.is_within(x, y):
            raise IndexError("Tile out of bounds")
        return self._known[y][x]

    def visible_tiles(self) -> Set[Coord]:
        return set(self._visible)

    def known_cells(self) -> KnownCells:
        return [row[:] for row in self._known]

    @property
    def known_count(self) -> int:
        return sum(sum(1 for cell in row if cell) for row in self._known)
