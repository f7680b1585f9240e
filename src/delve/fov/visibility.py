from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from ..dungeon.level import DungeonLevel
from ..map.grid import Coord
from ..map.tiles import is_navigable

logger = logging.getLogger(__name__)


class CellVisibility(Enum):
    """Whether light passes through a cell."""

    TRANSPARENT = "transparent"
    BLOCKING = "blocking"


class Lighting(Enum):
    """How well-lit a cell is. Only lit cells can be seen from afar."""

    LIT = "lit"
    DARK = "dark"


TransparencyMap = Callable[[Coord], CellVisibility]
LightMap = Callable[[Coord], Lighting]


def trace_line(start: Coord, end: Coord) -> List[Coord]:
    """
    Cells on the straight line from ``start`` towards ``end``, one per step.

    The result includes ``start`` but not ``end``; ``trace_line(p, p)`` is empty.
    The walk happens on offsets from ``start`` normalized to
    ``|dx| >= dy >= 0, dx >= 0`` by mirroring and transposing, and the cells are
    transformed back afterwards, so the line is symmetric under reflection and
    transposition.

    The destination is pulled half a cell towards the origin on each moving
    axis so the line aims at the near corner of the target instead of its
    center. Each step rounds the minor offset to the nearest integer.
    """
    x0, y0 = start
    dx = end[0] - x0
    dy = end[1] - y0
    sx = -1 if dx < 0 else 1
    sy = -1 if dy < 0 else 1
    major, minor = abs(dx), abs(dy)
    transpose = major < minor
    if transpose:
        major, minor = minor, major
    if major == 0:
        return []

    rise = minor - 0.5 if minor > 0 else 0.0
    slope = rise / (major - 0.5)

    cells: List[Coord] = []
    offset = 0.0
    for step in range(major):
        along, across = step, int(offset + 0.5)
        if transpose:
            along, across = across, along
        cells.append((x0 + sx * along, y0 + sy * across))
        offset += slope
    return cells


def visible(
    origin: Coord,
    target: Coord,
    radius: Optional[float],
    transparency: TransparencyMap,
    lighting: LightMap,
) -> bool:
    """Whether an observer at ``origin`` can see the contents of ``target``.

    - radius: maximum sight distance, or None for unlimited. The target must lie
      strictly inside it (squared Euclidean distance < radius ** 2). A cell
      always sees itself regardless of radius.
    - transparency: whether a cell lets light through. Only cells on the traced
      line gate sight; the target itself may be opaque (e.g. a wall).
    - lighting: the target must be lit.
    """
    if radius is not None and radius < 0:
        raise ValueError("radius must be >= 0")

    if lighting(target) is not Lighting.LIT:
        return False
    if origin == target:
        return True

    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    if radius is not None and dx * dx + dy * dy >= radius * radius:
        return False

    for cell in trace_line(origin, target):
        if transparency(cell) is not CellVisibility.TRANSPARENT:
            return False
    return True


def level_transparency(level: DungeonLevel) -> TransparencyMap:
    """Transparency map of a level: navigable tiles let light through, walls block it."""

    def transparency(cell: Coord) -> CellVisibility:
        if is_navigable(level.grid.get(*cell)):
            return CellVisibility.TRANSPARENT
        return CellVisibility.BLOCKING

    return transparency


def all_lit(_cell: Coord) -> Lighting:
    return Lighting.LIT


def is_visible(
    origin: Coord,
    target: Coord,
    radius: Optional[float],
    level: DungeonLevel,
    lighting: Optional[LightMap] = None,
) -> bool:
    """Line-of-sight query against a generated level.

    Both coordinates must lie inside the level (IndexError otherwise). Without a
    ``lighting`` map every cell counts as lit.
    """
    grid = level.grid
    if not grid.is_within(*origin) or not grid.is_within(*target):
        raise IndexError(f"Coordinates out of bounds: {origin} -> {target} for level {grid.width}x{grid.height}")
    return visible(origin, target, radius, level_transparency(level), lighting or all_lit)
