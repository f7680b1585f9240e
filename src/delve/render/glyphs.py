"""
Backend-agnostic tile glyphs.

Walls take their glyph from the floor-classified tiles around them:

- any floor to the north or south: the wall is the top or bottom edge of a
  room, drawn ``-``;
- otherwise any floor to the east or west: a side wall, drawn ``|``;
- otherwise any diagonal floor: a room corner, drawn ``+``;
- otherwise the wall is buried in stone and nobody will ever see it, so it is
  left blank.

Nothing here touches a display; a terminal or window layer only has to copy
the characters.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..map.grid import Coord, TileGrid
from ..map.tiles import Tile, is_floor_classified

Offset = Tuple[int, int]
Neighborhood = Mapping[Offset, Optional[Tile]]

NORTH_SOUTH: Tuple[Offset, ...] = ((0, -1), (0, 1))
EAST_WEST: Tuple[Offset, ...] = ((-1, 0), (1, 0))
DIAGONALS: Tuple[Offset, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
NEIGHBOR_OFFSETS: Tuple[Offset, ...] = NORTH_SOUTH + EAST_WEST + DIAGONALS


class Glyph(str, Enum):
    FLOOR = "."
    HALLWAY = "#"
    UPSTAIR = "<"
    DOWNSTAIR = ">"
    WALL_HORIZONTAL = "-"
    WALL_VERTICAL = "|"
    WALL_CORNER = "+"
    BLANK = " "


TILE_GLYPHS: Dict[Tile, Glyph] = {
    Tile.FLOOR: Glyph.FLOOR,
    Tile.HALLWAY: Glyph.HALLWAY,
    Tile.UPSTAIR: Glyph.UPSTAIR,
    Tile.DOWNSTAIR: Glyph.DOWNSTAIR,
}


def _any_floor(neighborhood: Neighborhood, offsets: Iterable[Offset]) -> bool:
    for offset in offsets:
        tile = neighborhood.get(offset)
        if tile is not None and is_floor_classified(tile):
            return True
    return False


def classify_glyph(tile: Tile, neighborhood: Neighborhood) -> Glyph:
    """Map a tile and its 8-neighborhood to a glyph.

    ``neighborhood`` maps (dx, dy) offsets to the neighboring tile, or to None
    (or omits the key) where the neighbor would fall off the grid.
    """
    if tile != Tile.WALL:
        return TILE_GLYPHS[tile]
    if _any_floor(neighborhood, NORTH_SOUTH):
        return Glyph.WALL_HORIZONTAL
    if _any_floor(neighborhood, EAST_WEST):
        return Glyph.WALL_VERTICAL
    if _any_floor(neighborhood, DIAGONALS):
        return Glyph.WALL_CORNER
    return Glyph.BLANK


def neighborhood_of(grid: TileGrid, x: int, y: int) -> Dict[Offset, Optional[Tile]]:
    """Collect the 8 neighbors of (x, y); off-grid neighbors are None."""
    return {(dx, dy): grid.safe_get(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS}


def glyph_at(grid: TileGrid, x: int, y: int) -> Glyph:
    return classify_glyph(grid.get(x, y), neighborhood_of(grid, x, y))


def render_ascii(
    grid: TileGrid,
    known: Optional[Sequence[Sequence[bool]]] = None,
    marks: Optional[Mapping[Coord, str]] = None,
) -> str:
    """Render the grid as newline-terminated text rows.

    - known: optional [height][width] mask; unknown cells render blank.
    - marks: optional overlay of single characters (e.g. ``"@"``) by position,
      drawn regardless of ``known``.
    """
    if known is not None and (len(known) != grid.height or any(len(row) != grid.width for row in known)):
        raise ValueError("known mask must match the grid dimensions")
    overlay = dict(marks or {})
    lines = []
    for y in range(grid.height):
        chars = []
        for x in range(grid.width):
            if (x, y) in overlay:
                chars.append(overlay[(x, y)])
            elif known is not None and not known[y][x]:
                chars.append(Glyph.BLANK.value)
            else:
                chars.append(glyph_at(grid, x, y).value)
        lines.append("".join(chars) + "\n")
    return "".join(lines)
