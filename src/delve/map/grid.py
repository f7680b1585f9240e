from __future__ import annotations

import logging
from typing import Dict, Generator, Iterator, List, Mapping, Optional, Sequence, Tuple

from .tiles import Tile

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Width and height of a standard level, in tiles.
LEVEL_SIZE: Tuple[int, int] = (80, 24)

# Characters understood by TileGrid.from_ascii. Matches the rendered glyphs, so a
# printed level can be read back.
ASCII_LEGEND: Dict[str, Tile] = {
    ".": Tile.FLOOR,
    "#": Tile.HALLWAY,
    "<": Tile.UPSTAIR,
    ">": Tile.DOWNSTAIR,
    " ": Tile.WALL,
    "-": Tile.WALL,
    "|": Tile.WALL,
    "+": Tile.WALL,
}

_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))


class TileGrid:
    """A fixed-size, bounds-checked 2D tile array.

    Coordinates are (x, y) with (0, 0) at top-left; x grows to the right and y
    grows down. Storage is ``tiles[y][x]``.

    Out-of-range coordinates are a programming error: ``get`` and ``set`` raise
    IndexError instead of clamping, and negative indices are never wrapped.
    ``safe_get`` exists for neighborhood lookups at the map edge only.
    """

    __slots__ = ("_w", "_h", "_tiles", "_frozen")

    def __init__(self, width: int, height: int, default_tile: Tile = Tile.WALL) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TileGrid dimensions must be positive")
        if not isinstance(default_tile, Tile):
            raise TypeError("default_tile must be a Tile enum member")
        self._w = int(width)
        self._h = int(height)
        self._tiles: List[List[Tile]] = [[default_tile for _ in range(self._w)] for _ in range(self._h)]
        self._frozen = False
        logger.debug("Initialized TileGrid %dx%d with default tile %s", self._w, self._h, default_tile.name)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_within(self, x: int, y: int) -> bool:
        """Check if coordinates are within the grid bounds. Never raises."""
        return 0 <= x < self._w and 0 <= y < self._h

    def get(self, x: int, y: int) -> Tile:
        """Return the tile at (x, y); raises IndexError if out of bounds."""
        if not self.is_within(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        return self._tiles[y][x]

    def safe_get(self, x: int, y: int) -> Optional[Tile]:
        """Return the tile at (x, y), or None when the cell lies off the grid."""
        if not self.is_within(x, y):
            return None
        return self._tiles[y][x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        """Set the tile at (x, y).

        Raises IndexError if out-of-bounds, TypeError for non-Tile values and
        RuntimeError once the grid has been frozen.
        """
        if self._frozen:
            raise RuntimeError("TileGrid is frozen; levels are read-only after generation")
        if not isinstance(tile, Tile):
            raise TypeError("tile must be a Tile enum member")
        if not self.is_within(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        self._tiles[y][x] = tile

    def freeze(self) -> "TileGrid":
        """Make the grid read-only. Returns self for chaining."""
        self._frozen = True
        return self

    def neighbors(self, x: int, y: int, diagonals: bool = False) -> Generator[Coord, None, None]:
        """Yield in-bounds neighbor coordinates.

        Orthogonal neighbors come first, in the order W, E, N, S.
        """
        offsets = _ORTHOGONAL + _DIAGONAL if diagonals else _ORTHOGONAL
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if self.is_within(nx, ny):
                yield (nx, ny)

    def cells(self) -> Iterator[Coord]:
        """Iterate over every coordinate in row-major order."""
        for y in range(self._h):
            for x in range(self._w):
                yield (x, y)

    def count(self, tile: Tile) -> int:
        return sum(row.count(tile) for row in self._tiles)

    def positions_of(self, tile: Tile) -> List[Coord]:
        return [(x, y) for (x, y) in self.cells() if self._tiles[y][x] == tile]

    def rows(self) -> Tuple[Tuple[Tile, ...], ...]:
        """Immutable snapshot of the tiles, row by row."""
        return tuple(tuple(row) for row in self._tiles)

    def clone(self) -> "TileGrid":
        """Return a writable copy of this grid."""
        copy = TileGrid(self._w, self._h)
        copy._tiles = [row[:] for row in self._tiles]
        return copy

    @classmethod
    def from_ascii(cls, rows: Sequence[str], legend: Optional[Mapping[str, Tile]] = None) -> "TileGrid":
        """
        Build a TileGrid from ASCII rows for tests/tools.

        The default legend is the render alphabet ('.' floor, '#' hallway,
        '<' / '>' stairs, and ' ', '-', '|', '+' walls).
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        mapping = ASCII_LEGEND if legend is None else legend
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch not in mapping:
                    raise ValueError(f"Unknown tile character {ch!r} at ({x}, {y})")
                grid._tiles[y][x] = mapping[ch]
        return grid

    def __repr__(self) -> str:
        return f"TileGrid({self._w}x{self._h}{', frozen' if self._frozen else ''})"
