from __future__ import annotations

from enum import Enum
from typing import FrozenSet


class Tile(Enum):
    """Enumeration for tile kinds in a dungeon level.

    Tiles are only written by the generation pipeline; once a level is handed
    out its tiles never change.
    """

    WALL = 0
    FLOOR = 1
    HALLWAY = 2
    UPSTAIR = 3
    DOWNSTAIR = 4


# Kinds a mobile entity may occupy or move through.
NAVIGABLE_TILES: FrozenSet[Tile] = frozenset({Tile.FLOOR, Tile.HALLWAY, Tile.UPSTAIR, Tile.DOWNSTAIR})

# Kinds treated as open ground when deciding how an adjacent wall is drawn.
FLOOR_CLASSIFIED_TILES: FrozenSet[Tile] = frozenset({Tile.FLOOR, Tile.HALLWAY, Tile.UPSTAIR, Tile.DOWNSTAIR})


def is_navigable(tile: Tile) -> bool:
    """Return True if the provided tile kind can be traversed by entities.

    Args:
        tile: A Tile enum member.

    Returns:
        bool: False only for walls.
    """

    return tile in NAVIGABLE_TILES


def is_floor_classified(tile: Tile) -> bool:
    """Return True if the tile counts as floor for wall rendering."""
    return tile in FLOOR_CLASSIFIED_TILES
