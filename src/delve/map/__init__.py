from .tiles import Tile, is_floor_classified, is_navigable
from .grid import LEVEL_SIZE, Coord, TileGrid

__all__ = [
    "Tile",
    "is_floor_classified",
    "is_navigable",
    "LEVEL_SIZE",
    "Coord",
    "TileGrid",
]
