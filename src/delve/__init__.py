from importlib.metadata import version, PackageNotFoundError

from .dungeon.level import DungeonLevel, generate_level, render_glyph, tile_at
from .dungeon.stairs import LevelExits
from .fov.discovery import update_discovery
from .fov.visibility import is_visible
from .map.tiles import Tile, is_navigable

__all__ = [
    "__version__",
    "DungeonLevel",
    "LevelExits",
    "Tile",
    "generate_level",
    "is_navigable",
    "is_visible",
    "render_glyph",
    "tile_at",
    "update_discovery",
]

try:
    __version__ = version("delve-dungeon")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
