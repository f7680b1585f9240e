from .level import DungeonLevel, generate_from_settings, generate_level, render_glyph, tile_at
from .rooms import RoomBounds, place_rooms
from .stairs import LevelExits, place_stairs

__all__ = [
    "DungeonLevel",
    "LevelExits",
    "RoomBounds",
    "generate_from_settings",
    "generate_level",
    "place_rooms",
    "place_stairs",
    "render_glyph",
    "tile_at",
]
