from .visibility import CellVisibility, Lighting, is_visible, trace_line, visible
from .discovery import DiscoveryMap, FogTileState, new_known_cells, update_discovery

__all__ = [
    "CellVisibility",
    "Lighting",
    "is_visible",
    "trace_line",
    "visible",
    "DiscoveryMap",
    "FogTileState",
    "new_known_cells",
    "update_discovery",
]
