from collections import deque
from typing import List, Optional, Set

from ..map.grid import Coord, TileGrid
from ..map.tiles import is_navigable


def flood_fill(grid: TileGrid, start: Coord) -> Set[Coord]:
    """Return every navigable cell reachable from ``start`` with 4-directional moves."""
    if not is_navigable(grid.get(*start)):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for nx, ny in grid.neighbors(x, y):
            if (nx, ny) not in seen and is_navigable(grid.get(nx, ny)):
                seen.add((nx, ny))
                q.append((nx, ny))
    return seen


def navigable_regions(grid: TileGrid) -> List[Set[Coord]]:
    """Split navigable cells into 4-connected regions, largest first."""
    visited: Set[Coord] = set()
    regions: List[Set[Coord]] = []
    for x, y in grid.cells():
        if (x, y) in visited or not is_navigable(grid.get(x, y)):
            continue
        region = flood_fill(grid, (x, y))
        visited |= region
        regions.append(region)
    regions.sort(key=len, reverse=True)
    return regions


def is_fully_connected(grid: TileGrid) -> bool:
    """True when all navigable cells form one region (an empty level counts as connected)."""
    return len(navigable_regions(grid)) <= 1


def path_length(grid: TileGrid, start: Coord, goal: Coord) -> Optional[int]:
    """Breadth-first shortest path length over navigable cells; None if unreachable."""
    if not is_navigable(grid.get(*start)) or not is_navigable(grid.get(*goal)):
        return None
    q = deque([(start, 0)])
    seen = {start}
    while q:
        (x, y), d = q.popleft()
        if (x, y) == goal:
            return d
        for npos in grid.neighbors(x, y):
            if npos not in seen and is_navigable(grid.get(*npos)):
                seen.add(npos)
                q.append((npos, d + 1))
    return None
