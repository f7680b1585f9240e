from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..core.random import RandomLike
from ..exceptions import RoutingError
from ..map.grid import Coord, TileGrid
from ..map.tiles import Tile
from .rooms import RoomBounds

logger = logging.getLogger(__name__)

StoneWeights = List[List[float]]

# Stone weights are drawn uniformly from [1 - R, 1 + R].
HALLWAY_RANDOMNESS = 0.5

# Cost of stepping into an already-open cell. Kept below the cheapest possible
# stone so paths bend through rooms and earlier hallways.
ROOM_WEIGHT = 0.25


def validate_cost_model(randomness: float, room_weight: float) -> None:
    """Reject cost settings that could produce NaN, negative or unordered weights."""
    if not (math.isfinite(randomness) and math.isfinite(room_weight)):
        raise ValueError("randomness and room_weight must be finite numbers")
    if not 0.0 <= randomness < 1.0:
        raise ValueError(f"randomness must be in [0, 1), got {randomness}")
    if not 0.0 <= room_weight < 1.0 - randomness:
        raise ValueError(
            f"room_weight must be in [0, {1.0 - randomness}) so open cells stay cheaper than stone, got {room_weight}"
        )


def roll_stone_weights(width: int, height: int, randomness: float, rng: RandomLike) -> StoneWeights:
    """Assign every cell a traversal cost drawn from ``[1 - randomness, 1 + randomness]``.

    Values are drawn in row-major order, so a seeded source always yields the
    same weights for the same size.
    """
    low, high = 1.0 - randomness, 1.0 + randomness
    return [[rng.uniform(low, high) for _ in range(width)] for _ in range(height)]


def edge_cost(grid: TileGrid, weights: StoneWeights, cell: Coord, room_weight: float) -> float:
    """Cost of moving into ``cell``: its stone weight if still wall, else ``room_weight``."""
    x, y = cell
    if grid.get(x, y) == Tile.WALL:
        return weights[y][x]
    return room_weight


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(
    start: Coord,
    goal: Coord,
    neighbors: Callable[[Coord], Iterable[Coord]],
    cost: Callable[[Coord, Coord], float],
    heuristic: Optional[Callable[[Coord], float]] = None,
) -> List[Coord]:
    """Weighted shortest path from ``start`` to ``goal`` (both included).

    A* over an implicit graph; with no heuristic this is Dijkstra. The heuristic
    must never overestimate the remaining cost. Entries with equal priority pop
    in the order they were discovered.

    Raises ValueError for a NaN, infinite or negative edge cost and RoutingError
    if the goal cannot be reached.
    """
    h = heuristic if heuristic is not None else (lambda _cell: 0.0)
    counter = itertools.count()
    open_heap = [(h(start), next(counter), start)]
    came_from: Dict[Coord, Optional[Coord]] = {start: None}
    g_score: Dict[Coord, float] = {start: 0.0}
    closed = set()

    while open_heap:
        _, _, pos = heapq.heappop(open_heap)
        if pos == goal:
            path: List[Coord] = []
            cur: Optional[Coord] = pos
            while cur is not None:
                path.append(cur)
                cur = came_from[cur]
            path.reverse()
            return path

        if pos in closed:
            continue
        closed.add(pos)

        g = g_score[pos]
        for npos in neighbors(pos):
            if npos in closed:
                continue
            step = cost(pos, npos)
            if not math.isfinite(step) or step < 0:
                raise ValueError(f"Edge cost {pos}->{npos} must be finite and non-negative, got {step}")
            ng = g + step
            if ng < g_score.get(npos, math.inf):
                g_score[npos] = ng
                came_from[npos] = pos
                heapq.heappush(open_heap, (ng + h(npos), next(counter), npos))

    raise RoutingError(f"No path from {start} to {goal}")


def carve_path(grid: TileGrid, path: Iterable[Coord]) -> int:
    """Turn every wall on ``path`` into hallway. Returns the number of cells carved."""
    carved = 0
    for x, y in path:
        if grid.get(x, y) == Tile.WALL:
            grid.set(x, y, Tile.HALLWAY)
            carved += 1
    return carved


def route_corridors(
    grid: TileGrid,
    rooms: Sequence[RoomBounds],
    rng: RandomLike,
    *,
    randomness: float = HALLWAY_RANDOMNESS,
    room_weight: float = ROOM_WEIGHT,
) -> List[List[Coord]]:
    """Connect each consecutive pair of rooms with a hallway, center to center.

    Stone weights are rolled once for the whole grid. Each path is carved before
    the next pair is routed, so later hallways reuse earlier ones. Returns the
    routed paths in order.
    """
    validate_cost_model(randomness, room_weight)
    weights = roll_stone_weights(grid.width, grid.height, randomness, rng)
    cheapest_step = min(1.0 - randomness, room_weight)

    def neighbors(cell: Coord) -> Iterable[Coord]:
        return grid.neighbors(*cell)

    def cost(_src: Coord, dst: Coord) -> float:
        return edge_cost(grid, weights, dst, room_weight)

    paths: List[List[Coord]] = []
    for a, b in zip(rooms, rooms[1:]):
        goal = b.center
        path = find_path(
            a.center,
            goal,
            neighbors,
            cost,
            heuristic=lambda cell: manhattan(cell, goal) * cheapest_step,
        )
        carved = carve_path(grid, path)
        logger.debug("Routed %s -> %s: %d steps, %d cells carved", a.center, goal, len(path) - 1, carved)
        paths.append(path)
    return paths
