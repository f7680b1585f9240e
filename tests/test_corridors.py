import math
import random

import pytest

from delve.dungeon.corridors import (
    carve_path,
    edge_cost,
    find_path,
    roll_stone_weights,
    route_corridors,
    validate_cost_model,
)
from delve.dungeon.rooms import RoomBounds
from delve.exceptions import RoutingError
from delve.map.grid import TileGrid
from delve.map.tiles import Tile


def _open_neighbors(width, height):
    def neighbors(cell):
        x, y = cell
        for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            if 0 <= nx < width and 0 <= ny < height:
                yield (nx, ny)

    return neighbors


def _is_four_connected(path):
    return all(abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1 for a, b in zip(path, path[1:]))


def test_find_path_straight_line_with_uniform_cost():
    path = find_path((0, 0), (3, 0), _open_neighbors(5, 5), lambda a, b: 1.0)
    assert path == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_find_path_start_equals_goal():
    assert find_path((2, 2), (2, 2), _open_neighbors(5, 5), lambda a, b: 1.0) == [(2, 2)]


def test_find_path_heuristic_does_not_change_cost():
    weights = roll_stone_weights(12, 12, 0.5, random.Random(8))

    def cost(_a, b):
        return weights[b[1]][b[0]]

    def total(path):
        return sum(cost(a, b) for a, b in zip(path, path[1:]))

    plain = find_path((0, 0), (11, 9), _open_neighbors(12, 12), cost)
    guided = find_path(
        (0, 0),
        (11, 9),
        _open_neighbors(12, 12),
        cost,
        heuristic=lambda c: (abs(c[0] - 11) + abs(c[1] - 9)) * 0.5,
    )
    assert total(plain) == pytest.approx(total(guided))
    assert _is_four_connected(guided)


def test_find_path_unreachable_goal_is_fatal():
    with pytest.raises(RoutingError):
        find_path((0, 0), (3, 3), lambda cell: [], lambda a, b: 1.0)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -1.0])
def test_find_path_rejects_malformed_costs(bad):
    with pytest.raises(ValueError):
        find_path((0, 0), (2, 0), _open_neighbors(3, 1), lambda a, b: bad)


@pytest.mark.parametrize(
    "randomness,room_weight",
    [(1.0, 0.0), (-0.1, 0.0), (0.5, 0.5), (0.5, -0.1), (math.nan, 0.1), (0.2, math.inf)],
)
def test_invalid_cost_models(randomness, room_weight):
    with pytest.raises(ValueError):
        validate_cost_model(randomness, room_weight)


def test_stone_weights_are_bounded_and_reproducible():
    a = roll_stone_weights(10, 4, 0.3, random.Random(5))
    b = roll_stone_weights(10, 4, 0.3, random.Random(5))
    assert a == b
    assert len(a) == 4 and all(len(row) == 10 for row in a)
    assert all(0.7 <= w <= 1.3 for row in a for w in row)


def test_edge_cost_prefers_open_cells():
    grid = TileGrid.from_ascii(["  ", ". "])
    weights = [[0.9, 1.1], [0.8, 1.2]]
    assert edge_cost(grid, weights, (0, 0), 0.25) == 0.9
    assert edge_cost(grid, weights, (0, 1), 0.25) == 0.25


def test_carve_path_only_touches_walls():
    grid = TileGrid.from_ascii(["  .  "])
    carved = carve_path(grid, [(0, 0), (1, 0), (2, 0), (3, 0)])
    assert carved == 3
    assert [grid.get(x, 0) for x in range(5)] == [
        Tile.HALLWAY,
        Tile.HALLWAY,
        Tile.FLOOR,
        Tile.HALLWAY,
        Tile.WALL,
    ]


def test_route_connects_room_centers_without_overwriting_rooms():
    grid = TileGrid(20, 8)
    rooms = [RoomBounds(1, 1, 3, 3), RoomBounds(14, 4, 3, 3)]
    for room in rooms:
        for x, y in room.cells():
            grid.set(x, y, Tile.FLOOR)

    paths = route_corridors(grid, rooms, random.Random(11))

    assert len(paths) == 1
    path = paths[0]
    assert path[0] == rooms[0].center and path[-1] == rooms[1].center
    assert _is_four_connected(path)
    assert all(grid.get(x, y) != Tile.WALL for x, y in path)
    for room in rooms:
        assert all(grid.get(x, y) == Tile.FLOOR for x, y in room.cells())
    assert set(grid.positions_of(Tile.HALLWAY)) <= set(path)
    assert grid.count(Tile.HALLWAY) > 0


def test_route_bends_through_existing_open_space():
    # Row 3 is already open; with flat stone it is cheaper to detour along it
    grid = TileGrid.from_ascii([
        "           ",
        "           ",
        "           ",
        "...........",
        "           ",
    ])
    rooms = [RoomBounds(0, 1, 1, 1), RoomBounds(10, 1, 1, 1)]
    (path,) = route_corridors(grid, rooms, random.Random(0), randomness=0.0, room_weight=0.25)

    assert (5, 3) in path
    assert grid.get(5, 1) == Tile.WALL
    assert grid.get(0, 2) == Tile.HALLWAY and grid.get(10, 2) == Tile.HALLWAY


def test_route_with_fewer_than_two_rooms_is_a_no_op():
    grid = TileGrid(10, 10)
    assert route_corridors(grid, [RoomBounds(2, 2, 3, 3)], random.Random(0)) == []
    assert grid.count(Tile.HALLWAY) == 0
