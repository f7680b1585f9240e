import random

import pytest

from delve.dungeon.level import DungeonLevel, render_glyph
from delve.dungeon.stairs import LevelExits
from delve.map.grid import TileGrid
from delve.map.tiles import Tile
from delve.render.glyphs import NEIGHBOR_OFFSETS, Glyph, classify_glyph, neighborhood_of, render_ascii


def _hood(**tiles):
    names = {
        "n": (0, -1), "s": (0, 1), "w": (-1, 0), "e": (1, 0),
        "nw": (-1, -1), "ne": (1, -1), "sw": (-1, 1), "se": (1, 1),
    }
    hood = {offset: Tile.WALL for offset in NEIGHBOR_OFFSETS}
    for name, tile in tiles.items():
        hood[names[name]] = tile
    return hood


def _level(rows):
    return DungeonLevel(TileGrid.from_ascii(rows).freeze(), LevelExits())


@pytest.mark.parametrize(
    "tile,glyph",
    [
        (Tile.FLOOR, Glyph.FLOOR),
        (Tile.HALLWAY, Glyph.HALLWAY),
        (Tile.UPSTAIR, Glyph.UPSTAIR),
        (Tile.DOWNSTAIR, Glyph.DOWNSTAIR),
    ],
)
def test_non_walls_map_to_fixed_glyphs(tile, glyph):
    assert classify_glyph(tile, _hood()) == glyph
    assert classify_glyph(tile, _hood(n=Tile.FLOOR, e=Tile.FLOOR)) == glyph


def test_wall_priority_order():
    assert classify_glyph(Tile.WALL, _hood(s=Tile.FLOOR, e=Tile.FLOOR, ne=Tile.FLOOR)) == Glyph.WALL_HORIZONTAL
    assert classify_glyph(Tile.WALL, _hood(w=Tile.HALLWAY, se=Tile.FLOOR)) == Glyph.WALL_VERTICAL
    assert classify_glyph(Tile.WALL, _hood(sw=Tile.UPSTAIR)) == Glyph.WALL_CORNER
    assert classify_glyph(Tile.WALL, _hood()) == Glyph.BLANK


def test_every_open_kind_counts_as_floor_for_walls():
    for tile in (Tile.FLOOR, Tile.HALLWAY, Tile.UPSTAIR, Tile.DOWNSTAIR):
        assert classify_glyph(Tile.WALL, _hood(n=tile)) == Glyph.WALL_HORIZONTAL


def test_off_grid_neighbors_are_ignored():
    hood = {(0, -1): None, (-1, 0): None, (-1, -1): None, (1, 1): Tile.FLOOR}
    assert classify_glyph(Tile.WALL, hood) == Glyph.WALL_CORNER
    assert classify_glyph(Tile.WALL, {}) == Glyph.BLANK


@pytest.mark.parametrize("seed", range(25))
def test_classifier_is_symmetric_under_half_turn(seed):
    rnd = random.Random(seed)
    hood = {offset: rnd.choice([Tile.WALL, Tile.WALL, Tile.FLOOR, Tile.HALLWAY, None]) for offset in NEIGHBOR_OFFSETS}
    rotated = {(-dx, -dy): tile for (dx, dy), tile in hood.items()}
    assert classify_glyph(Tile.WALL, hood) == classify_glyph(Tile.WALL, rotated)


def test_room_outline():
    level = _level([
        "     ",
        " ... ",
        "     ",
    ])
    assert str(level) == "+---+\n|...|\n+---+\n"
    assert render_glyph(level, 0, 0) == Glyph.WALL_CORNER
    assert render_glyph(level, 2, 0) == Glyph.WALL_HORIZONTAL
    assert render_glyph(level, 0, 1) == Glyph.WALL_VERTICAL


def test_buried_walls_are_blank_and_hallways_render():
    level = _level([
        "       ",
        " .##.  ",
        "       ",
        "       ",
    ])
    assert render_glyph(level, 2, 1) == Glyph.HALLWAY
    assert render_glyph(level, 2, 0) == Glyph.WALL_HORIZONTAL
    assert render_glyph(level, 6, 3) == Glyph.BLANK
    assert render_glyph(level, 3, 3) == Glyph.BLANK


def test_render_glyph_out_of_bounds():
    level = _level(["..", ".."])
    with pytest.raises(IndexError):
        render_glyph(level, 2, 0)
    with pytest.raises(IndexError):
        render_glyph(level, 0, -1)


def test_neighborhood_of_marks_off_grid_cells():
    grid = TileGrid.from_ascii([". ", "  "])
    hood = neighborhood_of(grid, 0, 0)
    assert hood[(0, -1)] is None and hood[(-1, -1)] is None
    assert hood[(1, 0)] == Tile.WALL
    assert len(hood) == 8


def test_render_ascii_reads_back_to_same_tiles():
    rows = [
        "+----+   ",
        "|.<..|   ",
        "|....####",
        "+----+   ",
    ]
    grid = TileGrid.from_ascii(rows)
    again = TileGrid.from_ascii(render_ascii(grid).splitlines())
    assert again.rows() == grid.rows()


def test_render_ascii_with_known_mask_and_marks():
    grid = TileGrid.from_ascii(["     ", " ... ", "     "])
    known = [[False] * 5 for _ in range(3)]
    known[1][1] = known[1][2] = True
    out = render_ascii(grid, known=known, marks={(3, 1): "@"})
    assert out == "     \n ..@ \n     \n"


def test_render_ascii_rejects_mismatched_mask():
    grid = TileGrid(3, 2)
    with pytest.raises(ValueError):
        render_ascii(grid, known=[[True] * 3])
