import pytest

from dungeon_geometry import Rect, TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import TileKind
from weighted_grid import DungeonGrid


def test_neighbors_are_bounds_clipped_and_ordered():
    grid = DungeonGrid(3, 3)

    assert grid.neighbors(TilePos(0, 0)) == [TilePos(0, 1), TilePos(1, 0)]
    assert grid.neighbors(TilePos(1, 1)) == [
        TilePos(1, 2),
        TilePos(2, 1),
        TilePos(1, 0),
        TilePos(0, 1),
    ]


def test_uniform_cost_and_out_of_bounds(open_grid):
    assert open_grid.cost(TilePos(4, 4)) == 1
    assert open_grid.cost(TilePos(10, 0)) is None
    assert open_grid.cost(TilePos(0, -1)) is None


def test_blocked_tiles_are_excluded():
    grid = DungeonGrid(3, 3, blocked=[TilePos(1, 2), TilePos(2, 1)])

    assert grid.neighbors(TilePos(1, 1)) == [TilePos(1, 0), TilePos(0, 1)]
    assert not grid.passable(TilePos(1, 2))


def test_explicit_weights_override_default_cost():
    grid = DungeonGrid(3, 3, weights={TilePos(2, 2): 7})

    assert grid.cost(TilePos(2, 2)) == 7
    assert grid.cost(TilePos(0, 0)) == 1


def test_tiles_without_cost_are_impassable():
    grid = DungeonGrid(3, 1, weights={TilePos(0, 0): 1, TilePos(1, 0): 2}, default_cost=None)

    assert grid.neighbors(TilePos(1, 0)) == [TilePos(0, 0)]
    assert grid.cost(TilePos(2, 0)) is None


def test_from_layout_weights_by_tile_kind():
    layout = DungeonLayout(4, 3)
    layout.mark_rect(Rect(1, 1, 2, 1))

    grid = DungeonGrid.from_layout(layout, {TileKind.EMPTY: 1, TileKind.FLOOR: 5})

    assert grid.cost(TilePos(0, 0)) == 1
    assert grid.cost(TilePos(1, 1)) == 5
    assert grid.cost(TilePos(2, 1)) == 5


def test_from_layout_missing_kind_is_impassable():
    layout = DungeonLayout(3, 3)
    layout.mark_floor(TilePos(1, 1))

    grid = DungeonGrid.from_layout(layout, {TileKind.FLOOR: 1})

    assert grid.neighbors(TilePos(1, 1)) == []
    assert grid.passable(TilePos(1, 1))


def test_grid_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        DungeonGrid(0, 3)
