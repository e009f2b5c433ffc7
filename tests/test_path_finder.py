import pytest

from dungeon_geometry import Rect, TilePos
from dungeon_layout import DungeonLayout
from dungeon_models import TileKind
from path_finder import (
    PathFinder,
    find_path,
    inflated_heuristic,
    manhattan_distance,
    path_cost,
)
from weighted_grid import DungeonGrid


def _assert_valid_path(grid, path, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for current, nxt in zip(path, path[1:]):
        assert nxt in grid.neighbors(current)


@pytest.mark.parametrize(
    "start,goal",
    [
        (TilePos(0, 0), TilePos(7, 4)),
        (TilePos(9, 9), TilePos(0, 0)),
        (TilePos(3, 8), TilePos(3, 1)),
    ],
)
def test_open_grid_path_length_is_manhattan(open_grid, start, goal):
    path = find_path(open_grid, None, manhattan_distance, start, goal)

    assert path is not None
    assert len(path) - 1 == manhattan_distance(start, goal)
    _assert_valid_path(open_grid, path, start, goal)


def test_start_equal_to_goal_returns_single_node(open_grid):
    assert find_path(open_grid, None, manhattan_distance, TilePos(2, 2), TilePos(2, 2)) == [
        TilePos(2, 2)
    ]


def test_search_is_deterministic(open_grid):
    finder = PathFinder(open_grid)

    first = finder.get_path(TilePos(1, 1), TilePos(8, 6))
    second = finder.get_path(TilePos(1, 1), TilePos(8, 6))
    third = find_path(open_grid, open_grid.cost, manhattan_distance, TilePos(1, 1), TilePos(8, 6))

    assert first == second == third


def test_full_width_barrier_makes_goal_unreachable():
    barrier = [TilePos(x, 5) for x in range(10)]
    grid = DungeonGrid(10, 10, blocked=barrier)

    assert find_path(grid, None, manhattan_distance, TilePos(0, 0), TilePos(0, 9)) is None


def test_goal_outside_grid_is_unreachable(open_grid):
    assert find_path(open_grid, None, manhattan_distance, TilePos(0, 0), TilePos(12, 3)) is None


def test_start_outside_grid_is_unreachable(open_grid):
    assert find_path(open_grid, None, manhattan_distance, TilePos(-1, 0), TilePos(3, 0)) is None


def test_blocked_start_is_unreachable():
    grid = DungeonGrid(10, 10, blocked=[TilePos(0, 0)])
    finder = PathFinder(grid)

    assert finder.get_path(TilePos(0, 0), TilePos(3, 0)) is None
    assert finder.get_path(TilePos(0, 0), TilePos(0, 0)) is None
    assert finder.expanded_nodes == 0


def test_path_routes_around_gap_in_barrier():
    barrier = [TilePos(x, 5) for x in range(10) if x != 9]
    grid = DungeonGrid(10, 10, blocked=barrier)

    path = find_path(grid, None, manhattan_distance, TilePos(0, 0), TilePos(0, 9))

    assert path is not None
    assert TilePos(9, 5) in path
    _assert_valid_path(grid, path, TilePos(0, 0), TilePos(0, 9))
    # 9 steps east, 9 north, 9 back west.
    assert len(path) - 1 == 27


def test_weighted_grid_prefers_cheaper_detour():
    layout = DungeonLayout(9, 5)
    room = Rect(3, 0, 3, 4)
    layout.mark_rect(room)
    grid = DungeonGrid.from_layout(layout, {TileKind.EMPTY: 1, TileKind.FLOOR: 5})

    path = find_path(grid, grid.cost, manhattan_distance, TilePos(0, 0), TilePos(8, 0))

    assert path is not None
    assert not any(room.contains(tile) for tile in path)
    assert path_cost(path, grid.cost) == 16


def test_inflated_heuristic_still_terminates_with_a_path():
    barrier = [TilePos(x, 5) for x in range(1, 10)]
    grid = DungeonGrid(10, 10, blocked=barrier)
    start, goal = TilePos(9, 0), TilePos(9, 9)

    optimal = find_path(grid, None, manhattan_distance, start, goal)
    greedy = find_path(grid, None, inflated_heuristic(manhattan_distance, 10), start, goal)

    assert optimal is not None and greedy is not None
    _assert_valid_path(grid, greedy, start, goal)
    assert len(greedy) >= len(optimal)


def test_inflated_heuristic_rejects_negative_factor():
    with pytest.raises(ValueError):
        inflated_heuristic(manhattan_distance, -1)


def test_custom_cost_function_overrides_graph_cost(open_grid):
    def expensive_column(tile):
        return 100 if tile.x == 5 else 1

    path = find_path(open_grid, expensive_column, manhattan_distance, TilePos(4, 0), TilePos(6, 0))

    # Every route east must enter column 5 once.
    assert path_cost(path, expensive_column) == 101


def test_negative_cost_raises(open_grid):
    finder = PathFinder(open_grid, cost_fn=lambda tile: -1)

    with pytest.raises(ValueError):
        finder.get_path(TilePos(0, 0), TilePos(3, 3))


def test_finder_clears_state_between_searches(open_grid):
    finder = PathFinder(open_grid)
    finder.get_path(TilePos(0, 0), TilePos(3, 0))
    assert finder.cost_of(TilePos(1, 0)) == 1

    finder.get_path(TilePos(9, 9), TilePos(9, 8))

    assert finder.cost_of(TilePos(1, 0)) is None
    assert finder.cost_of(TilePos(9, 9)) == 0


def test_path_cost_rejects_impassable_nodes():
    grid = DungeonGrid(3, 3, blocked=[TilePos(1, 0)])

    with pytest.raises(ValueError):
        path_cost([TilePos(0, 0), TilePos(1, 0)], grid.cost)
