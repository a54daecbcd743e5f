import pytest

from lowengine.navigation import (
    AStar,
    MovementType,
    NavigationCell,
    NavigationGrid,
    chebyshev_distance,
)


def make_grid(rows, walk="#", swim="~"):
    """Build a grid from strings: '.' walkable, '~' swimmable, '#' blocked."""
    height = len(rows)
    width = len(rows[0])
    cells = []
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            cells.append(
                NavigationCell(
                    position=(x, y),
                    is_walkable=ch == ".",
                    is_swimmable=ch == "~",
                    is_flyable=True,
                )
            )
    return NavigationGrid(width=width, height=height, cells=cells)


def assert_valid_path(grid, path, start, end, movement_type):
    assert path[0].position == start
    assert path[-1].position == end
    for a, b in zip(path, path[1:]):
        assert chebyshev_distance(a.position, b.position) == 1.0
    for cell in path[1:]:
        assert cell.allows(movement_type)


def test_chebyshev_distance_value():
    assert chebyshev_distance((0, 0), (3, -1)) == 3.0


def test_chebyshev_distance_symmetric():
    assert chebyshev_distance((2, 5), (7, 1)) == chebyshev_distance((7, 1), (2, 5))


def test_straight_path_is_valid():
    grid = make_grid(["....."])
    path = grid.find_path((0, 0), (4, 0), MovementType.WALK)
    assert_valid_path(grid, path, (0, 0), (4, 0), MovementType.WALK)
    assert len(path) == 5


def test_start_equals_end():
    grid = make_grid(["...", "..."])
    path = grid.find_path((1, 1), (1, 1), MovementType.WALK)
    assert [c.position for c in path] == [(1, 1)]


def test_wall_blocks_path():
    grid = make_grid([
        ".#.",
        ".#.",
        ".#.",
    ])
    assert grid.find_path((0, 0), (2, 2), MovementType.WALK) == []


def test_path_goes_around_wall():
    grid = make_grid([
        ".#...",
        ".#.#.",
        "...#.",
    ])
    path = grid.find_path((0, 0), (4, 0), MovementType.WALK)
    assert_valid_path(grid, path, (0, 0), (4, 0), MovementType.WALK)
    assert all(c.position not in {(1, 0), (1, 1), (3, 1), (3, 2)} for c in path)


def test_diagonal_move_allowed():
    grid = make_grid([
        ".#",
        "#.",
    ])
    path = grid.find_path((0, 0), (1, 1), MovementType.WALK)
    assert [c.position for c in path] == [(0, 0), (1, 1)]


def test_movement_type_selects_cells():
    grid = make_grid([".~~~"])
    assert grid.find_path((0, 0), (3, 0), MovementType.WALK) == []
    path = grid.find_path((0, 0), (3, 0), MovementType.SWIM)
    assert_valid_path(grid, path, (0, 0), (3, 0), MovementType.SWIM)


def test_fly_passes_over_walls():
    grid = make_grid([".#.", "###", ".#."])
    path = grid.find_path((0, 0), (2, 2), MovementType.FLY)
    assert_valid_path(grid, path, (0, 0), (2, 2), MovementType.FLY)


def test_unwalkable_end_unreachable():
    grid = make_grid(["..#"])
    assert grid.find_path((0, 0), (2, 0), MovementType.WALK) == []


def test_start_outside_grid_raises():
    grid = make_grid(["..."])
    with pytest.raises(IndexError):
        grid.find_path((5, 0), (0, 0), MovementType.WALK)


def test_path_holds_copies():
    grid = make_grid(["...."])
    path = grid.find_path((0, 0), (3, 0), MovementType.WALK)
    path[1].is_walkable = False
    assert grid.cells[1].is_walkable is True
    assert all(p is not c for p in path for c in grid.cells)


def test_astar_matches_grid():
    grid = make_grid(["....", ".##.", "...."])
    direct = AStar(grid.cells, grid.width, grid.height).find_path((0, 0), (3, 2), MovementType.WALK)
    via_grid = grid.find_path((0, 0), (3, 2), MovementType.WALK)
    assert [c.position for c in direct] == [c.position for c in via_grid]


def test_repeated_search_is_stable():
    grid = make_grid(["....", "....", "...."])
    first = grid.find_path((0, 0), (3, 2), MovementType.WALK)
    second = grid.find_path((0, 0), (3, 2), MovementType.WALK)
    assert [c.position for c in first] == [c.position for c in second]


def test_distance_accumulates_move_cost():
    grid = make_grid(["...."])
    for cell in grid.cells:
        cell.move_cost = 2.0
    path = grid.find_path((0, 0), (3, 0), MovementType.WALK)
    assert path[-1].distance_from_start == pytest.approx(2.0 * (len(path) - 1))