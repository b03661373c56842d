import pytest

from pathviz.domain.grid import Grid
from pathviz.domain.types import to_index, from_index, in_bounds


def test_cell_count_matches_dimensions():
    grid = Grid(7, 3)
    assert grid.size == 21
    assert grid.cell((6, 2)) is not None
    assert grid.cell((7, 2)) is None


def test_zero_sized_grid_is_allowed():
    grid = Grid(0, 0)
    assert grid.size == 0
    assert not grid.in_bounds((0, 0))


def test_negative_dimensions_raise():
    with pytest.raises(ValueError):
        Grid(-1, 4)


def test_invalid_default_cost_raises():
    with pytest.raises(ValueError):
        Grid(2, 2, default_cost=0)


def test_set_blocked_in_and_out_of_bounds():
    grid = Grid(3, 3)
    assert grid.set_blocked((1, 1), True)
    assert grid.is_blocked((1, 1))
    assert not grid.set_blocked((3, 0), True)
    assert not grid.set_blocked((-1, 0), True)


def test_set_cost_rejects_invalid_values():
    grid = Grid(3, 3)
    assert grid.set_cost((2, 2), 7)
    assert grid.cost((2, 2)) == 7
    assert not grid.set_cost((2, 2), 0)
    assert grid.cost((2, 2)) == 7
    assert not grid.set_cost((5, 5), 3)


def test_out_of_bounds_queries_have_defaults():
    grid = Grid(2, 2, default_cost=4)
    assert grid.is_blocked((2, 0)) is True
    assert grid.cost((-1, 0)) == 1


def test_clear_blocked_and_fill_cost():
    grid = Grid(2, 2)
    grid.set_blocked((0, 0), True)
    grid.set_blocked((1, 1), True)
    grid.clear_blocked()
    assert not any(grid.is_blocked((x, y)) for x in range(2) for y in range(2))

    assert grid.fill_cost(3)
    assert all(grid.cost((x, y)) == 3 for x in range(2) for y in range(2))
    assert not grid.fill_cost(0)


def test_neighbors4_order_is_east_west_south_north():
    grid = Grid(3, 3)
    assert grid.neighbors4((1, 1)) == [(2, 1), (0, 1), (1, 2), (1, 0)]


def test_neighbors4_skips_blocked_and_out_of_bounds():
    grid = Grid(3, 3)
    grid.set_blocked((1, 0), True)
    assert grid.neighbors4((0, 0)) == [(0, 1)]
    assert grid.neighbors4((9, 9)) == []


def test_neighbors8_row_major_scan():
    grid = Grid(3, 3)
    assert grid.neighbors8((1, 1)) == [
        (0, 0), (1, 0), (2, 0),
        (0, 1), (2, 1),
        (0, 2), (1, 2), (2, 2),
    ]


def test_neighbors8_at_corner_with_wall():
    grid = Grid(3, 3)
    grid.set_blocked((1, 1), True)
    assert grid.neighbors8((0, 0)) == [(1, 0), (0, 1)]


def test_copy_is_independent():
    grid = Grid(2, 2)
    clone = grid.copy()
    clone.set_blocked((0, 0), True)
    clone.set_cost((1, 1), 9)
    assert not grid.is_blocked((0, 0))
    assert grid.cost((1, 1)) == 1


def test_index_helpers_are_row_major():
    assert to_index(5, (2, 3)) == 17
    assert from_index(5, 17) == (2, 3)
    assert from_index(0, 17) == (0, 0)
    assert in_bounds(5, 4, (4, 3))
    assert not in_bounds(5, 4, (5, 0))
    assert not in_bounds(0, 0, (0, 0))
