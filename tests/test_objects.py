from dataclasses import FrozenInstanceError

import pytest

from grid_routing import Axis, Direction, Grid, MalformedGrid, OutOfBounds


def test_grid_lookup_and_dimensions():
    g = Grid.from_rows([[1, 2, 3], [4, 5, 6]])
    assert g.dimensions() == (2, 3)
    assert g.cost_at((0, 0)) == 1
    assert g.cost_at((1, 2)) == 6
    assert g.start == (0, 0)
    assert g.goal == (1, 2)
    assert list(g.coords()) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


@pytest.mark.parametrize("coord", [(-1, 0), (0, -1), (2, 0), (0, 3)])
def test_grid_out_of_bounds(coord):
    g = Grid.from_rows([[1, 2, 3], [4, 5, 6]])
    assert not g.in_bounds(coord)
    with pytest.raises(OutOfBounds):
        g.cost_at(coord)


@pytest.mark.parametrize("rows", [
    [],
    [[]],
    [[1, 2], [3]],
    [[1, -2]],
    [[1.7, 2]],
    [["a", 2]],
    [["3", 2]],
    [[True, 2]],
    [[None, 2]],
    [5, 6],
])
def test_grid_rejects_malformed_rows(rows):
    with pytest.raises(MalformedGrid):
        Grid.from_rows(rows)


def test_grid_is_immutable():
    g = Grid.from_rows([[1, 2], [3, 4]])
    with pytest.raises(FrozenInstanceError):
        g.costs = ((0,),)
    changed = g.with_cost((1, 1), 9)
    assert g.cost_at((1, 1)) == 4
    assert changed.cost_at((1, 1)) == 9


def test_axis_complement_is_an_involution():
    assert Axis.HORIZONTAL.complement() is Axis.VERTICAL
    assert Axis.VERTICAL.complement() is Axis.HORIZONTAL
    for axis in Axis:
        assert axis.complement().complement() is axis


def test_direction_axis_and_opposite():
    assert Direction.LEFT.axis is Axis.HORIZONTAL
    assert Direction.RIGHT.axis is Axis.HORIZONTAL
    assert Direction.UP.axis is Axis.VERTICAL
    assert Direction.DOWN.axis is Axis.VERTICAL
    assert Direction.UP.opposite() is Direction.DOWN
    assert Direction.RIGHT.opposite() is Direction.LEFT
    assert Direction.RIGHT.step((2, 2), 3) == (2, 5)
    assert set(Direction.along(Axis.VERTICAL)) == {Direction.UP, Direction.DOWN}
