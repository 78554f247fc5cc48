import pytest

from grid_routing import (
    Axis,
    GoalUnreachable,
    Grid,
    build_movement_graph,
    is_legal_path,
    minimum_cost,
    parse_grid,
    solve,
    solve_from_axis,
)
from grid_routing.metrics import path_cost
from grid_routing.solvers import REGISTRY


def test_example_grid_minimum_cost(example_grid):
    result = solve(example_grid)
    assert result.cost == 102
    assert result.path[0] == (0, 0)
    assert result.path[-1] == (12, 12)
    assert is_legal_path(example_grid, result.path)
    assert path_cost(example_grid, result.path) == 102


def test_example_grid_with_longer_runs(example_grid):
    assert minimum_cost(example_grid, min_run=4, max_run=10) == 94


def test_answer_is_the_cheaper_seeded_run(example_grid):
    graph = build_movement_graph(example_grid)
    horizontal = solve_from_axis(graph, (0, 0), (12, 12), Axis.HORIZONTAL)
    vertical = solve_from_axis(graph, (0, 0), (12, 12), Axis.VERTICAL)
    assert horizontal.cost >= 0 and vertical.cost >= 0
    assert min(horizontal.cost, vertical.cost) == 102
    assert horizontal.start_axis is Axis.HORIZONTAL
    assert horizontal.path[1][0] == 0
    assert vertical.path[1][1] == 0


def test_first_axis_matters_on_small_grid():
    g = Grid.from_rows([[1, 2], [3, 4]])
    graph = build_movement_graph(g)
    assert solve_from_axis(graph, g.start, g.goal, Axis.HORIZONTAL).cost == 6
    assert solve_from_axis(graph, g.start, g.goal, Axis.VERTICAL).cost == 7
    result = solve(g)
    assert result.cost == 6
    assert result.path == [(0, 0), (0, 1), (1, 1)]
    assert result.start_axis is Axis.HORIZONTAL


def test_single_cell_grid_costs_nothing():
    result = solve(Grid.from_rows([[7]]))
    assert result.cost == 0
    assert result.path == [(0, 0)]


def test_start_equal_to_goal_costs_nothing(example_grid):
    assert minimum_cost(example_grid, start=(4, 4), goal=(4, 4)) == 0


def test_positive_grid_never_costs_zero(example_grid):
    assert minimum_cost(example_grid, start=(0, 0), goal=(0, 1)) == 4


def test_single_row_overshoot_is_unreachable():
    g = Grid.from_rows([[1, 1, 1, 1, 1]])
    with pytest.raises(GoalUnreachable) as excinfo:
        solve(g)
    assert excinfo.value.goal == (0, 4)


def test_single_row_within_reach():
    g = Grid.from_rows([[1, 2, 3, 4]])
    graph = build_movement_graph(g)
    assert solve(g).cost == 9
    with pytest.raises(GoalUnreachable) as excinfo:
        solve_from_axis(graph, g.start, g.goal, Axis.VERTICAL)
    assert excinfo.value.axis is Axis.VERTICAL


def test_forced_detour_on_two_row_grid():
    g = Grid.from_rows([[1] * 8, [1] * 8])
    result = solve(g)
    assert result.cost == 10
    assert is_legal_path(g, result.path)


def test_uniform_grid_takes_a_shortest_route():
    g = Grid.from_rows([[1] * 5 for _ in range(5)])
    assert minimum_cost(g) == 8


def test_parallel_matches_sequential(example_grid):
    sequential = solve(example_grid)
    parallel = solve(example_grid, parallel=True)
    assert parallel.cost == sequential.cost == 102


@pytest.mark.parametrize("delta", [5, -1])
def test_cost_change_on_optimal_path_is_monotone(example_grid, delta):
    baseline = solve(example_grid)
    cell = baseline.path[5]
    changed = example_grid.with_cost(cell, max(0, example_grid.cost_at(cell) + delta))
    cost = minimum_cost(changed)
    if delta > 0:
        assert cost >= baseline.cost
    else:
        assert cost <= baseline.cost


def test_endpoints_outside_grid_are_rejected(example_grid):
    graph = build_movement_graph(example_grid)
    with pytest.raises(IndexError):
        solve_from_axis(graph, (0, 0), (13, 13), Axis.HORIZONTAL)


TRIMMED_EXAMPLE = """
2413432311
3215565659
3255727546
3446585845
4546657867
1438598798
4457876987
4458712197
5259692273
3321751341
"""


def test_trimmed_ten_by_ten_grid():
    g = parse_grid(TRIMMED_EXAMPLE)
    result = solve(g)
    assert g.dimensions() == (10, 10)
    assert result.cost == 63
    assert result.path[-1] == (9, 9)
    assert is_legal_path(g, result.path)
    assert path_cost(g, result.path) == 63
    assert REGISTRY["direction_state"](g).solve().cost == 63
