"""
Shortest paths over a ``MovementGraph`` with alternating run axes.

Every edge of the movement graph is a complete straight run, so two edges in a
row must never share an axis. The search state is therefore the pair
``(cell, axis the next run must use)`` and the start cell is searched twice,
once per starting axis.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import heapq
import itertools
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .errors import GoalUnreachable
from .expander import MAX_RUN, MIN_RUN
from .MovementGraph import MovementGraph, build_movement_graph
from .Objects import Axis, Coord, Grid, Path, SearchResult, _as_coord
from .utilities import waypoints_to_path

logger = logging.getLogger(__name__)

State = Tuple[Coord, Axis]


def _trail(parent: Dict[State, Optional[State]], last: State) -> Path:
    """Expand the chain of run endpoints ending at ``last`` into every cell entered."""
    waypoints: List[Coord] = []
    current: Optional[State] = last
    while current is not None:
        waypoints.append(current[0])
        current = parent.get(current)
    waypoints.reverse()
    return waypoints_to_path(waypoints)


def solve_from_axis(
    graph: MovementGraph,
    start: Sequence[int],
    goal: Sequence[int],
    axis: Axis,
) -> SearchResult:
    """Cheapest path from ``start`` to ``goal`` whose first run lies on ``axis``.

    Raises:
        GoalUnreachable: the frontier ran dry before the goal was settled.
    """
    start = _as_coord(start)
    goal = _as_coord(goal)
    # Validates both endpoints against the grid.
    graph.node(start)
    graph.node(goal)

    seed: State = (start, axis)
    best: Dict[State, int] = {seed: 0}
    parent: Dict[State, Optional[State]] = {seed: None}
    visited: Set[State] = set()
    counter = itertools.count()
    frontier: List[Tuple[int, int, Coord, Axis]] = [(0, next(counter), start, axis)]

    while frontier:
        cost, _, node, next_axis = heapq.heappop(frontier)
        state = (node, next_axis)
        if state in visited or cost > best.get(state, cost):
            continue
        if node == goal:
            logger.debug(
                "Reached %s from %s on %s start: cost=%s, settled=%s.",
                goal, start, axis.name, cost, len(visited),
            )
            return SearchResult(
                cost=cost,
                path=_trail(parent, state),
                start_axis=axis,
                settled=len(visited),
                algorithm="movement_graph",
            )
        visited.add(state)

        for edge in graph.edges_from(node, next_axis):
            neighbor: State = (edge.target, edge.axis.complement())
            if neighbor in visited:
                continue
            candidate = cost + edge.weight
            if candidate < best.get(neighbor, candidate + 1):
                best[neighbor] = candidate
                parent[neighbor] = state
                heapq.heappush(frontier, (candidate, next(counter), edge.target, neighbor[1]))

    logger.debug("Frontier exhausted after settling %s states on %s start.", len(visited), axis.name)
    raise GoalUnreachable(start, goal, axis)


def solve_graph(
    graph: MovementGraph,
    start: Optional[Sequence[int]] = None,
    goal: Optional[Sequence[int]] = None,
    parallel: bool = False,
) -> SearchResult:
    """Run both seeded searches over a prebuilt graph and keep the cheaper one."""
    start = _as_coord(start) if start is not None else graph.grid.start
    goal = _as_coord(goal) if goal is not None else graph.grid.goal
    axes = (Axis.HORIZONTAL, Axis.VERTICAL)

    def attempt(axis: Axis) -> SearchResult | GoalUnreachable:
        try:
            return solve_from_axis(graph, start, goal, axis)
        except GoalUnreachable as exc:
            return exc

    if parallel:
        with ThreadPoolExecutor(max_workers=len(axes)) as pool:
            outcomes = list(pool.map(attempt, axes))
    else:
        outcomes = [attempt(axis) for axis in axes]

    results = [o for o in outcomes if isinstance(o, SearchResult)]
    if not results:
        raise GoalUnreachable(start, goal)
    best = min(results, key=lambda r: r.cost)
    logger.info(
        "Cheapest path %s -> %s costs %s (first run %s).",
        start, goal, best.cost, best.start_axis.name.lower(),
    )
    return best


def solve(
    grid: Grid,
    start: Optional[Sequence[int]] = None,
    goal: Optional[Sequence[int]] = None,
    min_run: int = MIN_RUN,
    max_run: int = MAX_RUN,
    parallel: bool = False,
) -> SearchResult:
    """Cheapest legal path across ``grid``, top-left to bottom-right by default."""
    graph = build_movement_graph(grid, min_run=min_run, max_run=max_run)
    return solve_graph(graph, start=start, goal=goal, parallel=parallel)


def minimum_cost(grid: Grid, **kwargs) -> int:
    return solve(grid, **kwargs).cost
