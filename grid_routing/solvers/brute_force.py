import logging
from typing import FrozenSet, List, Optional, Tuple

from .base import Solver
from ..errors import GoalUnreachable
from ..expander import expand_run
from ..Objects import Axis, Coord, Direction, SearchResult
from ..utilities import waypoints_to_path

logger = logging.getLogger(__name__)

State = Tuple[Coord, Axis]


class BruteForceSolver(Solver):
    """Exhaustive depth-first search over whole runs.

    Each branch remembers the (cell, next axis) states it has passed through and
    never repeats one; branches that already cost as much as the best complete
    path are cut. Exponential in the grid size, so only for small grids.
    """

    name = "brute_force"

    def solve(self) -> SearchResult:
        stack: List[Tuple[int, State, Tuple[Coord, ...], FrozenSet[State]]] = []
        for axis in (Axis.VERTICAL, Axis.HORIZONTAL):
            seed = (self.start, axis)
            stack.append((0, seed, (self.start,), frozenset([seed])))

        best_cost: Optional[int] = None
        best_waypoints: Tuple[Coord, ...] = ()
        best_axis: Optional[Axis] = None
        expanded = 0

        while stack:
            cost, (cell, axis), waypoints, memory = stack.pop()
            expanded += 1
            if cell == self.goal:
                if best_cost is None or cost < best_cost:
                    best_cost, best_waypoints = cost, waypoints
                    best_axis = None if len(waypoints) == 1 else _first_run_axis(waypoints)
                continue
            for direction in Direction.along(axis):
                for target, weight in expand_run(self.grid, cell, direction, self.min_run, self.max_run):
                    state = (target, axis.complement())
                    if state in memory:
                        continue
                    total = cost + weight
                    if best_cost is not None and total >= best_cost:
                        continue
                    stack.append((total, state, waypoints + (target,), memory | {state}))

        if best_cost is None:
            logger.debug("Exhaustive search expanded %s branches without reaching %s.", expanded, self.goal)
            raise GoalUnreachable(self.start, self.goal)
        return SearchResult(best_cost, waypoints_to_path(list(best_waypoints)), best_axis, expanded, self.name)


def _first_run_axis(waypoints: Tuple[Coord, ...]) -> Axis:
    """Axis of the first run of a waypoint chain."""
    (r0, _), (r1, _) = waypoints[0], waypoints[1]
    return Axis.HORIZONTAL if r0 == r1 else Axis.VERTICAL
