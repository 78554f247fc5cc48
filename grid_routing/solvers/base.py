from typing import Optional, Sequence

from ..expander import MAX_RUN, MIN_RUN, check_run_bounds
from ..Objects import Coord, Grid, SearchResult, _as_coord


class Solver:
    """Base class for cheapest-path solvers over a cost grid."""

    name = "solver"

    def __init__(
        self,
        grid: Grid,
        start: Optional[Sequence[int]] = None,
        goal: Optional[Sequence[int]] = None,
        min_run: int = MIN_RUN,
        max_run: int = MAX_RUN,
    ):
        self.grid = grid
        self.start: Coord = _as_coord(start) if start is not None else grid.start
        self.goal: Coord = _as_coord(goal) if goal is not None else grid.goal
        self.min_run, self.max_run = check_run_bounds(min_run, max_run)
        # Fail on bad endpoints before any search starts.
        grid.cost_at(self.start)
        grid.cost_at(self.goal)

    def solve(self) -> SearchResult:
        """Return the cheapest legal path, or raise GoalUnreachable."""
        raise NotImplementedError
