from typing import Optional, Sequence

from .base import Solver
from ..ConstrainedSolver import solve_graph
from ..MovementGraph import MovementGraph, build_movement_graph
from ..Objects import Grid, SearchResult


class MovementGraphSolver(Solver):
    """Dijkstra over the run graph, once per starting axis."""

    name = "movement_graph"

    def __init__(
        self,
        grid: Grid,
        start: Optional[Sequence[int]] = None,
        goal: Optional[Sequence[int]] = None,
        parallel: bool = False,
        **kwargs,
    ):
        super().__init__(grid, start, goal, **kwargs)
        self.parallel = bool(parallel)
        self._graph: Optional[MovementGraph] = None

    @property
    def graph(self) -> MovementGraph:
        if self._graph is None:
            self._graph = build_movement_graph(self.grid, self.min_run, self.max_run)
        return self._graph

    def solve(self) -> SearchResult:
        return solve_graph(self.graph, self.start, self.goal, parallel=self.parallel)
