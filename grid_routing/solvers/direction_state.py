import heapq
import itertools
import logging
from typing import Dict, List, Optional, Set, Tuple

from .base import Solver
from ..errors import GoalUnreachable
from ..Objects import Coord, Direction, Path, SearchResult

logger = logging.getLogger(__name__)

# (cell, direction of the current run, steps taken in it)
DirState = Tuple[Coord, Optional[Direction], int]


class DirectionStateSolver(Solver):
    """Single-step Dijkstra whose states remember the current run.

    Each move enters one neighbouring cell. Going straight is allowed while the
    run is shorter than ``max_run``; turning needs at least ``min_run`` steps;
    reversing is never allowed.
    """

    name = "direction_state"

    def _moves(self, state: DirState) -> List[DirState]:
        cell, direction, run = state
        moves: List[DirState] = []
        for nd in Direction:
            if direction is not None and nd is direction.opposite():
                continue
            if nd is direction:
                if run >= self.max_run:
                    continue
                nxt_run = run + 1
            else:
                if direction is not None and run < self.min_run:
                    continue
                nxt_run = 1
            nxt = nd.step(cell)
            if self.grid.in_bounds(nxt):
                moves.append((nxt, nd, nxt_run))
        return moves

    def _finished(self, state: DirState) -> bool:
        cell, direction, run = state
        return cell == self.goal and (direction is None or run >= self.min_run)

    def solve(self) -> SearchResult:
        seed: DirState = (self.start, None, 0)
        best: Dict[DirState, int] = {seed: 0}
        parent: Dict[DirState, Optional[DirState]] = {seed: None}
        settled: Set[DirState] = set()
        counter = itertools.count()
        frontier = [(0, next(counter), seed)]

        while frontier:
            cost, _, state = heapq.heappop(frontier)
            if state in settled or cost > best.get(state, cost):
                continue
            if self._finished(state):
                path = self._trail(parent, state)
                first = path[1] if len(path) > 1 else None
                axis = Direction((first[0] - path[0][0], first[1] - path[0][1])).axis if first else None
                return SearchResult(cost, path, axis, len(settled), self.name)
            settled.add(state)
            for nxt in self._moves(state):
                candidate = cost + self.grid.cost_at(nxt[0])
                if candidate < best.get(nxt, candidate + 1):
                    best[nxt] = candidate
                    parent[nxt] = state
                    heapq.heappush(frontier, (candidate, next(counter), nxt))

        logger.debug("Direction-state search settled %s states without reaching %s.", len(settled), self.goal)
        raise GoalUnreachable(self.start, self.goal)

    @staticmethod
    def _trail(parent: Dict[DirState, Optional[DirState]], last: DirState) -> Path:
        path: Path = []
        current: Optional[DirState] = last
        while current is not None:
            path.append(current[0])
            current = parent.get(current)
        path.reverse()
        return path
