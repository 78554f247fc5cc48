from typing import List, Sequence, Tuple

from .errors import OutOfBounds
from .Objects import Coord, Direction, Grid

MIN_RUN = 1
MAX_RUN = 3


def check_run_bounds(min_steps: int, max_steps: int) -> Tuple[int, int]:
    min_steps, max_steps = int(min_steps), int(max_steps)
    if min_steps < 1:
        raise ValueError(f"min_steps must be at least 1, got {min_steps}")
    if max_steps < min_steps:
        raise ValueError(f"max_steps ({max_steps}) must not be below min_steps ({min_steps})")
    return min_steps, max_steps


def expand_run(
    grid: Grid,
    coord: Sequence[int],
    direction: Direction,
    min_steps: int = MIN_RUN,
    max_steps: int = MAX_RUN,
) -> List[Tuple[Coord, int]]:
    """Return the cells reachable by one straight run from ``coord``.

    Entries are ``(destination, cumulative_cost)`` ordered by run length.
    Cost is paid on entering a cell, so the starting cell is never charged.
    The run stops at the grid edge instead of failing, which leaves fewer
    entries for cells near the border.
    """
    min_steps, max_steps = check_run_bounds(min_steps, max_steps)
    if not grid.in_bounds(coord):
        raise OutOfBounds(tuple(coord), grid.dimensions())

    reachable: List[Tuple[Coord, int]] = []
    total = 0
    for steps in range(1, max_steps + 1):
        nxt = direction.step(coord, steps)
        if not grid.in_bounds(nxt):
            break
        total += grid.cost_at(nxt)
        if steps >= min_steps:
            reachable.append((nxt, total))
    return reachable
