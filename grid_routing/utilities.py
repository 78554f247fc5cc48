from pathlib import Path as FilePath
from typing import List, Tuple, Union

from .errors import MalformedGrid
from .expander import MAX_RUN, MIN_RUN
from .Objects import Direction, Grid, Path


def parse_grid(text: str) -> Grid:
    """Parse one line per row, one decimal digit per cell."""
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines:
        raise MalformedGrid("Grid text is empty")
    rows: List[List[int]] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.isdigit() or not line.isascii():
            raise MalformedGrid(f"Line {lineno} contains non-digit characters: {line!r}")
        rows.append([int(ch) for ch in line])
    return Grid.from_rows(rows)


def load_grid(path: Union[str, FilePath]) -> Grid:
    with FilePath(path).expanduser().open("r", encoding="utf-8") as fh:
        return parse_grid(fh.read())


def path_runs(path: Path) -> List[Tuple[Direction, int]]:
    """Split a cell-by-cell trail into (direction, steps) straight runs."""
    runs: List[Tuple[Direction, int]] = []
    for a, b in zip(path, path[1:]):
        delta = (b[0] - a[0], b[1] - a[1])
        try:
            direction = Direction(delta)
        except ValueError:
            raise ValueError(f"Cells {a} and {b} are not orthogonal neighbours") from None
        if runs and runs[-1][0] is direction:
            runs[-1] = (direction, runs[-1][1] + 1)
        else:
            runs.append((direction, 1))
    return runs


def is_legal_path(grid: Grid, path: Path, min_run: int = MIN_RUN, max_run: int = MAX_RUN) -> bool:
    """Check a trail stays on the grid, alternates axes and keeps runs within bounds."""
    if not path or any(not grid.in_bounds(p) for p in path):
        return False
    try:
        runs = path_runs(path)
    except ValueError:
        return False
    for idx, (direction, steps) in enumerate(runs):
        if not min_run <= steps <= max_run:
            return False
        if idx and runs[idx - 1][0].axis is direction.axis:
            return False
    return True


def path_to_str(path: Path) -> str:
    """Convert a path to a human-readable string."""
    return "->".join(f"({r},{c})" for r, c in path)


def waypoints_to_path(waypoints: Path) -> Path:
    """Fill in every cell between consecutive run endpoints."""
    if not waypoints:
        return []
    path: Path = [waypoints[0]]
    for a, b in zip(waypoints, waypoints[1:]):
        dr = (b[0] > a[0]) - (b[0] < a[0])
        dc = (b[1] > a[1]) - (b[1] < a[1])
        if dr and dc:
            raise ValueError(f"Waypoints {a} and {b} do not share a row or column")
        r, c = a
        while (r, c) != b:
            r, c = r + dr, c + dc
            path.append((r, c))
    return path
