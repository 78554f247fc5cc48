from typing import Any, Dict

from .Objects import Grid, Path, SearchResult
from .utilities import path_runs


def path_cost(grid: Grid, path: Path) -> int:
    """Sum of the costs of every cell entered; the first cell is free."""
    return sum(grid.cost_at(p) for p in path[1:])


def step_count(path: Path) -> int:
    return max(0, len(path) - 1)


def run_count(path: Path) -> int:
    return len(path_runs(path))


def turn_count(path: Path) -> int:
    return max(0, run_count(path) - 1)


def summarize(grid: Grid, result: SearchResult) -> Dict[str, Any]:
    """Flat, JSON-friendly metrics for a search result."""
    return {
        "total_cost": result.cost,
        "path_cost": path_cost(grid, result.path),
        "steps": step_count(result.path),
        "runs": run_count(result.path),
        "turns": turn_count(result.path),
        "settled_states": result.settled,
        "start_axis": result.start_axis.name.lower() if result.start_axis else "",
    }
