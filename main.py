from __future__ import annotations
from pathlib import Path
import sys
from experiments import Experiment, SolverConfiguration
from grid_routing import load_grid
import logging
import pandas as pd
logging.basicConfig(level=logging.WARNING)

DEFAULT_GRID = Path(__file__).resolve().parent / "data" / "example.txt"

def register_configurations(experiment: Experiment, include_brute_force: bool = False) -> None:
    """Register the run-graph solver (sequential and parallel) and the direction-state baseline."""
    experiment.add_configuration(
        SolverConfiguration(
            name="movement_graph",
            algorithm="movement_graph",
        )
    )
    experiment.add_configuration(
        SolverConfiguration(
            name="movement_graph_parallel",
            algorithm="movement_graph",
            solver_kwargs={"parallel": True},
            metadata={"description": "Both starting axes searched on a thread pool"},
        )
    )
    experiment.add_configuration(
        SolverConfiguration(
            name="direction_state",
            algorithm="direction_state",
        )
    )
    if include_brute_force:
        experiment.add_configuration(
            SolverConfiguration(
                name="brute_force",
                algorithm="brute_force",
                metadata={"description": "Exhaustive search, small grids only"},
            )
        )

def compare_solvers_by_time(df: pd.DataFrame) -> pd.Series:
    """Mean wall time per configuration across every stored run."""
    return df.groupby("config_name")["time_sec"].mean().sort_values()

def main(grid_file: str | Path = DEFAULT_GRID) -> None:
    """Solve one grid file with every configuration, storing outputs under saved_experiments/."""
    grid = load_grid(grid_file)
    experiment = Experiment(
        name=Path(grid_file).stem,
        grid=grid,
        output_dir=Path("saved_experiments"),
    )
    register_configurations(experiment, include_brute_force=grid.rows * grid.cols <= 25)
    for run in experiment.run_all():
        cost = run.metrics["total_cost"] if run.reachable else "unreachable"
        print(f"{run.config_name}: {cost}")

def main2() -> None:
    """Benchmark solvers on random 20x20 grids and report mean time per configuration."""
    for experiment_id in range(20):
        experiment = Experiment(
            name=f"random_20x20_{experiment_id}",
            grid=Experiment.generate_random_grid(20, 20, seed=experiment_id),
            output_dir=Path("saved_experiments"),
        )
        register_configurations(experiment)
        experiment.run_all()
    df = Experiment.load_all_metrics("saved_experiments")
    print(compare_solvers_by_time(df))

if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_GRID)
