import json
from pathlib import Path

import pytest

from experiments import Experiment, SolverConfiguration
from grid_routing import Grid


def test_experiment_run_all_creates_outputs(tmp_path: Path, example_grid):
    exp = Experiment(name="example", grid=example_grid, output_dir=tmp_path)
    exp.add_configuration(SolverConfiguration(name="graph", algorithm="movement_graph"))
    exp.add_configuration(
        SolverConfiguration(name="steps", algorithm="direction_state", metadata={"note": "baseline"})
    )

    results = exp.run_all()
    assert [r.config_name for r in results] == ["graph", "steps"]
    assert all(r.reachable and r.metrics["total_cost"] == 102 for r in results)

    manifest = tmp_path / "example" / "metrics_log.csv"
    assert manifest.exists()
    assert any((tmp_path / "example" / "metrics").glob("*.json"))

    solution = json.loads(results[0].solution_path.read_text(encoding="utf-8"))
    assert solution["cost"] == 102
    assert solution["path"][0] == [0, 0]
    assert solution["path"][-1] == [12, 12]
    assert all(1 <= run["steps"] <= 3 for run in solution["runs"])

    df = Experiment.load_all_metrics(tmp_path)
    assert not df.empty
    assert set(df["config_name"]) == {"graph", "steps"}
    assert set(df["total_cost"]) == {102}


def test_unreachable_run_is_recorded_without_cost(tmp_path: Path):
    exp = Experiment(name="row", grid=Grid.from_rows([[1, 1, 1, 1, 1]]), output_dir=tmp_path)
    exp.add_configuration(SolverConfiguration(name="graph"))
    run = exp.run_configuration("graph")
    assert not run.reachable
    assert run.metrics["reachable"] is False
    assert run.metrics["total_cost"] is None
    solution = json.loads(run.solution_path.read_text(encoding="utf-8"))
    assert solution["reachable"] is False
    assert solution["cost"] is None


def test_configuration_validation(tmp_path: Path):
    exp = Experiment(name="tiny", grid=Grid.from_rows([[1, 2], [3, 4]]), output_dir=tmp_path)
    exp.add_configuration(SolverConfiguration(name="graph"))
    with pytest.raises(ValueError):
        exp.add_configuration(SolverConfiguration(name="graph"))
    with pytest.raises(ValueError):
        exp.add_configuration(SolverConfiguration(name="other", algorithm="simplex"))
    with pytest.raises(KeyError):
        exp.run_configuration("missing")
    exp.remove_configuration("graph")
    assert exp.configurations == []


def test_custom_runner(tmp_path: Path):
    from grid_routing import solve

    exp = Experiment(name="tiny", grid=Grid.from_rows([[1, 2], [3, 4]]), output_dir=tmp_path)
    exp.add_configuration(
        SolverConfiguration(name="custom", runner=lambda grid, config: solve(grid, parallel=True))
    )
    assert exp.run_configuration("custom").metrics["total_cost"] == 6


def test_load_from_directory_round_trip(tmp_path: Path):
    grid = Experiment.generate_random_grid(4, 5, seed=3)
    exp = Experiment(name="saved", grid=grid, output_dir=tmp_path, goal=(2, 2))
    exp.add_configuration(
        SolverConfiguration(name="bf", algorithm="brute_force", solver_kwargs={"max_run": 3})
    )
    restored = Experiment.load_from_directory(tmp_path / "saved")
    assert restored.grid == grid
    assert restored.goal == (2, 2)
    assert restored.configurations == ["bf"]
    assert restored.run_configuration("bf").reachable
    with pytest.raises(FileNotFoundError):
        Experiment.load_from_directory(tmp_path / "nowhere")


def test_generate_random_grid_is_seeded():
    a = Experiment.generate_random_grid(3, 3, seed=1)
    b = Experiment.generate_random_grid(3, 3, seed=1)
    assert a == b
    assert all(1 <= v <= 9 for row in a.costs for v in row)
    with pytest.raises(ValueError):
        Experiment.generate_random_grid(0, 3)


def test_rerun_with_new_grid_replaces_stored_grid(tmp_path: Path):
    first = Experiment(name="same", grid=Grid.from_rows([[1, 2], [3, 4]]), output_dir=tmp_path)
    first.add_configuration(SolverConfiguration(name="graph"))
    first.run_all()

    replacement = Grid.from_rows([[9, 9], [9, 9]])
    second = Experiment(name="same", grid=replacement, output_dir=tmp_path)
    second.add_configuration(SolverConfiguration(name="graph"))
    assert second.run_configuration("graph").metrics["total_cost"] == 18

    restored = Experiment.load_from_directory(tmp_path / "same")
    assert restored.grid == replacement
    stored = json.loads((tmp_path / "same" / "grid.json").read_text(encoding="utf-8"))
    assert stored["costs"] == [[9, 9], [9, 9]]
