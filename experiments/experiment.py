"""
Experiment utilities for running grid routing scenarios.

The ``Experiment`` class runs solvers from ``grid_routing.solvers`` against a
cost grid, records metrics, and optionally saves visualization artefacts.
"""

from __future__ import annotations

import csv
import json
import logging
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd
from uuid import uuid4

from grid_routing import GoalUnreachable, Grid, SearchResult
from grid_routing.metrics import summarize
from grid_routing.solvers import REGISTRY as SOLVER_REGISTRY
from grid_routing.utilities import path_runs
from grid_routing.visualize import visualize

logger = logging.getLogger(__name__)

RunnerType = Callable[[Grid, "SolverConfiguration"], SearchResult]


@dataclass
class SolverConfiguration:
    """Configuration that describes how a solver run should be executed."""

    name: str
    algorithm: str = "movement_graph"
    solver_kwargs: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    runner: Optional[RunnerType] = None

    def normalized_algorithm(self) -> str:
        return self.algorithm.lower().strip()


@dataclass
class RunResult:
    """Summary of a single solver execution."""

    run_id: str
    config_name: str
    algorithm: str
    timestamp: str
    metrics: Dict[str, Any]
    metadata: Mapping[str, Any]
    config_snapshot: Mapping[str, Any]
    result: Optional[SearchResult]
    metrics_path: Path
    solution_path: Path
    image_path: Optional[Path]
    manifest_path: Path
    grid_path: Path

    @property
    def reachable(self) -> bool:
        return self.result is not None


class Experiment:
    """Orchestrates solver experiments and manages outputs on disk."""

    def __init__(
        self,
        name: str,
        grid: Grid,
        output_dir: Path | str,
        start: Optional[Sequence[int]] = None,
        goal: Optional[Sequence[int]] = None,
    ) -> None:
        self.name = name
        self.grid = grid
        self.start = tuple(start) if start is not None else grid.start
        self.goal = tuple(goal) if goal is not None else grid.goal
        self.output_root = Path(output_dir).expanduser()
        self.experiment_dir = self.output_root / self.name
        self.metrics_dir = self.experiment_dir / "metrics"
        self.images_dir = self.experiment_dir / "images"
        self.solutions_dir = self.experiment_dir / "solutions"
        self.grid_path = self.experiment_dir / "grid.json"
        self.definition_path = self.experiment_dir / "experiment.json"
        self.manifest_path = self.experiment_dir / "metrics_log.csv"
        self._ensure_directories()

        self._configurations: Dict[str, SolverConfiguration] = {}
        self.history: Dict[str, RunResult] = {}
        self._manifest_fieldnames: Optional[List[str]] = None
        self._write_grid_description()
        self._write_experiment_definition()

    @property
    def configurations(self) -> List[str]:
        return list(self._configurations.keys())

    def add_configuration(self, config: SolverConfiguration) -> None:
        """Register a solver configuration by name."""
        if config.name in self._configurations:
            raise ValueError(f"Configuration {config.name!r} already exists.")
        if config.runner is None and config.normalized_algorithm() not in SOLVER_REGISTRY:
            raise ValueError(f"Unsupported algorithm {config.algorithm!r}.")
        self._configurations[config.name] = config
        logger.debug("Configuration %s registered.", config.name)
        self._write_experiment_definition()

    def add_configurations(self, configs: Iterable[SolverConfiguration]) -> None:
        """Register multiple configurations in one call."""
        for config in configs:
            self.add_configuration(config)

    def remove_configuration(self, name: str) -> None:
        """Remove a previously registered configuration."""
        self._configurations.pop(name, None)
        self.history.pop(name, None)
        logger.debug("Configuration %s removed.", name)
        self._write_experiment_definition()

    def run_configuration(
        self,
        name: str,
        *,
        save_image: bool = False,
        show_image: bool = False,
    ) -> RunResult:
        """Execute a single configuration."""
        config = self._configurations.get(name)
        if config is None:
            raise KeyError(f"Configuration {name!r} is not registered.")

        logger.info("Running configuration %s using %s solver.", name, config.algorithm)
        started = time.perf_counter()
        try:
            result: Optional[SearchResult] = self._execute(config)
        except GoalUnreachable as exc:
            logger.warning("Configuration %s: %s", name, exc)
            result = None
        elapsed = time.perf_counter() - started

        metrics = self._compute_metrics(result, elapsed)
        timestamp = self._timestamp()
        run_id = self._generate_run_id()
        config_snapshot = self._config_snapshot(config)

        metrics_path = self._write_metrics(config_snapshot, metrics, timestamp, run_id)
        solution_path = self._write_solution(config_snapshot, result, timestamp, run_id)

        image_path: Optional[Path] = None
        paths = [result] if result is not None else None
        if save_image:
            image_path = self.images_dir / f"{config.name}_{timestamp}_{run_id}.png"
            visualize(self.grid, paths, show=show_image, save_path=str(image_path))
        elif show_image:
            visualize(self.grid, paths, show=True, save_path=None)

        self._append_manifest(
            run_id=run_id,
            config_snapshot=config_snapshot,
            timestamp=timestamp,
            metrics=metrics,
            metrics_path=metrics_path,
            solution_path=solution_path,
            image_path=image_path,
        )

        run = RunResult(
            run_id=run_id,
            config_name=config.name,
            algorithm=config.algorithm,
            timestamp=timestamp,
            metrics=metrics,
            metadata=config.metadata,
            config_snapshot=config_snapshot,
            result=result,
            metrics_path=metrics_path,
            solution_path=solution_path,
            image_path=image_path,
            manifest_path=self.manifest_path,
            grid_path=self.grid_path,
        )
        self.history[config.name] = run
        logger.info("Configuration %s completed.", name)
        return run

    def run_all(
        self,
        config_names: Iterable[str] | None = None,
        *,
        save_images: bool = False,
        show_images: bool = False,
    ) -> List[RunResult]:
        """Execute multiple configurations, returning the collected results."""
        names = list(config_names) if config_names is not None else list(self._configurations.keys())
        results: List[RunResult] = []
        for name in names:
            result = self.run_configuration(name, save_image=save_images, show_image=show_images)
            results.append(result)
        return results

    def _execute(self, config: SolverConfiguration) -> SearchResult:
        if config.runner is not None:
            return config.runner(self.grid, config)

        solver_cls = SOLVER_REGISTRY.get(config.normalized_algorithm())
        if solver_cls is None:
            raise ValueError(f"Unsupported algorithm {config.algorithm!r}.")
        solver = solver_cls(self.grid, start=self.start, goal=self.goal, **config.solver_kwargs)
        return solver.solve()

    def _compute_metrics(self, result: Optional[SearchResult], elapsed: float) -> Dict[str, Any]:
        metrics: Dict[str, Any] = {
            "reachable": result is not None,
            "total_cost": None,
            "path_cost": None,
            "steps": None,
            "runs": None,
            "turns": None,
            "settled_states": None,
            "start_axis": "",
        }
        if result is not None:
            metrics.update(summarize(self.grid, result))
        metrics["time_sec"] = round(elapsed, 6)
        return metrics

    def _write_metrics(
        self,
        config_snapshot: Mapping[str, Any],
        metrics: Dict[str, Any],
        timestamp: str,
        run_id: str,
    ) -> Path:
        payload = {
            "experiment": self.name,
            "run_id": run_id,
            "name": config_snapshot["name"],
            "algorithm": config_snapshot["algorithm"],
            "config": config_snapshot,
            "timestamp": timestamp,
            "metrics": metrics,
        }
        path = self.metrics_dir / f"{config_snapshot['name']}_{timestamp}_{run_id}.json"
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        return path

    def _write_solution(
        self,
        config_snapshot: Mapping[str, Any],
        result: Optional[SearchResult],
        timestamp: str,
        run_id: str,
    ) -> Path:
        path = self.solutions_dir / f"{config_snapshot['name']}_{timestamp}_{run_id}.json"
        payload: Dict[str, Any] = {
            "experiment": self.name,
            "run_id": run_id,
            "config": config_snapshot,
            "algorithm": config_snapshot["algorithm"],
            "timestamp": timestamp,
            "start": list(self.start),
            "goal": list(self.goal),
            "reachable": result is not None,
            "cost": None,
            "start_axis": None,
            "path": [],
            "runs": [],
        }
        if result is not None:
            payload.update(
                cost=result.cost,
                start_axis=result.start_axis.name.lower() if result.start_axis else None,
                path=[list(map(int, cell)) for cell in result.path],
                runs=[
                    {"direction": direction.name.lower(), "steps": steps}
                    for direction, steps in path_runs(result.path)
                ],
            )
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        return path

    def _ensure_directories(self) -> None:
        self.experiment_dir.mkdir(parents=True, exist_ok=True)
        for directory in (self.metrics_dir, self.images_dir, self.solutions_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def _append_manifest(
        self,
        *,
        run_id: str,
        config_snapshot: Mapping[str, Any],
        timestamp: str,
        metrics: Mapping[str, Any],
        metrics_path: Path,
        solution_path: Path,
        image_path: Optional[Path],
    ) -> None:
        config_json = json.dumps(config_snapshot, ensure_ascii=False)
        fieldnames = self._manifest_fieldnames or self._build_manifest_fieldnames(metrics)
        self._ensure_manifest_header(fieldnames)
        row: Dict[str, Any] = {
            "experiment_name": self.name,
            "config_name": config_snapshot["name"],
            "run_id": run_id,
            "timestamp": timestamp,
            "algorithm": config_snapshot["algorithm"],
            "metrics_path": str(metrics_path),
            "solution_path": str(solution_path),
            "image_path": str(image_path) if image_path else "",
            "config_json": config_json,
        }
        row.update(metrics)
        with self.manifest_path.open("a", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames, extrasaction="ignore")
            writer.writerow(row)

    def _write_experiment_definition(self) -> None:
        self.definition_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "name": self.name,
            "output_dir": str(self.output_root),
            "grid_file": self.grid_path.name,
            "start": list(self.start),
            "goal": list(self.goal),
            "configs": [
                {
                    "name": cfg.name,
                    "algorithm": cfg.algorithm,
                    "solver_kwargs": cfg.solver_kwargs,
                    "metadata": cfg.metadata,
                }
                for cfg in self._configurations.values()
            ],
        }
        with self.definition_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)

    def _build_manifest_fieldnames(self, metrics: Mapping[str, Any]) -> List[str]:
        base = [
            "experiment_name",
            "config_name",
            "run_id",
            "timestamp",
            "algorithm",
            "metrics_path",
            "solution_path",
            "image_path",
            "config_json",
        ]
        fieldnames = base + sorted(metrics.keys())
        self._manifest_fieldnames = fieldnames
        return fieldnames

    def _ensure_manifest_header(self, fieldnames: List[str]) -> None:
        if not self.manifest_path.exists():
            self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
            with self.manifest_path.open("w", newline="", encoding="utf-8") as fh:
                writer = csv.DictWriter(fh, fieldnames=fieldnames)
                writer.writeheader()

    @staticmethod
    def _config_snapshot(config: SolverConfiguration) -> Dict[str, Any]:
        return {
            "name": config.name,
            "algorithm": config.algorithm,
            "solver_kwargs": dict(config.solver_kwargs),
            "metadata": dict(config.metadata),
        }

    def _write_grid_description(self) -> None:
        payload = {
            "experiment": self.name,
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "costs": [list(row) for row in self.grid.costs],
            "created_at": self._timestamp(),
        }
        with self.grid_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)

    @classmethod
    def load_from_directory(cls, directory: Path | str) -> "Experiment":
        directory_path = Path(directory).expanduser()
        definition_file = directory_path / "experiment.json"
        if not definition_file.exists():
            raise FileNotFoundError(f"Experiment definition not found at {definition_file}")

        with definition_file.open("r", encoding="utf-8") as fh:
            definition = json.load(fh)

        name = definition.get("name") or directory_path.name
        grid_path = directory_path / definition.get("grid_file", "grid.json")
        if not grid_path.exists():
            raise FileNotFoundError(f"Grid description not found at {grid_path}")

        with grid_path.open("r", encoding="utf-8") as fh:
            grid_data = json.load(fh)

        experiment = cls(
            name=name,
            grid=Grid.from_rows(grid_data["costs"]),
            output_dir=directory_path.parent,
            start=definition.get("start"),
            goal=definition.get("goal"),
        )

        # Replace configurations using saved definitions
        experiment._configurations.clear()
        for cfg_data in definition.get("configs", []):
            config = SolverConfiguration(
                name=cfg_data["name"],
                algorithm=cfg_data["algorithm"],
                solver_kwargs=dict(cfg_data.get("solver_kwargs", {})),
                metadata=dict(cfg_data.get("metadata", {})),
            )
            experiment._configurations[config.name] = config

        experiment._write_experiment_definition()
        return experiment

    @staticmethod
    def _generate_run_id() -> str:
        return uuid4().hex[:12]

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(UTC).strftime("%Y%m%d_%H%M%S")

    @staticmethod
    def generate_random_grid(
        rows: int,
        cols: int,
        *,
        low: int = 1,
        high: int = 9,
        seed: int | None = None,
    ) -> Grid:
        """Build a grid of uniformly random costs in ``[low, high]``."""
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive")
        if low < 0 or high < low:
            raise ValueError("costs must satisfy 0 <= low <= high")
        rng = random.Random(seed)
        return Grid.from_rows([[rng.randint(low, high) for _ in range(cols)] for _ in range(rows)])

    @staticmethod
    def load_all_metrics(root_dir: Path | str) -> pd.DataFrame:
        """Load metrics_log.csv from all experiments under a root directory."""
        root = Path(root_dir)
        frames: List[pd.DataFrame] = []
        for csv_path in root.glob("*/metrics_log.csv"):
            frames.append(pd.read_csv(csv_path))
        if not frames:
            return pd.DataFrame()
        return pd.concat(frames, ignore_index=True)
