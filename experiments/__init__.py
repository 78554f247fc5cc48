"""Convenience exports for the experiments package."""

from .experiment import Experiment, RunResult, SolverConfiguration

__all__ = ["Experiment", "RunResult", "SolverConfiguration"]
