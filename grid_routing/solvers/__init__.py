from typing import Dict, Type

from .base import Solver
from .brute_force import BruteForceSolver
from .direction_state import DirectionStateSolver
from .movement_graph import MovementGraphSolver

REGISTRY: Dict[str, Type[Solver]] = {
    'movement_graph': MovementGraphSolver,
    'direction_state': DirectionStateSolver,
    'brute_force': BruteForceSolver,
}

def register(name: str, cls: Type[Solver]) -> None:
    REGISTRY[name] = cls
