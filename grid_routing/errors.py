from typing import Optional, Tuple


class RoutingError(Exception):
    """Base class for errors raised by grid_routing."""


class MalformedGrid(RoutingError, ValueError):
    """Grid input is empty, ragged, or contains invalid costs."""


class OutOfBounds(RoutingError, IndexError):
    def __init__(self, coord, dimensions: Tuple[int, int]):
        self.coord = coord
        self.dimensions = dimensions
        super().__init__(f"Coordinate {coord} lies outside a {dimensions[0]}x{dimensions[1]} grid")


class GoalUnreachable(RoutingError):
    """Search finished without reaching the goal cell."""

    def __init__(self, start, goal, axis: Optional[object] = None):
        self.start = start
        self.goal = goal
        self.axis = axis
        seed = f" starting on the {axis.name.lower()} axis" if axis is not None else ""
        super().__init__(f"Goal {goal} is unreachable from {start}{seed}")
