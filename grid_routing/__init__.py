from .errors import GoalUnreachable, MalformedGrid, OutOfBounds, RoutingError
from .Objects import Axis, Coord, Direction, Edge, Grid, Path, SearchResult
from .expander import expand_run
from .MovementGraph import MovementGraph, build_movement_graph
from .ConstrainedSolver import minimum_cost, solve, solve_from_axis, solve_graph
from .utilities import is_legal_path, load_grid, parse_grid, path_runs, path_to_str
