import logging
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from .errors import OutOfBounds
from .expander import MAX_RUN, MIN_RUN, check_run_bounds, expand_run
from .Objects import Axis, Coord, Direction, Edge, Grid, _as_coord

logger = logging.getLogger(__name__)


class MovementGraph:
    """Directed graph whose edges are complete straight runs over a grid.

    Nodes are the grid coordinates, addressed through integer handles. An edge
    already represents a whole 1..max_run step run, so the run-length limit is
    implied by the edge set and only axis alternation is left to the search.
    """

    def __init__(self, grid: Grid, min_run: int = MIN_RUN, max_run: int = MAX_RUN):
        self.grid = grid
        self.min_run, self.max_run = check_run_bounds(min_run, max_run)
        self.nodes: List[Coord] = []
        self._index: Dict[Coord, int] = {}
        self._adjacency: List[List[Edge]] = []

    @classmethod
    def build(cls, grid: Grid, min_run: int = MIN_RUN, max_run: int = MAX_RUN) -> "MovementGraph":
        graph = cls(grid, min_run=min_run, max_run=max_run)
        for coord in grid.coords():
            graph._add_node(coord)
        for coord in grid.coords():
            for direction in Direction:
                for target, weight in expand_run(grid, coord, direction, graph.min_run, graph.max_run):
                    steps = abs(target[0] - coord[0]) + abs(target[1] - coord[1])
                    graph._add_edge(Edge(coord, target, direction, steps, weight))
        logger.debug(
            "Built movement graph for %sx%s grid: %s nodes, %s edges (runs %s..%s).",
            grid.rows,
            grid.cols,
            len(graph),
            graph.edge_count(),
            graph.min_run,
            graph.max_run,
        )
        return graph

    def _add_node(self, coord: Coord) -> int:
        handle = len(self.nodes)
        self.nodes.append(coord)
        self._index[coord] = handle
        self._adjacency.append([])
        return handle

    def _add_edge(self, edge: Edge) -> None:
        self._adjacency[self._index[edge.source]].append(edge)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, coord) -> bool:
        return tuple(coord) in self._index

    def node(self, coord: Sequence[int]) -> int:
        """Return the node handle for a coordinate."""
        key = _as_coord(coord)
        try:
            return self._index[key]
        except KeyError:
            raise OutOfBounds(key, self.grid.dimensions()) from None

    def coord(self, handle: int) -> Coord:
        return self.nodes[handle]

    def edges_from(self, coord: Sequence[int], axis: Optional[Axis] = None) -> List[Edge]:
        edges = self._adjacency[self.node(coord)]
        if axis is None:
            return list(edges)
        return [edge for edge in edges if edge.axis is axis]

    def edges(self) -> Iterator[Edge]:
        for adjacency in self._adjacency:
            yield from adjacency

    def edge_count(self) -> int:
        return sum(len(adjacency) for adjacency in self._adjacency)

    def edge_set(self) -> FrozenSet[Tuple[Coord, Coord, int]]:
        """Snapshot of (source, target, weight) triples for comparing builds."""
        return frozenset((e.source, e.target, e.weight) for e in self.edges())


def build_movement_graph(grid: Grid, min_run: int = MIN_RUN, max_run: int = MAX_RUN) -> MovementGraph:
    return MovementGraph.build(grid, min_run=min_run, max_run=max_run)
