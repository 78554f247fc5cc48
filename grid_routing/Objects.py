from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import MalformedGrid, OutOfBounds

Coord = Tuple[int, int]
Path = List[Coord]


def _as_coord(value: Sequence[int]) -> Coord:
    """Best-effort conversion of a coordinate-like sequence to Coord."""
    if len(value) != 2:
        raise ValueError(f"Expected 2 components, got {len(value)}: {value}")
    r, c = map(int, value)
    return (r, c)


def _as_cost(value) -> int:
    """Accept whole-number costs only; bools and fractions are rejected."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise MalformedGrid(f"Cell cost must be an integer, got {value!r}")
    return int(value)


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def complement(self) -> "Axis":
        if self is Axis.HORIZONTAL:
            return Axis.VERTICAL
        return Axis.HORIZONTAL


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Coord:
        return self.value

    @property
    def axis(self) -> Axis:
        return Axis.VERTICAL if self.value[1] == 0 else Axis.HORIZONTAL

    def opposite(self) -> "Direction":
        dr, dc = self.value
        return Direction((-dr, -dc))

    @classmethod
    def along(cls, axis: Axis) -> Tuple["Direction", "Direction"]:
        if axis is Axis.HORIZONTAL:
            return (cls.LEFT, cls.RIGHT)
        return (cls.UP, cls.DOWN)

    def step(self, coord: Sequence[int], steps: int = 1) -> Coord:
        r, c = _as_coord(coord)
        dr, dc = self.value
        return (r + dr * steps, c + dc * steps)


@dataclass(frozen=True)
class Grid:
    costs: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        try:
            rows = tuple(tuple(_as_cost(v) for v in row) for row in self.costs)
        except TypeError as exc:
            raise MalformedGrid(f"Grid rows must be sequences of costs: {exc}") from None
        if not rows or not rows[0]:
            raise MalformedGrid("Grid must have at least one row and one column")
        width = len(rows[0])
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise MalformedGrid(
                    f"Row {idx} has {len(row)} cells, expected {width}"
                )
            if any(v < 0 for v in row):
                raise MalformedGrid(f"Row {idx} contains a negative cost: {row}")
        object.__setattr__(self, "costs", rows)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        return cls(tuple(rows))

    @property
    def rows(self) -> int:
        return len(self.costs)

    @property
    def cols(self) -> int:
        return len(self.costs[0])

    @property
    def start(self) -> Coord:
        return (0, 0)

    @property
    def goal(self) -> Coord:
        return (self.rows - 1, self.cols - 1)

    def dimensions(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def in_bounds(self, p: Sequence[int]) -> bool:
        r, c = _as_coord(p)
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cost_at(self, p: Sequence[int]) -> int:
        if not self.in_bounds(p):
            raise OutOfBounds(tuple(p), self.dimensions())
        r, c = _as_coord(p)
        return self.costs[r][c]

    def coords(self) -> Iterator[Coord]:
        """Iterate over every cell in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def with_cost(self, p: Sequence[int], cost: int) -> "Grid":
        """Return a copy of the grid with a single cell's cost replaced."""
        if not self.in_bounds(p):
            raise OutOfBounds(tuple(p), self.dimensions())
        r, c = _as_coord(p)
        rows = [list(row) for row in self.costs]
        rows[r][c] = cost
        return Grid.from_rows(rows)


@dataclass(frozen=True)
class Edge:
    """One complete straight run, from ``source`` to ``target``."""

    source: Coord
    target: Coord
    direction: Direction
    steps: int
    weight: int

    @property
    def axis(self) -> Axis:
        return self.direction.axis


@dataclass
class SearchResult:
    cost: int
    path: Path = field(default_factory=list)
    start_axis: Optional[Axis] = None
    settled: int = 0
    algorithm: str = "movement_graph"

    @property
    def start(self) -> Optional[Coord]:
        return self.path[0] if self.path else None

    @property
    def goal(self) -> Optional[Coord]:
        return self.path[-1] if self.path else None
