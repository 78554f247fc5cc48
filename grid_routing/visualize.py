"""Single-entry visualization helper for grid routes."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

import matplotlib.pyplot as plt

from .Objects import Grid, SearchResult

PointLike = Sequence[int]
PathEntry = Tuple[List[PointLike], str]


def _rc(pt: PointLike) -> Tuple[int, int]:
    return int(pt[0]), int(pt[1])


def _prepare_paths(paths: Union[None, SearchResult, Iterable]) -> List[PathEntry]:
    if paths is None:
        return []
    if isinstance(paths, SearchResult):
        return [(list(paths.path), f"{paths.algorithm} ({paths.cost})")]

    normalized: List[PathEntry] = []
    for item in list(paths):
        if isinstance(item, SearchResult):
            normalized.append((list(item.path), f"{item.algorithm} ({item.cost})"))
        elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], str):
            path, label = item
            normalized.append((list(path), label))
        else:
            normalized.append((list(item), ''))
    return normalized


def _palette() -> List[str]:
    return [
        "#e41a1c", "#377eb8", "#4daf4a", "#984ea3", "#ff7f00",
        "#a65628", "#f781bf", "#1b9e77", "#d95f02", "#7570b3",
    ]


def visualize(grid: Grid, paths: Union[None, SearchResult, Iterable] = None,
              show: bool = True, save_path: str | None = None,
              annotate: bool = True) -> None:
    """Render the cost grid as a heatmap with routes drawn on top.

    Args:
        grid: Grid of cell costs.
        paths: a SearchResult, an iterable of SearchResults, paths, or (path, label) pairs.
        show: display via matplotlib.
        save_path: optional filepath to save PNG.
        annotate: print each cell's cost inside it.
    """
    normalized = _prepare_paths(paths)

    fig, ax = plt.subplots(figsize=(max(3, grid.cols / 2), max(3, grid.rows / 2)))
    ax.imshow(grid.costs, cmap="YlOrRd", origin="upper",
              extent=(0, grid.cols, grid.rows, 0), vmin=0)

    if annotate:
        for r, c in grid.coords():
            ax.text(c + 0.5, r + 0.5, str(grid.cost_at((r, c))),
                    color='black', fontsize=7, ha='center', va='center')

    palette = _palette()
    for idx, (path, label) in enumerate(normalized):
        coords = list(map(_rc, path))
        if not coords:
            continue
        xs = [c + 0.5 for _, c in coords]
        ys = [r + 0.5 for r, _ in coords]
        color = palette[idx % len(palette)]
        ax.plot(xs, ys, '-', color=color, linewidth=2, label=label or None)
        ax.plot(xs[0], ys[0], 'o', color=color, markersize=6)
        ax.plot(xs[-1], ys[-1], 's', color=color, markersize=6)

    ax.set_xlim(0, grid.cols)
    ax.set_ylim(grid.rows, 0)
    ax.set_xticks(range(grid.cols + 1))
    ax.set_yticks(range(grid.rows + 1))
    ax.set_aspect('equal')
    ax.grid(True, color='black', linestyle=':', linewidth=0.5)
    if any(label for _, label in normalized):
        ax.legend(loc='upper right', fontsize=7)

    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
    else:
        plt.close(fig)
