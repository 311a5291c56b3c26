"""Visualization utilities for shortest path results."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger
from shapely.geometry import LineString, Point, Polygon
from shapely.plotting import plot_polygon

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from gridroute.nav.obstacles import ObstacleSet
    from gridroute.planner.shortest_path import RouteResult


def plot_route(
    result: RouteResult,
    obstacles: ObstacleSet | None = None,
    *,
    title: str | None = None,
    save_path: str | Path | None = None,
    ax: Axes | None = None,
    show: bool = True,
    show_blocked_nodes: bool = True,
) -> plt.Figure:
    """Plot obstacles, rasterized blocked nodes and the route.

    Args:
        result: Query result to draw.
        obstacles: Obstacle rings of the query.
        title: Optional plot title.
        save_path: When set, write the figure to this location (directories are created).
        ax: Optional Matplotlib axes to draw on; a new figure is created otherwise.
        show: When True, call ``plt.show()`` after rendering.
        show_blocked_nodes: Scatter the blocked grid nodes when a grid was built.

    Returns:
        Matplotlib Figure containing the rendered plot.
    """
    if ax is None:
        figure, axes = plt.subplots(figsize=(10, 6))
    else:
        figure, axes = ax.figure, ax

    axes.set_aspect("equal", adjustable="datalim")
    axes.set_xlabel("x")
    axes.set_ylabel("y")
    axes.set_title(title or f"Shortest path ({result.status.value})")

    if obstacles is not None:
        _plot_obstacles(obstacles, axes)
    if show_blocked_nodes and result.grid is not None and result.occupancy is not None:
        _plot_blocked_nodes(result, axes)
    _plot_path(result.coordinates, axes)

    axes.legend(loc="upper right", frameon=True)
    axes.grid(True, linestyle="--", alpha=0.3)
    figure.tight_layout()

    if save_path:
        _save_figure(figure, save_path)
    if show:
        plt.show()
    return figure


def _plot_obstacles(obstacles: ObstacleSet, ax: Axes) -> None:
    """Render obstacle rings using Shapely's plotting helper."""
    for ring in obstacles:
        plot_polygon(
            Polygon(ring),
            ax=ax,
            add_points=False,
            facecolor="#cbd5e1",
            edgecolor="#475569",
            alpha=0.45,
            linewidth=1.2,
            zorder=1,
        )


def _plot_blocked_nodes(result: RouteResult, ax: Axes) -> None:
    """Scatter the grid nodes classified as blocked."""
    grid = result.grid
    rows, cols = np.nonzero(result.occupancy)
    if rows.size == 0:
        return
    xs = grid.origin[0] + cols * grid.cell_width
    ys = grid.origin[1] - rows * grid.cell_height
    ax.scatter(xs, ys, color="#64748b", s=4, marker="s", label="blocked nodes", zorder=2)
    logger.debug("Plotted {count} blocked nodes", count=int(rows.size))


def _plot_path(path: list, ax: Axes) -> None:
    """Plot the route and its start/end markers."""
    line = LineString(path)
    ax.plot(*line.xy, color="#2563eb", linewidth=2.5, label="route", zorder=3)

    start = Point(path[0])
    end = Point(path[-1])
    ax.scatter(start.x, start.y, color="#16a34a", s=70, marker="o", label="start", zorder=4)
    ax.scatter(end.x, end.y, color="#dc2626", s=70, marker="X", label="end", zorder=4)


def _save_figure(fig: plt.Figure, target: str | Path) -> None:
    """Persist the figure to disk, creating parent directories as needed."""
    target_path = Path(target)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(target_path, dpi=200, bbox_inches="tight")
    logger.info("Saved route plot to {path}", path=target_path)
