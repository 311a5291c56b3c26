"""Discrete search over the occupancy grid.

The routing pipeline only depends on the :class:`PathFinder` protocol. The
default implementation, :class:`GridAStar`, hands the occupancy matrix to
python_motion_planning's A* on an 8-connected ``Grid``: orthogonal steps cost 1,
diagonal steps cost sqrt(2).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MethodType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from loguru import logger
from python_motion_planning.common import TYPES, Grid
from python_motion_planning.path_planner import AStar

if TYPE_CHECKING:
    from gridroute.common.types import GridNode


@runtime_checkable
class PathFinder(Protocol):
    """Capability: minimal-cost path between two free nodes of an occupancy grid."""

    def find_path(
        self,
        occupancy: np.ndarray,
        start: GridNode,
        goal: GridNode,
    ) -> list[GridNode]:
        """Return nodes from ``start`` to ``goal`` inclusive, or ``[]`` when unreachable."""
        ...


def occupancy_to_planning_grid(
    occupancy: np.ndarray,
    start: GridNode,
    goal: GridNode,
) -> Grid:
    """Copy an occupancy matrix into a python_motion_planning ``Grid``.

    The ``Grid`` is indexed ``[row, col]`` like the occupancy matrix; blocked
    nodes become ``TYPES.OBSTACLE`` and the endpoints are marked as start/goal.

    Returns:
        Grid: Planning grid of the same shape.
    """
    rows, cols = occupancy.shape
    grid = Grid(bounds=[[0, rows], [0, cols]])
    type_map = grid.type_map
    for row, col in np.argwhere(occupancy):
        type_map[int(row)][int(col)] = TYPES.OBSTACLE
    type_map[start[0]][start[1]] = TYPES.START
    type_map[goal[0]][goal[1]] = TYPES.GOAL
    return grid


def _bind_no_corner_cutting(grid: Grid, occupancy: np.ndarray) -> None:
    """Drop diagonal neighbours whose orthogonal neighbours are not both free."""
    upstream = grid.get_neighbors

    def get_neighbors(self, node, *args, **kwargs):
        row, col = node.current
        kept = []
        for neighbour in upstream(node, *args, **kwargs):
            n_row, n_col = neighbour.current
            if n_row != row and n_col != col and (
                occupancy[n_row, col] or occupancy[row, n_col]
            ):
                continue
            kept.append(neighbour)
        return kept

    grid.get_neighbors = MethodType(get_neighbors, grid)  # type: ignore[method-assign]


@dataclass(slots=True)
class GridAStar:
    """A* over an 8-connected occupancy grid, backed by python_motion_planning.

    Attributes:
        allow_corner_cutting: Allow a diagonal step between two blocked orthogonal
            neighbours. When False, a diagonal step needs both orthogonal
            neighbours free.
    """

    allow_corner_cutting: bool = True

    def find_path(
        self,
        occupancy: np.ndarray,
        start: GridNode,
        goal: GridNode,
    ) -> list[GridNode]:
        """A* search from ``start`` to ``goal``.

        Args:
            occupancy: Boolean matrix ``[row, col]``, True where blocked.
            start: Start node (must be free).
            goal: Goal node (must be free).

        Returns:
            list[GridNode]: Ordered nodes including both ends, or ``[]`` if unreachable.

        Raises:
            ValueError: If start or goal is out of bounds or blocked.
        """
        rows, cols = occupancy.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        for name, node in (("start", start), ("goal", goal)):
            if not (0 <= node[0] < rows and 0 <= node[1] < cols):
                raise ValueError(f"{name} node {node} out of bounds for grid {occupancy.shape}")
            if occupancy[node]:
                raise ValueError(f"{name} node {node} is blocked")
        if start == goal:
            return [start]

        grid = occupancy_to_planning_grid(occupancy, start, goal)
        if not self.allow_corner_cutting:
            _bind_no_corner_cutting(grid, occupancy)

        plan_result = AStar(map_=grid, start=start, goal=goal).plan()
        path_grid, path_info = (
            plan_result if isinstance(plan_result, tuple) else (plan_result, None)
        )
        if not path_grid:
            logger.warning("A* found no path from {start} to {goal}", start=start, goal=goal)
            return []

        path = [(int(row), int(col)) for row, col in path_grid]
        if path[0] != start:
            path.reverse()
        logger.debug(
            "A* found path: {n} nodes, cost={cost}",
            n=len(path),
            cost=(path_info or {}).get("cost"),
        )
        return path
