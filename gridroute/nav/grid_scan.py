"""Single pass over the routing grid: rasterize obstacles and locate endpoint nodes.

Every node is classified once. While walking the grid, the free node closest to
each endpoint is tracked, so no second pass is needed to snap the endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from loguru import logger

from gridroute.common.errors import NoFreeNodeError
from gridroute.common.geometry import measure

if TYPE_CHECKING:
    from gridroute.common.types import GridNode, Point
    from gridroute.nav.obstacles import ObstacleSet
    from gridroute.nav.route_grid import RouteGrid


@dataclass(frozen=True, slots=True)
class GridScan:
    """Result of scanning a grid.

    Attributes:
        occupancy: Read-only boolean matrix ``[row, col]``, True where blocked.
        start_node: Free node nearest to the start point.
        end_node: Free node nearest to the end point.
    """

    occupancy: np.ndarray
    start_node: GridNode
    end_node: GridNode

    @property
    def blocked_count(self) -> int:
        """Number of blocked nodes."""
        return int(np.count_nonzero(self.occupancy))


def scan_grid(
    grid: RouteGrid,
    obstacles: ObstacleSet,
    start: Point,
    end: Point,
    metric: str = "great_circle",
    trace: bool = False,
) -> GridScan:
    """Rasterize obstacles onto ``grid`` and snap both endpoints to free nodes.

    Nodes are visited rows north to south, columns west to east. Ties in endpoint
    distance keep the node visited first.

    Args:
        grid: Grid geometry.
        obstacles: Obstacle rings; a node is blocked when inside any of them.
        start: Start point of the query.
        end: End point of the query.
        metric: Distance metric for endpoint snapping.
        trace: Emit a TRACE log line per blocked node.

    Returns:
        GridScan: Occupancy and the two endpoint nodes.

    Raises:
        NoFreeNodeError: If every node is blocked.
    """
    occupancy = np.zeros(grid.shape, dtype=bool)
    start_node: GridNode | None = None
    end_node: GridNode | None = None
    min_dist_start = math.inf
    min_dist_end = math.inf

    for node, point in grid.iter_nodes():
        if obstacles.is_blocked(point):
            occupancy[node] = True
            if trace:
                logger.trace("Node {node} at {point} blocked", node=node, point=point)
            continue

        dist_start = measure(point, start, grid.units, metric)
        if dist_start < min_dist_start:
            min_dist_start = dist_start
            start_node = node
        dist_end = measure(point, end, grid.units, metric)
        if dist_end < min_dist_end:
            min_dist_end = dist_end
            end_node = node

    occupancy.flags.writeable = False

    if start_node is None or end_node is None:
        raise NoFreeNodeError(grid.rows, grid.cols)

    logger.debug(
        "Scanned {total} nodes against {n} obstacles: {blocked} blocked, "
        "start node {start_node}, end node {end_node}",
        total=grid.rows * grid.cols,
        n=len(obstacles),
        blocked=int(np.count_nonzero(occupancy)),
        start_node=start_node,
        end_node=end_node,
    )
    return GridScan(occupancy=occupancy, start_node=start_node, end_node=end_node)
