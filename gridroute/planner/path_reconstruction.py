"""Map a grid node path back to coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gridroute.planner.path_cleaner import clean_coords

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gridroute.common.types import GridNode, Point
    from gridroute.nav.route_grid import RouteGrid


def reconstruct_path(
    start: Point,
    end: Point,
    nodes: Sequence[GridNode],
    grid: RouteGrid,
) -> list[Point]:
    """Build the continuous path for a node sequence.

    The caller's start and end are placed verbatim at both ends; interior points
    are node coordinates from the grid formula. An empty node sequence yields the
    direct ``[start, end]`` line.

    Args:
        start: Exact start point of the query.
        end: Exact end point of the query.
        nodes: Path finder result.
        grid: Grid the nodes index into.

    Returns:
        list[Point]: Cleaned path.
    """
    if not nodes:
        return [start, end]
    path = [start, *(grid.node_to_point(node) for node in nodes), end]
    return clean_coords(path)
