"""Routing grid geometry derived from a bounding box and a resolution.

The grid is a lattice of nodes laid over the (already expanded) bounding box.
Cell sizes are chosen so that adjacent nodes are roughly ``resolution`` apart in
real-world distance, even when coordinate axes scale differently (longitude vs.
latitude). The lattice spans ``floor(extent / cell)`` whole cells per axis, so it
has one more node than cells in each direction. Leftover extent after flooring is
split evenly on both sides: the first and last nodes sit ``margin`` inside the
box edges.

Node geometry is never stored; it is recovered from the index:

    x = origin_x + col * cell_width
    y = origin_y - row * cell_height

with row 0 the northernmost row and col 0 the westernmost column.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING

from loguru import logger

from gridroute.common.errors import InvalidArgumentError
from gridroute.common.geometry import measure, validate_metric
from gridroute.common.units import DEFAULT_UNITS, validate_units

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gridroute.common.types import BBox, GridNode, Point

# Number of columns across the box's southern edge when no resolution is given.
DEFAULT_COLUMNS = 100


@dataclass(frozen=True, slots=True)
class RouteGrid:
    """Geometry of the routing lattice.

    Attributes:
        origin: Coordinates of node ``(0, 0)``, the west/north corner after centering.
        cell_width: Horizontal spacing between nodes in coordinate units.
        cell_height: Vertical spacing between nodes in coordinate units.
        rows: Number of node rows, one more than the whole cells spanned vertically.
        cols: Number of node columns, one more than the whole cells spanned horizontally.
        margin_x: Unused horizontal extent left on each side of the box.
        margin_y: Unused vertical extent left on each side of the box.
        resolution: Target node spacing in ``units``.
        units: Distance unit of ``resolution``.
        bbox: The expanded box the grid was fitted to.
    """

    origin: Point
    cell_width: float
    cell_height: float
    rows: int
    cols: int
    margin_x: float
    margin_y: float
    resolution: float
    units: str
    bbox: BBox

    @property
    def shape(self) -> tuple[int, int]:
        """Occupancy shape ``(rows, cols)``."""
        return self.rows, self.cols

    def node_to_point(self, node: GridNode) -> Point:
        """Coordinates of a grid node.

        Raises:
            IndexError: If the node lies outside the grid.
        """
        row, col = node
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"node {node} outside grid of shape {self.shape}")
        return self.origin[0] + col * self.cell_width, self.origin[1] - row * self.cell_height

    def iter_nodes(self) -> Iterator[tuple[GridNode, Point]]:
        """Yield ``(node, point)`` in scan order: rows north to south, columns west to east."""
        x0, y0 = self.origin
        for row in range(self.rows):
            y = y0 - row * self.cell_height
            for col in range(self.cols):
                yield (row, col), (x0 + col * self.cell_width, y)


def validate_resolution(resolution: object) -> float | None:
    """Check an optional resolution value.

    Returns:
        float | None: The resolution as float, or None when absent.

    Raises:
        InvalidArgumentError: If the value is non-numeric, non-finite or not positive.
    """
    if resolution is None:
        return None
    if isinstance(resolution, bool) or not isinstance(resolution, Real):
        raise InvalidArgumentError("resolution must be a number, greater than 0")
    value = float(resolution)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError("resolution must be a number, greater than 0")
    return value


def default_resolution(
    bbox: BBox,
    units: str = DEFAULT_UNITS,
    metric: str = "great_circle",
) -> float:
    """Resolution yielding about :data:`DEFAULT_COLUMNS` columns along the southern edge.

    Returns:
        float: Node spacing in ``units``.
    """
    west, south, east, _north = bbox
    return measure((west, south), (east, south), units, metric) / DEFAULT_COLUMNS


def build_route_grid(
    bbox: BBox,
    units: str = DEFAULT_UNITS,
    resolution: float | None = None,
    metric: str = "great_circle",
) -> RouteGrid:
    """Fit a centered node lattice into an expanded bounding box.

    Args:
        bbox: ``(west, south, east, north)``; callers expand it beforehand.
        units: Distance unit of ``resolution``.
        resolution: Target node spacing; derived from the box when None.
        metric: ``"great_circle"`` or ``"planar"`` distance along the box edges.

    Returns:
        RouteGrid: The grid geometry.

    Raises:
        InvalidArgumentError: On invalid resolution/units/metric, a degenerate box, or a
            resolution too coarse to fit a single cell in either direction.
    """
    validate_units(units)
    validate_metric(metric)
    resolution = validate_resolution(resolution)

    west, south, east, north = bbox
    box_width = east - west
    box_height = north - south
    if not (box_width > 0 and box_height > 0):
        raise InvalidArgumentError(
            f"bounding box must have positive width and height, got {bbox}"
        )

    if resolution is None:
        resolution = default_resolution(bbox, units, metric)

    edge_width = measure((west, south), (east, south), units, metric)
    edge_height = measure((west, south), (west, north), units, metric)
    if edge_width <= 0 or edge_height <= 0:
        raise InvalidArgumentError(f"bounding box edges have zero length in {units}: {bbox}")

    cell_width = resolution / edge_width * box_width
    cell_height = resolution / edge_height * box_height

    cells_x = math.floor(box_width / cell_width)
    cells_y = math.floor(box_height / cell_height)
    if cells_x < 1 or cells_y < 1:
        raise InvalidArgumentError(
            f"resolution {resolution} {units} is coarser than the routing area "
            f"({edge_width:.6g} x {edge_height:.6g} {units})"
        )

    margin_x = (box_width - cells_x * cell_width) / 2
    margin_y = (box_height - cells_y * cell_height) / 2
    rows = cells_y + 1
    cols = cells_x + 1

    grid = RouteGrid(
        origin=(west + margin_x, north - margin_y),
        cell_width=cell_width,
        cell_height=cell_height,
        rows=rows,
        cols=cols,
        margin_x=margin_x,
        margin_y=margin_y,
        resolution=resolution,
        units=units,
        bbox=(west, south, east, north),
    )
    logger.debug(
        "Built {rows}x{cols} route grid: cell=({cw:.6g}, {ch:.6g}) resolution={res:.6g} {units}",
        rows=rows,
        cols=cols,
        cw=cell_width,
        ch=cell_height,
        res=resolution,
        units=units,
    )
    return grid
