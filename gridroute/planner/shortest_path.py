"""Obstacle-avoiding shortest path between two points.

The query runs as a pure function:

1. Validate endpoints, obstacles and options.
2. Short-circuit to the direct line when there are no obstacles.
3. Fit a routing grid into the bounding box of obstacles and endpoints,
   expanded by ``bbox_scale``.
4. Rasterize obstacles and snap the endpoints to their nearest free nodes in
   one pass over the grid.
5. Search the occupancy grid with a :class:`PathFinder`.
6. Map the node path back to coordinates, keeping the exact endpoints.

Example:
    >>> from shapely.geometry import Point, Polygon
    >>> from gridroute import shortest_path
    >>> obstacle = Polygon([(0, -7), (5, -7), (5, -3), (0, -3), (0, -7)])
    >>> result = shortest_path(Point(-5, -6), Point(9, -6), [obstacle])
    >>> result.coordinates[0], result.coordinates[-1]
    ((-5.0, -6.0), (9.0, -6.0))
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from loguru import logger
from shapely.geometry import LineString

from gridroute.common.errors import (
    InvalidArgumentError,
    NoFreeNodeError,
    NoRouteFoundError,
    raise_fatal_with_remedy,
    warn_soft_degrade,
)
from gridroute.common.geometry import measure, validate_metric
from gridroute.common.units import DEFAULT_UNITS, validate_units
from gridroute.nav.bbox import compute_bbox, scale_bbox
from gridroute.nav.geojson_io import coerce_obstacles, coerce_point, path_to_feature
from gridroute.nav.grid_scan import scan_grid
from gridroute.nav.route_grid import build_route_grid, validate_resolution
from gridroute.planner.path_finder import GridAStar, PathFinder
from gridroute.planner.path_reconstruction import reconstruct_path

if TYPE_CHECKING:
    from gridroute.common.types import GridNode, Point
    from gridroute.nav.route_grid import RouteGrid

DEFAULT_BBOX_SCALE = 1.15


@dataclass
class ShortestPathConfig:
    """Options of a shortest path query.

    Attributes:
        units: Distance unit of ``resolution`` (default "kilometers").
        resolution: Target node spacing in ``units``; derived from the routing area when None.
        metric: "great_circle" for longitude/latitude input, "planar" for projected input.
        bbox_scale: Expansion factor of the routing area around obstacles and endpoints.
        allow_corner_cutting: Let diagonal steps pass between two blocked neighbours.
        fallback_on_failure: Return the direct line (status NO_ROUTE_FOUND) when the
            endpoints cannot be connected; raise NoRouteFoundError otherwise.
        trace_rasterization: Log every blocked node at TRACE level.
    """

    units: str = DEFAULT_UNITS
    resolution: float | None = None
    metric: str = "great_circle"
    bbox_scale: float = DEFAULT_BBOX_SCALE
    allow_corner_cutting: bool = True
    fallback_on_failure: bool = True
    trace_rasterization: bool = False

    def __post_init__(self) -> None:
        """Validate configuration constraints.

        Raises:
            InvalidArgumentError: If any field is invalid.
        """
        validate_units(self.units)
        validate_metric(self.metric)
        self.resolution = validate_resolution(self.resolution)
        if (
            isinstance(self.bbox_scale, bool)
            or not isinstance(self.bbox_scale, (int, float))
            or not math.isfinite(self.bbox_scale)
            or self.bbox_scale <= 0
        ):
            raise InvalidArgumentError(f"bbox_scale must be a number > 0, got {self.bbox_scale!r}")
        for name in ("allow_corner_cutting", "fallback_on_failure", "trace_rasterization"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidArgumentError(f"{name} must be a bool")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> ShortestPathConfig:
        """Build a config from a plain options mapping.

        ``None`` values fall back to defaults; unknown keys are ignored with a warning.

        Returns:
            ShortestPathConfig: Validated configuration.
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise InvalidArgumentError(f"options must be a mapping, got {type(options).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            logger.warning("Ignoring unknown route options: {keys}", keys=unknown)
        kwargs = {k: v for k, v in options.items() if k in known and v is not None}
        return cls(**kwargs)


def load_route_config(path: str | Path) -> ShortestPathConfig:
    """Load query options from a YAML mapping.

    Returns:
        ShortestPathConfig: Validated configuration.

    Raises:
        InvalidArgumentError: If the document is not a mapping.
    """
    path = Path(path)
    payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(payload, dict):
        raise InvalidArgumentError(f"Route config must be a mapping: {path}")
    return ShortestPathConfig.from_mapping(payload)


class RouteStatus(Enum):
    """Outcome of a shortest path query."""

    FOUND = "found"  # obstacle-avoiding route from the grid search
    DIRECT = "direct"  # no obstacles, straight line
    NO_ROUTE_FOUND = "no_route_found"  # search failed, degraded straight line


@dataclass
class RouteResult:
    """Path returned by :func:`shortest_path`.

    Attributes:
        coordinates: Path vertices; the first and last are the query endpoints.
        status: How the path was obtained.
        grid: Routing grid, None for direct results.
        start_node: Grid node the start was snapped to.
        end_node: Grid node the end was snapped to.
        node_path: Raw path finder result.
        occupancy: Rasterized obstacles, None for direct results.
        units: Distance unit of the query.
        metric: Distance metric of the query.
    """

    coordinates: list[Point]
    status: RouteStatus
    grid: RouteGrid | None = None
    start_node: GridNode | None = None
    end_node: GridNode | None = None
    node_path: list[GridNode] = field(default_factory=list)
    occupancy: Any = None
    units: str = DEFAULT_UNITS
    metric: str = "great_circle"

    @property
    def found(self) -> bool:
        """True when the path comes from a successful search or needed none."""
        return self.status is not RouteStatus.NO_ROUTE_FOUND

    def length(self, units: str | None = None) -> float:
        """Sum of segment lengths.

        Returns:
            float: Path length in ``units`` (defaults to the query units).
        """
        units = units or self.units
        return sum(
            measure(a, b, units, self.metric)
            for a, b in zip(self.coordinates, self.coordinates[1:], strict=False)
        )

    def to_linestring(self) -> LineString:
        """Path as a shapely LineString."""
        return LineString(self.coordinates)

    def to_feature(self) -> dict:
        """Path as a GeoJSON ``Feature<LineString>`` with the status in its properties."""
        return path_to_feature(self.coordinates, {"status": self.status.value})


def _resolve_config(options: ShortestPathConfig | Mapping[str, Any] | None) -> ShortestPathConfig:
    if isinstance(options, ShortestPathConfig):
        return options
    return ShortestPathConfig.from_mapping(options)


def shortest_path(
    start: Any,
    end: Any,
    obstacles: Any = None,
    options: ShortestPathConfig | Mapping[str, Any] | None = None,
    *,
    path_finder: PathFinder | None = None,
) -> RouteResult:
    """Shortest path from ``start`` to ``end`` that avoids polygon obstacles.

    Args:
        start: shapely Point or GeoJSON Point/Feature<Point>.
        end: shapely Point or GeoJSON Point/Feature<Point>.
        obstacles: GeoJSON FeatureCollection of Polygons, a sequence of shapely
            Polygons, or None.
        options: ShortestPathConfig or mapping with ``units``, ``resolution`` and the
            other config fields.
        path_finder: Search capability; defaults to :class:`GridAStar`.

    Returns:
        RouteResult: Path and query metadata.

    Raises:
        InvalidArgumentError: On malformed endpoints, obstacles or options.
        NoFreeNodeError: If obstacles cover every grid node.
        NoRouteFoundError: If the endpoints cannot be connected and
            ``fallback_on_failure`` is False.
    """
    start_pt = coerce_point(start, "start")
    end_pt = coerce_point(end, "end")
    obstacle_set = coerce_obstacles(obstacles)
    config = _resolve_config(options)
    if path_finder is not None and not isinstance(path_finder, PathFinder):
        raise InvalidArgumentError("path_finder must provide find_path(occupancy, start, goal)")

    if not len(obstacle_set):
        logger.warning("No obstacles given; returning direct path.")
        return RouteResult(
            coordinates=[start_pt, end_pt],
            status=RouteStatus.DIRECT,
            units=config.units,
            metric=config.metric,
        )

    # combined extent of obstacles and endpoints, built locally
    extent = [*obstacle_set.coordinates(), start_pt, end_pt]
    bbox = scale_bbox(compute_bbox(extent), config.bbox_scale)
    grid = build_route_grid(bbox, config.units, config.resolution, config.metric)

    logger.debug(
        "Routing {start} -> {end} over {rows}x{cols} grid, {n} obstacles ({edges} edges)",
        start=start_pt,
        end=end_pt,
        rows=grid.rows,
        cols=grid.cols,
        n=len(obstacle_set),
        edges=obstacle_set.edge_count,
    )

    try:
        scan = scan_grid(
            grid,
            obstacle_set,
            start_pt,
            end_pt,
            metric=config.metric,
            trace=config.trace_rasterization,
        )
    except NoFreeNodeError as exc:
        logger.error("Every grid node is blocked; no path exists at this resolution.")
        raise_fatal_with_remedy(
            exc,
            "Lower the resolution value or check that the obstacles do not cover the "
            "whole routing area.",
        )

    if scan.start_node == scan.end_node:
        logger.info(
            "Start and end snap to the same node {node}; returning direct path.",
            node=scan.start_node,
        )
        return RouteResult(
            coordinates=[start_pt, end_pt],
            status=RouteStatus.FOUND,
            grid=grid,
            start_node=scan.start_node,
            end_node=scan.end_node,
            node_path=[scan.start_node],
            occupancy=scan.occupancy,
            units=config.units,
            metric=config.metric,
        )

    finder = path_finder or GridAStar(allow_corner_cutting=config.allow_corner_cutting)
    nodes = list(finder.find_path(scan.occupancy, scan.start_node, scan.end_node))

    result = RouteResult(
        coordinates=[start_pt, end_pt],
        status=RouteStatus.NO_ROUTE_FOUND,
        grid=grid,
        start_node=scan.start_node,
        end_node=scan.end_node,
        node_path=nodes,
        occupancy=scan.occupancy,
        units=config.units,
        metric=config.metric,
    )

    if not nodes:
        if not config.fallback_on_failure:
            raise NoRouteFoundError(
                start_pt,
                end_pt,
                f"nodes {scan.start_node} and {scan.end_node} are not connected",
            )
        warn_soft_degrade(
            "path_finder",
            f"no route between nodes {scan.start_node} and {scan.end_node}",
            "direct start-end line that may cross obstacles",
        )
        return result

    result.coordinates = reconstruct_path(start_pt, end_pt, nodes, grid)
    result.status = RouteStatus.FOUND
    logger.info(
        "Found route with {n} vertices from {start} to {end}",
        n=len(result.coordinates),
        start=start_pt,
        end=end_pt,
    )
    return result
