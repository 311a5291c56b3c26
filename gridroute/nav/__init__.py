"""Grid construction, obstacle rasterization and geometry input handling."""

from gridroute.nav.bbox import compute_bbox, scale_bbox
from gridroute.nav.grid_scan import GridScan, scan_grid
from gridroute.nav.obstacles import ObstacleSet
from gridroute.nav.polygon_hit_test import point_in_ring
from gridroute.nav.route_grid import RouteGrid, build_route_grid

__all__ = [
    "GridScan",
    "ObstacleSet",
    "RouteGrid",
    "build_route_grid",
    "compute_bbox",
    "point_in_ring",
    "scale_bbox",
    "scan_grid",
]
