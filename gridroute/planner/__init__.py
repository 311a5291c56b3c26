"""Grid-based shortest path planning around polygon obstacles.

- ``shortest_path``: full query pipeline (validation, grid, scan, search, reconstruction)
- ``GridAStar``: default 8-connected A* path finder
- ``clean_coords``: removal of duplicate and collinear path vertices
"""

from gridroute.planner.path_cleaner import clean_coords
from gridroute.planner.path_finder import GridAStar, PathFinder
from gridroute.planner.path_reconstruction import reconstruct_path
from gridroute.planner.shortest_path import (
    RouteResult,
    RouteStatus,
    ShortestPathConfig,
    load_route_config,
    shortest_path,
)

__all__ = [
    "GridAStar",
    "PathFinder",
    "RouteResult",
    "RouteStatus",
    "ShortestPathConfig",
    "clean_coords",
    "load_route_config",
    "reconstruct_path",
    "shortest_path",
]
