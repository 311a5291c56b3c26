"""gridroute: obstacle-avoiding shortest paths over a rasterized grid."""

from gridroute.common.errors import (
    InvalidArgumentError,
    NoFreeNodeError,
    NoRouteFoundError,
    RoutingError,
)
from gridroute.planner import (
    GridAStar,
    PathFinder,
    RouteResult,
    RouteStatus,
    ShortestPathConfig,
    load_route_config,
    shortest_path,
)

__all__ = [
    "GridAStar",
    "InvalidArgumentError",
    "NoFreeNodeError",
    "NoRouteFoundError",
    "PathFinder",
    "RouteResult",
    "RouteStatus",
    "RoutingError",
    "ShortestPathConfig",
    "load_route_config",
    "shortest_path",
]
