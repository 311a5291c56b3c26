"""Distance helpers shared across the gridroute package."""

from __future__ import annotations

import math

import numba

from gridroute.common.errors import InvalidArgumentError
from gridroute.common.types import Point
from gridroute.common.units import DEFAULT_UNITS, radians_to_length

METRICS = ("great_circle", "planar")


@numba.njit(fastmath=True)
def euclid_dist(vec_1: Point, vec_2: Point) -> float:
    """
    Compute the Euclidean distance between two 2D points.

    Args:
        vec_1: First point.
        vec_2: Second point.

    Returns:
        float: Euclidean distance between ``vec_1`` and ``vec_2``.
    """
    return math.hypot(vec_1[0] - vec_2[0], vec_1[1] - vec_2[1])


@numba.njit
def _haversine_radians(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = math.sin(d_lat / 2) ** 2 + (
        math.sin(d_lon / 2) ** 2 * math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
    )
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def great_circle_distance(origin: Point, destination: Point, units: str = DEFAULT_UNITS) -> float:
    """Haversine distance between two ``(longitude, latitude)`` points.

    Args:
        origin: First point in degrees.
        destination: Second point in degrees.
        units: Length unit of the result.

    Returns:
        float: Great-circle distance in ``units``.
    """
    rad = _haversine_radians(
        float(origin[0]), float(origin[1]), float(destination[0]), float(destination[1])
    )
    return radians_to_length(rad, units)


def validate_metric(metric: str) -> str:
    """Return ``metric`` unchanged if it is supported.

    Raises:
        InvalidArgumentError: If the metric is unknown.
    """
    if metric not in METRICS:
        raise InvalidArgumentError(f"metric must be one of {METRICS}, got {metric!r}")
    return metric


def measure(
    origin: Point,
    destination: Point,
    units: str = DEFAULT_UNITS,
    metric: str = "great_circle",
) -> float:
    """Distance between two points with the selected metric.

    ``planar`` distances are in coordinate units and ignore ``units``.

    Returns:
        float: Distance between ``origin`` and ``destination``.
    """
    if metric == "planar":
        a = (float(origin[0]), float(origin[1]))
        b = (float(destination[0]), float(destination[1]))
        return float(euclid_dist(a, b))
    if metric == "great_circle":
        return great_circle_distance(origin, destination, units)
    raise InvalidArgumentError(f"metric must be one of {METRICS}, got {metric!r}")
