"""Coerce caller geometry (GeoJSON mappings or shapely objects) into routing types.

Accepted endpoint inputs:
    - shapely ``Point``
    - GeoJSON ``Point`` geometry or ``Feature`` with a ``Point`` geometry

Accepted obstacle inputs:
    - ``None`` or an empty collection (no obstacles)
    - GeoJSON ``FeatureCollection`` whose features are all ``Polygon``
    - a sequence of shapely ``Polygon`` objects

Only the outer ring of every polygon is kept; holes are dropped. Caller objects are
read, never modified.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from shapely.geometry import LineString, mapping
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from gridroute.common.errors import InvalidArgumentError
from gridroute.common.types import Point
from gridroute.nav.obstacles import ObstacleSet, make_ring


def get_type(geojson: Any, name: str = "geojson") -> str:
    """Return the geometry type of a GeoJSON mapping or shapely geometry.

    Features report the type of their geometry.

    Raises:
        InvalidArgumentError: If the object is missing or carries no type.
    """
    if geojson is None:
        raise InvalidArgumentError(f"{name} is required")
    if isinstance(geojson, BaseGeometry):
        return geojson.geom_type
    if isinstance(geojson, Mapping):
        geometry = geojson.get("geometry")
        if isinstance(geometry, Mapping) and geometry.get("type"):
            return str(geometry["type"])
        if geojson.get("type"):
            return str(geojson["type"])
    raise InvalidArgumentError(f"{name} is invalid")


def _geometry_of(geojson: Mapping) -> Mapping:
    return geojson["geometry"] if geojson.get("type") == "Feature" else geojson


def coerce_point(obj: Any, name: str) -> Point:
    """Extract the ``(x, y)`` coordinates of a point input.

    Args:
        obj: shapely Point or GeoJSON Point/Feature<Point>.
        name: Argument name used in error messages.

    Returns:
        Point: Float coordinates, copied from the input.

    Raises:
        InvalidArgumentError: If ``obj`` is not a point.
    """
    if get_type(obj, name) != "Point":
        raise InvalidArgumentError(f"{name} must be Point")
    if isinstance(obj, ShapelyPoint):
        if obj.is_empty:
            raise InvalidArgumentError(f"{name} must not be empty")
        return float(obj.x), float(obj.y)
    coords = _geometry_of(obj).get("coordinates")
    try:
        return float(coords[0]), float(coords[1])
    except (TypeError, ValueError, IndexError) as exc:
        raise InvalidArgumentError(f"{name} has invalid coordinates: {coords!r}") from exc


def _polygon_outer_ring(polygon: Any, index: int):
    if isinstance(polygon, ShapelyPolygon):
        if polygon.is_empty:
            raise InvalidArgumentError(f"obstacle {index} is an empty polygon")
        return make_ring(polygon.exterior.coords)
    coords = _geometry_of(polygon).get("coordinates")
    if not coords:
        raise InvalidArgumentError(f"obstacle {index} has no coordinates")
    return make_ring(coords[0])


def coerce_obstacles(obstacles: Any) -> ObstacleSet:
    """Convert an obstacle collection into an :class:`ObstacleSet`.

    Returns:
        ObstacleSet: Outer rings of all obstacles (possibly empty).

    Raises:
        InvalidArgumentError: If the collection or any of its members is not a polygon.
    """
    if obstacles is None:
        return ObstacleSet()

    if isinstance(obstacles, Mapping):
        if obstacles.get("type") != "FeatureCollection":
            raise InvalidArgumentError("obstacles must be FeatureCollection")
        members = obstacles.get("features") or []
    elif isinstance(obstacles, Sequence) and not isinstance(obstacles, (str, bytes)):
        members = obstacles
    else:
        raise InvalidArgumentError("obstacles must be FeatureCollection or a sequence of Polygons")

    rings = []
    for index, member in enumerate(members):
        if get_type(member, f"obstacle {index}") != "Polygon":
            raise InvalidArgumentError(f"obstacle {index} must be Polygon")
        rings.append(_polygon_outer_ring(member, index))
    return ObstacleSet(tuple(rings))


def path_to_feature(path: Sequence[Point], properties: Mapping | None = None) -> dict:
    """Wrap a path as a GeoJSON ``Feature<LineString>``.

    Returns:
        dict: GeoJSON feature mapping.
    """
    geometry = mapping(LineString(path))
    return {
        "type": "Feature",
        "properties": dict(properties or {}),
        "geometry": {
            "type": geometry["type"],
            "coordinates": [list(coord) for coord in geometry["coordinates"]],
        },
    }
