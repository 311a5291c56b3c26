"""Bounding box helpers for sizing the routing grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gridroute.common.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gridroute.common.types import BBox, Point


def compute_bbox(points: Iterable[Point]) -> BBox:
    """Smallest axis-aligned box containing all points.

    Returns:
        BBox: ``(west, south, east, north)``.

    Raises:
        InvalidArgumentError: If no points are given.
    """
    pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
    if pts.shape[0] == 0:
        raise InvalidArgumentError("cannot compute a bounding box without points")
    west, south = pts.min(axis=0)
    east, north = pts.max(axis=0)
    return float(west), float(south), float(east), float(north)


def scale_bbox(bbox: BBox, factor: float) -> BBox:
    """Scale a box about its center.

    Args:
        bbox: Box to scale.
        factor: Scale factor applied to width and height (1.15 adds 15%).

    Returns:
        BBox: The scaled box.
    """
    if factor <= 0:
        raise InvalidArgumentError(f"bbox scale factor must be > 0, got {factor}")
    west, south, east, north = bbox
    cx = (west + east) / 2
    cy = (south + north) / 2
    half_w = (east - west) / 2 * factor
    half_h = (north - south) / 2 * factor
    return cx - half_w, cy - half_h, cx + half_w, cy + half_h
