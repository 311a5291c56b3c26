"""Removal of redundant points from a polyline."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gridroute.common.types import Point


def _on_segment(start: Point, end: Point, point: Point, tolerance: float) -> bool:
    """True when ``point`` is collinear with and between ``start`` and ``end``."""
    dxc = point[0] - start[0]
    dyc = point[1] - start[1]
    dxl = end[0] - start[0]
    dyl = end[1] - start[1]
    if dxl == 0 and dyl == 0:
        return False
    cross = dxc * dyl - dyc * dxl
    if abs(cross) > tolerance * math.hypot(dxc, dyc) * math.hypot(dxl, dyl):
        return False
    dot = dxc * dxl + dyc * dyl
    return 0 <= dot <= dxl * dxl + dyl * dyl


def clean_coords(path: Sequence[Point], tolerance: float = 1e-9) -> list[Point]:
    """Drop consecutive duplicates and interior points lying on a straight run.

    The first and last points are always kept. The result has no consecutive
    duplicates, with one exception: a path whose points all coincide collapses
    to ``[first, last]``, two equal points.

    Args:
        path: Polyline vertices.
        tolerance: Maximum ``|sin|`` of the turn angle for a point to count as collinear.

    Returns:
        list[Point]: Cleaned polyline.
    """
    if len(path) < 2:
        return list(path)

    deduped: list[Point] = [path[0]]
    for point in path[1:]:
        if point != deduped[-1]:
            deduped.append(point)
    if len(deduped) < 2:
        return [path[0], path[-1]]

    cleaned: list[Point] = [deduped[0]]
    for point in deduped[1:]:
        while len(cleaned) >= 2 and _on_segment(cleaned[-2], point, cleaned[-1], tolerance):
            cleaned.pop()
        cleaned.append(point)

    logger.debug("Cleaned path: {before} -> {after} points", before=len(path), after=len(cleaned))
    return cleaned
