"""
Module defining types used in gridroute
"""

# Geometry types
Point = tuple[float, float]
"""Type alias for a planar point ``(x, y)``; for geographic input ``x`` is longitude."""

Ring = tuple[Point, ...]
"""Closed outer boundary of a polygon (first point equals last point, at least 4 points)."""

BBox = tuple[float, float, float, float]
"""
Type alias for an axis-aligned bounding box
`(west, south, east, north)`
"""

# Grid types
GridNode = tuple[int, int]
"""Type alias for a grid index ``(row, col)``; row 0 is the northernmost row."""
