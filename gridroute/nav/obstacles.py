"""Obstacle container used to rasterize polygons onto the routing grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from gridroute.common.errors import InvalidArgumentError
from gridroute.nav.polygon_hit_test import point_in_ring_array, ring_to_array

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from gridroute.common.types import Point, Ring

MIN_RING_POINTS = 4


def make_ring(coordinates: Sequence[Sequence[float]]) -> Ring:
    """Copy coordinates into an immutable closed ring.

    Args:
        coordinates: Outer boundary vertices; must be closed (first == last).

    Returns:
        Ring: Tuple of ``(x, y)`` float tuples.

    Raises:
        InvalidArgumentError: If the ring is not closed, too short, or has malformed vertices.
    """
    try:
        ring = tuple((float(c[0]), float(c[1])) for c in coordinates)
    except (TypeError, ValueError, IndexError) as exc:
        raise InvalidArgumentError(f"ring vertices must be (x, y) numbers: {exc}") from exc
    if len(ring) < MIN_RING_POINTS:
        raise InvalidArgumentError(
            f"ring needs at least {MIN_RING_POINTS} points, got {len(ring)}"
        )
    if ring[0] != ring[-1]:
        raise InvalidArgumentError("ring must be closed (first point equal to last point)")
    return ring


@dataclass(frozen=True)
class ObstacleSet:
    """Collection of obstacle outer rings.

    Attributes:
        rings: Obstacle outer rings, copied by value.
    """

    rings: tuple[Ring, ...] = ()
    _arrays: tuple[np.ndarray, ...] = field(init=False, repr=False, compare=False)
    _bounds: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Precompute ring arrays and per-ring bounds for the hit test."""
        arrays = tuple(ring_to_array(ring) for ring in self.rings)
        if arrays:
            bounds = np.array(
                [[a[:, 0].min(), a[:, 1].min(), a[:, 0].max(), a[:, 1].max()] for a in arrays]
            )
        else:
            bounds = np.zeros((0, 4))
        object.__setattr__(self, "_arrays", arrays)
        object.__setattr__(self, "_bounds", bounds)

    @classmethod
    def from_rings(cls, rings: Iterable[Sequence[Sequence[float]]]) -> ObstacleSet:
        """Build an obstacle set, validating and copying each ring.

        Returns:
            ObstacleSet: The validated obstacles.
        """
        return cls(tuple(make_ring(ring) for ring in rings))

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.rings)

    @property
    def edge_count(self) -> int:
        """Total number of ring edges, the per-node cost factor of rasterization."""
        return sum(len(ring) - 1 for ring in self.rings)

    def coordinates(self) -> list[Point]:
        """All ring vertices, flattened."""
        return [pt for ring in self.rings for pt in ring]

    def is_blocked(self, point: Point) -> bool:
        """Return True when ``point`` is inside any obstacle ring.

        Rings whose bounding box excludes the point are skipped; a closed ring can never
        contain such a point under the even-odd rule.
        """
        x, y = point
        for idx, ring_xy in enumerate(self._arrays):
            min_x, min_y, max_x, max_y = self._bounds[idx]
            if x < min_x or x > max_x or y < min_y or y > max_y:
                continue
            if point_in_ring_array(point, ring_xy):
                return True
        return False

