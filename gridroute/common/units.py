"""Distance unit factors relative to the mean earth radius.

A factor converts an angular distance in radians into a length in the given unit.
"""

from __future__ import annotations

import math

from gridroute.common.errors import InvalidArgumentError

EARTH_RADIUS_METERS = 6371008.8

UNIT_FACTORS: dict[str, float] = {
    "centimeters": EARTH_RADIUS_METERS * 100,
    "centimetres": EARTH_RADIUS_METERS * 100,
    "degrees": 360 / (2 * math.pi),
    "feet": EARTH_RADIUS_METERS * 3.28084,
    "inches": EARTH_RADIUS_METERS * 39.370,
    "kilometers": EARTH_RADIUS_METERS / 1000,
    "kilometres": EARTH_RADIUS_METERS / 1000,
    "meters": EARTH_RADIUS_METERS,
    "metres": EARTH_RADIUS_METERS,
    "miles": EARTH_RADIUS_METERS / 1609.344,
    "millimeters": EARTH_RADIUS_METERS * 1000,
    "millimetres": EARTH_RADIUS_METERS * 1000,
    "nauticalmiles": EARTH_RADIUS_METERS / 1852,
    "radians": 1.0,
    "yards": EARTH_RADIUS_METERS * 1.0936,
}

DEFAULT_UNITS = "kilometers"


def validate_units(units: str) -> str:
    """Return ``units`` unchanged if it names a known unit.

    Raises:
        InvalidArgumentError: If the unit is unknown or not a string.
    """
    if not isinstance(units, str) or units not in UNIT_FACTORS:
        raise InvalidArgumentError(
            f"units must be one of {sorted(UNIT_FACTORS)}, got {units!r}"
        )
    return units


def radians_to_length(radians: float, units: str = DEFAULT_UNITS) -> float:
    """Convert an angular distance on the earth's surface into a length.

    Args:
        radians: Central angle in radians.
        units: Target length unit.

    Returns:
        float: Length in ``units``.
    """
    return radians * UNIT_FACTORS[validate_units(units)]
