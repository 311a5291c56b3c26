"""Shared pytest fixtures for the gridroute test suite."""

from __future__ import annotations

import os
import sys

# Headless plotting for every test module importing matplotlib.
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest
from loguru import logger


def _rectangle_feature(west: float, south: float, east: float, north: float) -> dict:
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "Polygon",
            "coordinates": [
                [[west, south], [east, south], [east, north], [west, north], [west, south]]
            ],
        },
    }


@pytest.fixture
def rectangle_obstacles() -> dict:
    """FeatureCollection with one rectangle spanning x 0..5 and y -7..-3."""
    return {
        "type": "FeatureCollection",
        "features": [_rectangle_feature(0.0, -7.0, 5.0, -3.0)],
    }


@pytest.fixture
def square_ring() -> list[tuple[float, float]]:
    """Closed 10x10 square ring anchored at the origin."""
    return [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]


@pytest.fixture
def make_feature_collection():
    """Factory building a FeatureCollection of axis-aligned rectangles."""

    def _factory(*boxes: tuple[float, float, float, float]) -> dict:
        return {
            "type": "FeatureCollection",
            "features": [_rectangle_feature(*box) for box in boxes],
        }

    return _factory


@pytest.fixture
def reset_logger():
    """Restore the default loguru sink after a test reconfigures logging."""
    yield
    logger.remove()
    logger.add(sys.stderr)
