"""End-to-end tests for :func:`gridroute.shortest_path`."""

from __future__ import annotations

import copy

import numpy as np
import pytest
from loguru import logger
from shapely.geometry import Point, Polygon

from gridroute import (
    InvalidArgumentError,
    NoFreeNodeError,
    NoRouteFoundError,
    RouteStatus,
    ShortestPathConfig,
    shortest_path,
)
from gridroute.nav.geojson_io import coerce_obstacles

START = (-5.0, -6.0)
END = (9.0, -6.0)

# Square frame whose inner courtyard only opens through a slit far narrower
# than one grid cell, so the courtyard is cut off from the outside lattice.
FRAME_WITH_SLIT = [
    (0, 0),
    (5, 0),
    (5, 3),
    (3, 3),
    (3, 7),
    (7, 7),
    (7, 3),
    (5.001, 3),
    (5.001, 0),
    (10, 0),
    (10, 10),
    (0, 10),
    (0, 0),
]
PLANAR_UNIT_GRID = {"metric": "planar", "resolution": 1.0}


@pytest.fixture
def log_records():
    """Collect loguru records emitted during a test."""
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


def _interior(result):
    return result.coordinates[1:-1]


class TestNoObstacles:
    """Queries that short-circuit to the direct line."""

    @pytest.mark.parametrize(
        "obstacles", [None, [], {"type": "FeatureCollection", "features": []}]
    )
    def test_direct_line(self, obstacles):
        """Without obstacles the result is exactly the two endpoints."""
        result = shortest_path(Point(*START), Point(*END), obstacles)
        assert result.coordinates == [START, END]
        assert result.status is RouteStatus.DIRECT
        assert result.found
        assert result.grid is None

    def test_options_are_validated_before_shortcut(self):
        """Invalid options fail even when no grid is needed."""
        with pytest.raises(InvalidArgumentError):
            shortest_path(Point(*START), Point(*END), None, {"resolution": -1})

    def test_coincident_endpoints(self):
        """Equal endpoints still return both of them."""
        result = shortest_path(Point(1, 1), Point(1, 1))
        assert result.coordinates == [(1.0, 1.0), (1.0, 1.0)]


class TestRouting:
    """Queries that route around a rectangle obstacle."""

    def test_routes_around_rectangle(self, rectangle_obstacles):
        """The path keeps the exact endpoints and detours around the obstacle."""
        result = shortest_path(
            {"type": "Point", "coordinates": list(START)},
            {"type": "Point", "coordinates": list(END)},
            rectangle_obstacles,
        )
        assert result.status is RouteStatus.FOUND
        assert result.coordinates[0] == START
        assert result.coordinates[-1] == END
        assert len(result.coordinates) > 2

        obstacles = coerce_obstacles(rectangle_obstacles)
        assert not any(obstacles.is_blocked(pt) for pt in _interior(result))
        assert any(y > -3 or y < -7 for _, y in _interior(result))

    def test_path_invariants(self, rectangle_obstacles):
        """No consecutive duplicates and every searched node is free."""
        result = shortest_path(Point(*START), Point(*END), rectangle_obstacles)
        coords = result.coordinates
        assert all(a != b for a, b in zip(coords, coords[1:], strict=False))
        assert result.node_path[0] == result.start_node
        assert result.node_path[-1] == result.end_node
        assert not any(result.occupancy[node] for node in result.node_path)
        assert result.grid.cols in (100, 101)

    def test_endpoints_are_bit_identical(self, rectangle_obstacles):
        """Caller coordinates are returned without any arithmetic."""
        start = (-5.123456789, -6.000000001)
        end = (9.87654321, -5.99999)
        result = shortest_path(Point(*start), Point(*end), rectangle_obstacles)
        assert result.coordinates[0] == start
        assert result.coordinates[-1] == end

    def test_deterministic(self, rectangle_obstacles):
        """Identical inputs give identical outputs."""
        first = shortest_path(Point(*START), Point(*END), rectangle_obstacles)
        second = shortest_path(Point(*START), Point(*END), rectangle_obstacles)
        assert first.coordinates == second.coordinates
        np.testing.assert_array_equal(first.occupancy, second.occupancy)

    def test_shapely_and_feature_inputs_agree(self, rectangle_obstacles):
        """Shapely polygons and GeoJSON features describe the same query."""
        polygon = Polygon([(0, -7), (5, -7), (5, -3), (0, -3), (0, -7)])
        start_feature = {
            "type": "Feature",
            "properties": {},
            "geometry": {"type": "Point", "coordinates": list(START)},
        }
        from_shapely = shortest_path(Point(*START), Point(*END), [polygon])
        from_geojson = shortest_path(start_feature, Point(*END), rectangle_obstacles)
        assert from_shapely.coordinates == from_geojson.coordinates

    def test_inputs_are_not_mutated(self, rectangle_obstacles):
        """The obstacle collection and endpoint mappings are left untouched."""
        before = copy.deepcopy(rectangle_obstacles)
        start = {"type": "Point", "coordinates": list(START)}
        shortest_path(start, Point(*END), rectangle_obstacles)
        assert rectangle_obstacles == before
        assert start == {"type": "Point", "coordinates": list(START)}

    def test_halving_resolution_doubles_grid(self, rectangle_obstacles):
        """Resolution controls the lattice density."""
        coarse = shortest_path(Point(*START), Point(*END), rectangle_obstacles, {"resolution": 50})
        fine = shortest_path(Point(*START), Point(*END), rectangle_obstacles, {"resolution": 25})
        assert abs((fine.grid.cols - 1) - 2 * (coarse.grid.cols - 1)) <= 1
        assert abs((fine.grid.rows - 1) - 2 * (coarse.grid.rows - 1)) <= 1
        assert coarse.status is RouteStatus.FOUND
        assert fine.status is RouteStatus.FOUND

    def test_config_object_and_mapping_agree(self, rectangle_obstacles):
        """Options may be a mapping or a config instance."""
        config = ShortestPathConfig(resolution=40.0, units="kilometers")
        from_config = shortest_path(Point(*START), Point(*END), rectangle_obstacles, config)
        from_mapping = shortest_path(
            Point(*START), Point(*END), rectangle_obstacles, {"resolution": 40.0}
        )
        assert from_config.coordinates == from_mapping.coordinates

    def test_result_exports(self, rectangle_obstacles):
        """The path converts to a LineString and a GeoJSON feature."""
        result = shortest_path(Point(*START), Point(*END), rectangle_obstacles)
        line = result.to_linestring()
        assert line.coords[0] == START
        feature = result.to_feature()
        assert feature["properties"] == {"status": "found"}
        assert feature["geometry"]["type"] == "LineString"
        assert len(feature["geometry"]["coordinates"]) == len(result.coordinates)
        assert result.length() > result.length("miles") > 0


class TestInvalidInput:
    """Argument validation."""

    @pytest.mark.parametrize("resolution", [-1, 0, "abc"])
    def test_invalid_resolution(self, rectangle_obstacles, resolution):
        """Bad resolutions are rejected with a descriptive message."""
        with pytest.raises(InvalidArgumentError, match="resolution must be a number"):
            shortest_path(
                Point(*START), Point(*END), rectangle_obstacles, {"resolution": resolution}
            )

    def test_non_point_start(self, rectangle_obstacles):
        """Endpoints must be points."""
        polygon = Polygon([(0, 0), (1, 0), (1, 1), (0, 0)])
        with pytest.raises(InvalidArgumentError, match="start must be Point"):
            shortest_path(polygon, Point(*END), rectangle_obstacles)
        with pytest.raises(InvalidArgumentError, match="start is required"):
            shortest_path(None, Point(*END), rectangle_obstacles)

    def test_non_polygon_obstacles(self):
        """Obstacle members must be polygons."""
        with pytest.raises(InvalidArgumentError):
            shortest_path(Point(*START), Point(*END), [Point(0, 0)])
        with pytest.raises(InvalidArgumentError, match="obstacles must be FeatureCollection"):
            shortest_path(Point(*START), Point(*END), {"type": "Polygon", "coordinates": []})

    def test_invalid_path_finder(self, rectangle_obstacles):
        """Custom finders must expose find_path."""
        with pytest.raises(InvalidArgumentError):
            shortest_path(Point(*START), Point(*END), rectangle_obstacles, path_finder=object())

    def test_invalid_units(self, rectangle_obstacles):
        """Unknown units are rejected."""
        with pytest.raises(InvalidArgumentError):
            shortest_path(Point(*START), Point(*END), rectangle_obstacles, {"units": "leagues"})


class TestFailures:
    """Blocked grids and disconnected endpoints."""

    def test_all_nodes_blocked(self, make_feature_collection):
        """Obstacles covering every node raise with a remediation hint."""
        obstacles = make_feature_collection((0.0, 0.0, 10.0, 10.0))
        options = {"metric": "planar", "resolution": 0.5, "bbox_scale": 0.5}
        with pytest.raises(NoFreeNodeError) as excinfo:
            shortest_path(Point(2, 2), Point(8, 8), obstacles, options)
        assert "Remediation" in str(excinfo.value)

    def test_disconnected_endpoints_fall_back(self, log_records):
        """Unreachable end nodes degrade to the direct line with an explicit status."""
        result = shortest_path(
            Point(-2, 5), Point(5, 5), [Polygon(FRAME_WITH_SLIT)], PLANAR_UNIT_GRID
        )
        assert result.status is RouteStatus.NO_ROUTE_FOUND
        assert not result.found
        assert result.coordinates == [(-2.0, 5.0), (5.0, 5.0)]
        assert result.node_path == []
        assert result.grid is not None
        assert not result.occupancy[result.start_node]
        assert not result.occupancy[result.end_node]
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert any("path_finder" in r["message"] for r in warnings)

    def test_disconnected_endpoints_raise_without_fallback(self):
        """With fallback disabled the failure surfaces as NoRouteFoundError."""
        options = {**PLANAR_UNIT_GRID, "fallback_on_failure": False}
        with pytest.raises(NoRouteFoundError) as excinfo:
            shortest_path(Point(-2, 5), Point(5, 5), [Polygon(FRAME_WITH_SLIT)], options)
        assert excinfo.value.start == (-2.0, 5.0)
        assert excinfo.value.end == (5.0, 5.0)


class _RecordingFinder:
    def __init__(self, path=None):
        self.calls = []
        self.path = path

    def find_path(self, occupancy, start, goal):
        self.calls.append((occupancy.shape, start, goal))
        return [start, goal] if self.path is None else self.path


def test_custom_path_finder_is_used(rectangle_obstacles):
    """Injected finders receive the occupancy grid and the snapped nodes."""
    finder = _RecordingFinder()
    result = shortest_path(Point(*START), Point(*END), rectangle_obstacles, path_finder=finder)
    assert len(finder.calls) == 1
    shape, start_node, end_node = finder.calls[0]
    assert shape == result.grid.shape
    assert (start_node, end_node) == (result.start_node, result.end_node)
    assert result.status is RouteStatus.FOUND
    assert result.coordinates[0] == START
    assert result.coordinates[-1] == END


def test_custom_path_finder_without_route(rectangle_obstacles):
    """An empty finder result is treated as no route."""
    result = shortest_path(
        Point(*START), Point(*END), rectangle_obstacles, path_finder=_RecordingFinder(path=[])
    )
    assert result.status is RouteStatus.NO_ROUTE_FOUND
    assert result.coordinates == [START, END]


def test_endpoints_on_same_node_skip_search(rectangle_obstacles):
    """Endpoints snapping to one node return both exact endpoints without searching."""
    finder = _RecordingFinder()
    end = (START[0] - 1e-7, START[1] - 1e-7)
    result = shortest_path(Point(*START), Point(*end), rectangle_obstacles, path_finder=finder)
    assert finder.calls == []
    assert result.start_node == result.end_node
    assert result.node_path == [result.start_node]
    assert result.status is RouteStatus.FOUND
    assert result.coordinates == [START, end]
    assert result.grid is not None
