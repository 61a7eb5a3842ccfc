"""Cutting sub-lines out of polylines."""

from __future__ import annotations

import pytest

from route_progress.errors import DegenerateLineError, InvalidDistanceError, NotALineStringError
from route_progress.geometry import (
    Coordinate,
    LineString,
    Point,
    Polygon,
    line_distance,
    line_slice,
    line_slice_along,
)

EQUATOR = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0), Coordinate(3, 0)]


def test_slice_keeps_interior_vertices():
    sliced = line_slice(Coordinate(0.5, 0.1), Coordinate(2.5, -0.1), EQUATOR)
    assert isinstance(sliced, LineString)
    assert len(sliced) == 4
    first, *middle, last = sliced.coordinates
    assert first.longitude == pytest.approx(0.5, abs=1e-9)
    assert first.latitude == pytest.approx(0.0, abs=1e-9)
    assert middle == [EQUATOR[1], EQUATOR[2]]
    assert last.longitude == pytest.approx(2.5, abs=1e-9)


def test_slice_orders_ends_along_the_line():
    forward = line_slice(Coordinate(0.5, 0.1), Coordinate(2.5, -0.1), EQUATOR)
    backward = line_slice(Coordinate(2.5, -0.1), Coordinate(0.5, 0.1), LineString(EQUATOR))
    assert backward.coordinates == forward.coordinates


def test_slice_within_one_segment_keeps_given_order():
    sliced = line_slice(Coordinate(0.75, 0.0), Coordinate(0.25, 0.0), EQUATOR)
    assert len(sliced) == 2
    assert sliced.coordinates[0].longitude == pytest.approx(0.75, abs=1e-9)
    assert sliced.coordinates[1].longitude == pytest.approx(0.25, abs=1e-9)


def test_slice_between_vertices_returns_whole_line():
    sliced = line_slice(EQUATOR[0], EQUATOR[-1], EQUATOR)
    assert sliced == LineString(EQUATOR)
    assert line_distance(sliced) == pytest.approx(line_distance(EQUATOR))


def test_slice_accepts_point_geometries():
    sliced = line_slice(Point(EQUATOR[1]), Point(EQUATOR[2]), EQUATOR)
    assert line_distance(sliced) == pytest.approx(line_distance(EQUATOR[1:3]))


def test_slice_rejects_other_geometry_kinds():
    square = Polygon(
        outer=[Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1), Coordinate(0, 0)]
    )
    with pytest.raises(NotALineStringError):
        line_slice(EQUATOR[0], EQUATOR[1], square)
    with pytest.raises(NotALineStringError):
        line_slice(EQUATOR[0], EQUATOR[1], Point(EQUATOR[0]))


def test_slice_rejects_single_coordinate_lines():
    with pytest.raises(DegenerateLineError):
        line_slice(EQUATOR[0], EQUATOR[1], [EQUATOR[0]])


class TestSliceAlong:
    def test_slice_between_distances(self):
        degree_km = line_distance(EQUATOR[:2])
        sliced = line_slice_along(EQUATOR, 0.5 * degree_km, 1.5 * degree_km)
        assert len(sliced) == 3
        assert sliced.coordinates[0].longitude == pytest.approx(0.5, abs=1e-9)
        assert sliced.coordinates[1] == EQUATOR[1]
        assert sliced.coordinates[2].longitude == pytest.approx(1.5, abs=1e-9)

    def test_slice_from_start(self):
        degree_km = line_distance(EQUATOR[:2])
        sliced = line_slice_along(EQUATOR, 0.0, 2 * degree_km)
        assert sliced.coordinates[0] == EQUATOR[0]
        assert sliced.coordinates[-1].longitude == pytest.approx(2.0, abs=1e-9)

    def test_stop_beyond_end_returns_rest_of_line(self):
        degree_km = line_distance(EQUATOR[:2])
        sliced = line_slice_along(EQUATOR, 2.5 * degree_km, 100 * degree_km)
        assert sliced.coordinates[0].longitude == pytest.approx(2.5, abs=1e-9)
        assert sliced.coordinates[-1] == EQUATOR[-1]

    def test_units_are_honoured(self):
        degree_m = line_distance(EQUATOR[:2], "meters")
        sliced = line_slice_along(EQUATOR, 0.5 * degree_m, 1.5 * degree_m, "meters")
        assert sliced.coordinates[-1].longitude == pytest.approx(1.5, abs=1e-9)

    def test_start_beyond_end_is_rejected(self):
        with pytest.raises(InvalidDistanceError):
            line_slice_along(EQUATOR, 10_000.0, 20_000.0)

    def test_equal_distances_are_rejected(self):
        with pytest.raises(ValueError):
            line_slice_along(EQUATOR, 5.0, 5.0)

    def test_negative_distances_are_rejected(self):
        with pytest.raises(InvalidDistanceError):
            line_slice_along(EQUATOR, -1.0, 5.0)
