"""Great-circle measurement helpers."""

from __future__ import annotations

import numpy as np
import pytest

from route_progress.errors import DegenerateLineError, InvalidDistanceError
from route_progress.geometry import (
    Coordinate,
    LineString,
    Point,
    along,
    bbox,
    bearing,
    cumulative_distances,
    destination,
    distance,
    line_distance,
    midpoint,
)

PT1 = Coordinate(longitude=-75.343, latitude=39.984)
PT2 = Coordinate(longitude=-75.534, latitude=39.123)


@pytest.mark.parametrize(
    "units, expected",
    [
        ("miles", 60.37218405837491),
        ("nauticalmiles", 52.461979624130436),
        ("kilometers", 97.15957803131901),
        ("radians", 0.015245501024842149),
        ("degrees", 0.8735028650863799),
    ],
)
def test_distance_reference_values(units, expected):
    assert distance(PT1, PT2, units) == pytest.approx(expected, rel=1e-9)


def test_distance_defaults_to_kilometres_and_accepts_points():
    assert distance(Point(PT1), Point(PT2)) == pytest.approx(97.15957803131901, rel=1e-9)


def test_distance_is_symmetric_and_zero_on_identity():
    assert distance(PT1, PT1) == 0.0
    assert distance(PT1, PT2) == pytest.approx(distance(PT2, PT1))


@pytest.mark.parametrize(
    "target, expected",
    [
        (Coordinate(0.0, 1.0), 0.0),
        (Coordinate(1.0, 0.0), 90.0),
        (Coordinate(0.0, -1.0), 180.0),
        (Coordinate(-1.0, 0.0), -90.0),
    ],
)
def test_bearing_cardinal_directions(target, expected):
    assert bearing(Coordinate(0.0, 0.0), target) == pytest.approx(expected)


def test_bearing_stays_in_half_open_range():
    value = bearing(Coordinate(-75.4, 39.4), PT2)
    assert -180.0 < value <= 180.0
    assert value != 0.0


def test_destination_round_trips_distance_and_bearing():
    reached = destination(PT1, distance(PT1, PT2), bearing(PT1, PT2))
    assert reached.longitude == pytest.approx(PT2.longitude, abs=1e-9)
    assert reached.latitude == pytest.approx(PT2.latitude, abs=1e-9)


def test_destination_south_keeps_longitude():
    reached = destination(Coordinate(-75.0, 39.0), 100, 180, "kilometers")
    assert reached.longitude == pytest.approx(-75.0, abs=1e-12)
    assert reached.latitude < 39.0
    assert distance(Coordinate(-75.0, 39.0), reached) == pytest.approx(100.0)


def test_destination_rejects_negative_distance():
    with pytest.raises(InvalidDistanceError):
        destination(PT1, -1.0, 45.0)


@pytest.mark.parametrize(
    "first, second",
    [
        (Coordinate(0, 0), Coordinate(10, 0)),
        (Coordinate(0, 0), Coordinate(0, 10)),
        (Coordinate(0, 10), Coordinate(0, 0)),
        (Coordinate(-1, 10), Coordinate(1, -1)),
        (Coordinate(-5, -1), Coordinate(5, 10)),
        (Coordinate(22.5, 21.94304553343818), Coordinate(92.10937499999999, 46.800059446787316)),
    ],
)
def test_midpoint_is_equidistant(first, second):
    mid = midpoint(first, second)
    assert distance(first, mid, "miles") == pytest.approx(
        distance(second, mid, "miles"), rel=1e-9
    )


def test_line_distance_sums_segments():
    coords = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(1, 1)]
    expected = distance(coords[0], coords[1]) + distance(coords[1], coords[2])
    assert line_distance(coords) == pytest.approx(expected)
    assert line_distance(LineString(coords), "meters") == pytest.approx(expected * 1000)


def test_line_distance_of_single_point_is_zero():
    assert line_distance([Coordinate(1, 1)]) == 0.0
    assert line_distance([]) == 0.0


def test_cumulative_distances_match_line_distance():
    coords = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(1, 1), Coordinate(2, 2)]
    running = cumulative_distances(coords, "miles")
    assert running[0] == 0.0
    assert len(running) == len(coords)
    assert np.all(np.diff(running) > 0)
    assert running[-1] == pytest.approx(line_distance(coords, "miles"), rel=1e-12)
    assert cumulative_distances([]).size == 0


def test_along_interpolates_inside_segment():
    line = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0)]
    half = line_distance(line) / 4
    reached = along(line, half)
    assert reached.longitude == pytest.approx(0.5, abs=1e-9)
    assert reached.latitude == pytest.approx(0.0, abs=1e-9)


def test_along_hits_vertices_and_clamps_to_end():
    line = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0)]
    assert along(line, 0.0) == line[0]
    assert along(line, 10_000.0) == line[-1]


def test_along_single_point_returns_it():
    assert along([Coordinate(1.0, 1.0)], 1.0) == Coordinate(1.0, 1.0)


def test_along_rejects_empty_line_and_negative_distance():
    with pytest.raises(DegenerateLineError):
        along([], 1.0)
    with pytest.raises(InvalidDistanceError):
        along([Coordinate(0, 0), Coordinate(1, 0)], -0.5)


def test_bbox_extents():
    coords = [Coordinate(2, -1), Coordinate(-3, 4), Coordinate(0, 0)]
    assert bbox(coords) == (-3, -1, 2, 4)
