"""Route dataclasses and encoded step geometry."""

from __future__ import annotations

import pytest

from route_progress.geometry import Coordinate
from route_progress.navigation import (
    DirectionsRoute,
    RouteLeg,
    RouteStep,
    decode_geometry,
    encode_geometry,
)

# Reference polyline from the encoding format documentation (precision 5).
ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_decode_reference_polyline():
    coords = decode_geometry(ENCODED, 5)
    assert [(c.latitude, c.longitude) for c in coords] == [
        pytest.approx((38.5, -120.2)),
        pytest.approx((40.7, -120.95)),
        pytest.approx((43.252, -126.453)),
    ]


def test_encode_matches_reference_polyline():
    coords = [
        Coordinate.from_lat_lon(38.5, -120.2),
        Coordinate.from_lat_lon(40.7, -120.95),
        Coordinate.from_lat_lon(43.252, -126.453),
    ]
    assert encode_geometry(coords, 5) == ENCODED


def test_empty_geometry_decodes_to_nothing():
    assert decode_geometry("") == []


def test_step_decodes_geometry_lazily():
    step = RouteStep(geometry=ENCODED, distance=1.0, duration=1.0, precision=5)
    first = step.coordinates
    assert len(first) == 3
    assert step.coordinates is first


def test_from_coordinates_derives_distance_and_maneuver():
    coords = [Coordinate(0, 0), Coordinate(0.001, 0)]
    step = RouteStep.from_coordinates(coords, duration=10.0)
    assert step.distance == pytest.approx(111.23, abs=0.01)
    assert step.maneuver.location == coords[0]
    assert step.coordinates == tuple(coords)


def test_route_coordinates_chain_steps(straight_route):
    coords = straight_route.coordinates()
    assert len(coords) == 3
    assert coords[0] == straight_route.legs[0].steps[0].coordinates[0]
    assert coords[-1] == straight_route.legs[0].steps[1].coordinates[-1]


def test_route_prefers_overview_geometry():
    route = DirectionsRoute(legs=[RouteLeg(steps=[])], geometry=ENCODED, precision=5)
    assert len(route.coordinates()) == 3
    assert route.distance == 0.0
