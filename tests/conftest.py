"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable route fixtures for the
geometry, progress and session tests to avoid duplication across files.
"""
from __future__ import annotations

import os
import sys
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from route_progress.geometry import Coordinate, destination
from route_progress.navigation import DirectionsRoute, RouteLeg, RouteStep, StepManeuver

ORIGIN = Coordinate(longitude=0.0, latitude=0.0)


# --- Factory helpers -------------------------------------------------
def east_of(origin, metres):
    """Coordinate ``metres`` due east of ``origin``."""
    return destination(origin, metres, 90, "meters")


def make_step(coords, maneuver_type="turn", duration=20.0, bearing_after=90.0):
    maneuver = StepManeuver(
        location=coords[0], bearing_after=bearing_after, type=maneuver_type
    )
    return RouteStep.from_coordinates(coords, duration=duration, maneuver=maneuver)


def make_straight_leg(origin=ORIGIN, step_lengths=(100.0, 100.0), with_arrival=False):
    """Leg running due east, one step per entry of ``step_lengths`` (metres)."""
    vertices = [origin]
    for length in step_lengths:
        vertices.append(east_of(vertices[-1], length))
    steps = []
    for index in range(len(step_lengths)):
        kind = "depart" if index == 0 else "turn"
        steps.append(make_step([vertices[index], vertices[index + 1]], kind))
    if with_arrival:
        steps.append(make_step([vertices[-1]], "arrive", duration=0.0))
    return RouteLeg(steps=steps)


def make_route(*legs):
    return DirectionsRoute(legs=list(legs))


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def origin():
    return ORIGIN


@pytest.fixture
def straight_leg():
    """Two 100 m steps heading east from the origin."""
    return make_straight_leg()


@pytest.fixture
def straight_route(straight_leg):
    return make_route(straight_leg)


@pytest.fixture
def arrival_route():
    """Two 100 m steps followed by a single-vertex arrival step."""
    return make_route(make_straight_leg(with_arrival=True))


@pytest.fixture
def two_leg_route():
    first = make_straight_leg(step_lengths=(100.0, 100.0))
    start = first.steps[-1].coordinates[-1]
    second = make_straight_leg(origin=start, step_lengths=(150.0,))
    return make_route(first, second)


@pytest.fixture
def leg_factory():
    return make_straight_leg


@pytest.fixture
def step_factory():
    return make_step


@pytest.fixture
def east():
    return east_of


@pytest.fixture
def assert_close():
    def _assert(actual, expected, tol=1e-9):
        assert abs(actual - expected) <= tol, f"{actual} != {expected} (tol={tol})"
    return _assert
