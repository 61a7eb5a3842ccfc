"""Great-circle measurement helpers (haversine distance, bearing, projection)."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from ..errors import DegenerateLineError, InvalidDistanceError
from .models import BoundingBox, Coordinate, LineString, Point, Polyline, as_coordinate, coordinates_of
from .units import Unit, UnitLike, distance_to_radians, radians_to_distance, to_radians_factor

DistanceArray = NDArray[np.float64]
PointLike = Union[Coordinate, Point]


def distance(
    origin: PointLike, target: PointLike, units: Optional[UnitLike] = None
) -> float:
    """Great-circle distance between two positions using the haversine formula."""

    a = as_coordinate(origin)
    b = as_coordinate(target)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    )
    return radians_to_distance(2 * math.atan2(math.sqrt(h), math.sqrt(1 - h)), units)


def bearing(origin: PointLike, target: PointLike) -> float:
    """Initial bearing from ``origin`` to ``target`` in degrees, in (-180, 180]."""

    a = as_coordinate(origin)
    b = as_coordinate(target)
    lon1 = math.radians(a.longitude)
    lon2 = math.radians(b.longitude)
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    y = math.sin(lon2 - lon1) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        lon2 - lon1
    )
    result = math.degrees(math.atan2(y, x))
    if result == -180.0:
        return 180.0
    return result


def destination(
    origin: PointLike,
    distance_value: float,
    bearing_deg: float,
    units: Optional[UnitLike] = None,
) -> Coordinate:
    """Project ``origin`` along ``bearing_deg`` by ``distance_value``.

    The resulting longitude is not wrapped into [-180, 180].
    """

    if distance_value < 0:
        raise InvalidDistanceError(
            f"Destination distance must be non-negative, got {distance_value}"
        )
    start = as_coordinate(origin)
    lon1 = math.radians(start.longitude)
    lat1 = math.radians(start.latitude)
    bearing_rad = math.radians(bearing_deg)
    radians = distance_to_radians(distance_value, units)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(radians)
        + math.cos(lat1) * math.sin(radians) * math.cos(bearing_rad)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing_rad) * math.sin(radians) * math.cos(lat1),
        math.cos(radians) - math.sin(lat1) * math.sin(lat2),
    )
    return Coordinate(longitude=math.degrees(lon2), latitude=math.degrees(lat2))


def midpoint(origin: PointLike, target: PointLike) -> Coordinate:
    """Point halfway along the great circle between two positions."""

    half = distance(origin, target, Unit.MILES) / 2
    return destination(origin, half, bearing(origin, target), Unit.MILES)


def line_distance(
    line: Union[LineString, Polyline], units: Optional[UnitLike] = None
) -> float:
    """Sum of the great-circle lengths of consecutive vertex pairs."""

    coords = coordinates_of(line)
    travelled = 0.0
    for prev, curr in zip(coords, coords[1:]):
        travelled += distance(prev, curr, units)
    return travelled


def cumulative_distances(
    line: Union[LineString, Polyline], units: Optional[UnitLike] = None
) -> DistanceArray:
    """Return running distance from the first vertex to every vertex."""

    coords = coordinates_of(line)
    if not coords:
        return np.empty(0, dtype=float)
    lats = np.asarray([c.latitude for c in coords], dtype=float)
    lons = np.asarray([c.longitude for c in coords], dtype=float)
    d_lat = np.radians(np.diff(lats))
    d_lon = np.radians(np.diff(lons))
    lat_rad = np.radians(lats)
    h = (
        np.sin(d_lat / 2) ** 2
        + np.sin(d_lon / 2) ** 2 * np.cos(lat_rad[:-1]) * np.cos(lat_rad[1:])
    )
    angular = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    segment_lengths = angular * to_radians_factor(units)
    return np.concatenate(([0.0], np.cumsum(segment_lengths)))


def along(
    line: Union[LineString, Polyline],
    distance_value: float,
    units: Optional[UnitLike] = None,
) -> Coordinate:
    """Return the point ``distance_value`` along the line.

    Distances past the end of the line return the last vertex.
    """

    coords = coordinates_of(line)
    if not coords:
        raise DegenerateLineError("Cannot walk along an empty line")
    if distance_value < 0:
        raise InvalidDistanceError(
            f"Distance along a line must be non-negative, got {distance_value}"
        )
    cumulative = cumulative_distances(coords, units)
    if distance_value >= cumulative[-1]:
        return coords[-1]
    # First vertex reached at or beyond the requested distance.
    idx = int(np.searchsorted(cumulative, distance_value, side="left"))
    overshot = float(cumulative[idx]) - distance_value
    if overshot == 0 or idx == 0:
        return coords[idx]
    back_bearing = bearing(coords[idx], coords[idx - 1])
    return destination(coords[idx], overshot, back_bearing, units)


def bbox(coordinates: Sequence[Coordinate]) -> BoundingBox:
    """Return ``(west, south, east, north)`` extents of ``coordinates``."""

    west = south = math.inf
    east = north = -math.inf
    for coord in coordinates:
        west = min(west, coord.longitude)
        south = min(south, coord.latitude)
        east = max(east, coord.longitude)
        north = max(north, coord.latitude)
    return west, south, east, north
