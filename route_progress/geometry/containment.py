"""Point-in-polygon tests using the even-odd ray casting rule."""

from __future__ import annotations

from typing import Iterable, List, Union

from .measurement import PointLike
from .models import Coordinate, MultiPolygon, Polygon, Ring, as_coordinate


def in_ring(point: PointLike, ring: Ring) -> bool:
    """Return True when ``point`` falls inside ``ring``.

    Each edge ``(ring[j], ring[i])`` with ``j = i - 1`` (wrapping) toggles the
    result when the point's latitude lies strictly between the edge ends and
    the point is left of the edge at that latitude.
    """

    pt = as_coordinate(point)
    inside_ring = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].longitude, ring[i].latitude
        xj, yj = ring[j].longitude, ring[j].latitude
        crosses = (yi > pt.latitude) != (yj > pt.latitude)
        if crosses and pt.longitude < (xj - xi) * (pt.latitude - yi) / (yj - yi) + xi:
            inside_ring = not inside_ring
        j = i
    return inside_ring


def _inside_polygon(pt: Coordinate, polygon: Polygon) -> bool:
    if not in_ring(pt, polygon.outer):
        return False
    return not any(in_ring(pt, hole) for hole in polygon.holes)


def inside(point: PointLike, polygon: Union[Polygon, MultiPolygon]) -> bool:
    """Return True when ``point`` is inside the polygon and outside its holes.

    A :class:`MultiPolygon` contains the point when any of its parts does.
    """

    pt = as_coordinate(point)
    if isinstance(polygon, MultiPolygon):
        return any(_inside_polygon(pt, part) for part in polygon.polygons)
    return _inside_polygon(pt, polygon)


def within(
    points: Iterable[PointLike], polygons: Iterable[Union[Polygon, MultiPolygon]]
) -> List[Coordinate]:
    """Return the points falling inside each polygon, polygon by polygon."""

    candidates = [as_coordinate(point) for point in points]
    found: List[Coordinate] = []
    for polygon in polygons:
        found.extend(pt for pt in candidates if inside(pt, polygon))
    return found
