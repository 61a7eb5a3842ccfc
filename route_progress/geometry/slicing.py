"""Cut sub-lines out of a polyline."""

from __future__ import annotations

from typing import List, Optional, Union

from ..errors import DegenerateLineError, InvalidDistanceError, NotALineStringError
from .measurement import PointLike, bearing, destination, distance
from .models import Coordinate, Geometry, GeometryKind, LineString, Polyline
from .projection import point_on_line
from .units import UnitLike


def _line_coordinates(line: Union[Geometry, Polyline]) -> tuple[Coordinate, ...]:
    kind = getattr(line, "kind", None)
    if kind is not None and kind is not GeometryKind.LINE_STRING:
        raise NotALineStringError(f"Input must be a LineString, given {kind.value}")
    if isinstance(line, LineString):
        coords = line.coordinates
    else:
        coords = tuple(line)
    if len(coords) < 2:
        raise DegenerateLineError(
            f"Slicing requires a line of at least 2 coordinates, got {len(coords)}"
        )
    return coords


def line_slice(
    start: PointLike, stop: PointLike, line: Union[Geometry, Polyline]
) -> LineString:
    """Return the part of ``line`` between the projections of two positions.

    The snapped ends are ordered along the line by segment index; when both
    fall on the same segment the given order is kept.

    Raises:
        NotALineStringError: If ``line`` is a geometry of another kind.
        DegenerateLineError: If ``line`` has fewer than two coordinates.
    """

    coords = _line_coordinates(line)
    start_vertex = point_on_line(start, coords)
    stop_vertex = point_on_line(stop, coords)
    if start_vertex.segment_index <= stop_vertex.segment_index:
        first, second = start_vertex, stop_vertex
    else:
        first, second = stop_vertex, start_vertex

    points: List[Coordinate] = [first.point]
    points.extend(coords[first.segment_index + 1 : second.segment_index + 1])
    points.append(second.point)
    return LineString(points)


def line_slice_along(
    line: Union[Geometry, Polyline],
    start_distance: float,
    stop_distance: float,
    units: Optional[UnitLike] = None,
) -> LineString:
    """Return the part of ``line`` between two distances travelled from its start."""

    coords = _line_coordinates(line)
    if start_distance < 0 or stop_distance < 0:
        raise InvalidDistanceError("Slice distances must be non-negative")
    if start_distance == stop_distance:
        raise ValueError("Start and stop distance cannot equal each other")

    def _interpolate(index: int, overshot: float) -> Coordinate:
        if overshot == 0:
            return coords[index]
        return destination(
            coords[index], overshot, bearing(coords[index], coords[index - 1]), units
        )

    sliced: List[Coordinate] = []
    travelled = 0.0
    for index, coord in enumerate(coords):
        if start_distance >= travelled and index == len(coords) - 1:
            break
        if travelled > start_distance and not sliced:
            sliced.append(_interpolate(index, travelled - start_distance))
        if travelled >= stop_distance:
            sliced.append(_interpolate(index, travelled - stop_distance))
            return LineString(sliced)
        if travelled >= start_distance:
            sliced.append(coord)
        if index == len(coords) - 1:
            return LineString(sliced)
        travelled += distance(coord, coords[index + 1], units)

    if travelled < start_distance:
        raise InvalidDistanceError("Start position is beyond the end of the line")
    return LineString(sliced)
