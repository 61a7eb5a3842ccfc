"""Project an arbitrary position onto a polyline."""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple, Union

from ..errors import DegenerateLineError
from .measurement import PointLike, bearing, destination, distance
from .models import Coordinate, LineString, Polyline, ProjectedPoint, as_coordinate, coordinates_of
from .units import UnitLike

LOGGER = logging.getLogger(__name__)


def line_intersects(
    line1_start: Coordinate,
    line1_end: Coordinate,
    line2_start: Coordinate,
    line2_end: Coordinate,
) -> Optional[Coordinate]:
    """Return the crossing point of two segments in planar lon/lat space.

    ``None`` means no crossing: the segments are parallel or the crossing of
    their infinite extensions lies outside the open (0, 1) range of either.
    """

    x1, y1 = line1_start.longitude, line1_start.latitude
    x2, y2 = line1_end.longitude, line1_end.latitude
    x3, y3 = line2_start.longitude, line2_start.latitude
    x4, y4 = line2_end.longitude, line2_end.latitude

    denominator = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if denominator == 0:
        return None
    a = y1 - y3
    b = x1 - x3
    numerator1 = (x4 - x3) * a - (y4 - y3) * b
    numerator2 = (x2 - x1) * a - (y2 - y1) * b
    along_line1 = numerator1 / denominator
    along_line2 = numerator2 / denominator

    if 0 < along_line1 < 1 and 0 < along_line2 < 1:
        return Coordinate(
            longitude=x1 + along_line1 * (x2 - x1),
            latitude=y1 + along_line1 * (y2 - y1),
        )
    return None


def _perpendicular_foot(
    query: Coordinate,
    start: Coordinate,
    stop: Coordinate,
    reach: float,
    units: Optional[UnitLike],
) -> Optional[Coordinate]:
    direction = bearing(start, stop)
    left = destination(query, reach, direction + 90, units)
    right = destination(query, reach, direction - 90, units)
    return line_intersects(left, right, start, stop)


def point_on_line(
    query: PointLike,
    line: Union[LineString, Polyline],
    units: Optional[UnitLike] = None,
) -> ProjectedPoint:
    """Return the point of ``line`` closest to ``query``.

    Every segment contributes its two vertices and, when it exists, the foot
    of the perpendicular dropped from ``query``. Candidates replace the best
    so far only when strictly closer, so ties go to whichever was evaluated
    first (start, then stop, then the perpendicular foot; earlier segments
    before later ones).

    Raises:
        DegenerateLineError: If ``line`` has fewer than two coordinates.
    """

    pt = as_coordinate(query)
    coords = coordinates_of(line)
    if len(coords) < 2:
        raise DegenerateLineError(
            f"Projection requires at least 2 coordinates, got {len(coords)}"
        )

    best: Tuple[Optional[Coordinate], int, float] = (None, 0, math.inf)
    for index, (start, stop) in enumerate(zip(coords, coords[1:])):
        start_dist = distance(pt, start, units)
        stop_dist = distance(pt, stop, units)
        foot = _perpendicular_foot(pt, start, stop, max(start_dist, stop_dist), units)

        candidates = [(start, start_dist), (stop, stop_dist)]
        if foot is not None:
            candidates.append((foot, distance(pt, foot, units)))
        for candidate, candidate_dist in candidates:
            if candidate_dist < best[2]:
                best = (candidate, index, candidate_dist)

    point, segment_index, best_dist = best
    if point is None:
        # Only reachable with NaN distances; fall back to the first vertex.
        point, best_dist = coords[0], distance(pt, coords[0], units)
    LOGGER.debug(
        "Projected (%.6f, %.6f) onto segment %d at distance %f",
        pt.longitude,
        pt.latitude,
        segment_index,
        best_dist,
    )
    return ProjectedPoint(
        point=point, segment_index=segment_index, distance_from_query=best_dist
    )
