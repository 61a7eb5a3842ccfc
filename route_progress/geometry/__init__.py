"""Geometry kernel: units, great-circle measurement, projection, slicing and containment."""

from .models import (
    BoundingBox,
    Coordinate,
    Geometry,
    GeometryKind,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
    Polyline,
    ProjectedPoint,
    Ring,
)
from .units import Unit, convert_distance, distance_to_radians, radians_to_distance, to_radians_factor
from .measurement import (
    along,
    bbox,
    bearing,
    cumulative_distances,
    destination,
    distance,
    line_distance,
    midpoint,
)
from .projection import line_intersects, point_on_line
from .slicing import line_slice, line_slice_along
from .containment import in_ring, inside, within

__all__ = [
    "BoundingBox",
    "Coordinate",
    "Geometry",
    "GeometryKind",
    "LineString",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Polyline",
    "ProjectedPoint",
    "Ring",
    "Unit",
    "convert_distance",
    "distance_to_radians",
    "radians_to_distance",
    "to_radians_factor",
    "along",
    "bbox",
    "bearing",
    "cumulative_distances",
    "destination",
    "distance",
    "line_distance",
    "midpoint",
    "line_intersects",
    "point_on_line",
    "line_slice",
    "line_slice_along",
    "in_ring",
    "inside",
    "within",
]
