"""Geospatial measurement primitives and route progress tracking."""

from .errors import (
    DegenerateLineError,
    EmptyRouteError,
    InvalidDistanceError,
    InvalidRingError,
    InvalidUnitError,
    NotALineStringError,
    RouteProgressError,
    StepIndexOutOfRangeError,
)
from .geometry import (
    Coordinate,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
    ProjectedPoint,
    Unit,
    bearing,
    convert_distance,
    destination,
    distance,
    in_ring,
    inside,
    line_slice,
    point_on_line,
)
from .navigation import (
    AlertLevel,
    DirectionsRoute,
    LocationFix,
    NavigationSession,
    RouteLeg,
    RouteProgress,
    RouteStep,
    RouteUtils,
    StepManeuver,
)

__all__ = [
    "DegenerateLineError",
    "EmptyRouteError",
    "InvalidDistanceError",
    "InvalidRingError",
    "InvalidUnitError",
    "NotALineStringError",
    "RouteProgressError",
    "StepIndexOutOfRangeError",
    "Coordinate",
    "LineString",
    "MultiPolygon",
    "Point",
    "Polygon",
    "ProjectedPoint",
    "Unit",
    "bearing",
    "convert_distance",
    "destination",
    "distance",
    "in_ring",
    "inside",
    "line_slice",
    "point_on_line",
    "AlertLevel",
    "DirectionsRoute",
    "LocationFix",
    "NavigationSession",
    "RouteLeg",
    "RouteProgress",
    "RouteStep",
    "RouteUtils",
    "StepManeuver",
]
