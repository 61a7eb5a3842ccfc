"""Route matching and progress tracking built on the geometry kernel."""

from .models import DirectionsRoute, RouteLeg, RouteStep, StepManeuver, decode_geometry, encode_geometry
from .route_utils import RouteUtils, validate_step
from .progress import AlertLevel, RouteProgress
from .session import LocationFix, NavigationSession, ProgressUpdate

__all__ = [
    "DirectionsRoute",
    "RouteLeg",
    "RouteStep",
    "StepManeuver",
    "decode_geometry",
    "encode_geometry",
    "RouteUtils",
    "validate_step",
    "AlertLevel",
    "RouteProgress",
    "LocationFix",
    "NavigationSession",
    "ProgressUpdate",
]
