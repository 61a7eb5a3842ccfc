"""Central error types used across the package."""

from __future__ import annotations


class RouteProgressError(ValueError):
    """Base error for invalid geometry or route input."""


class InvalidUnitError(RouteProgressError):
    """Raised when a distance unit name is not in the conversion table."""


class InvalidDistanceError(RouteProgressError):
    """Raised when a negative distance is passed to a public conversion call."""


class DegenerateLineError(RouteProgressError):
    """Raised when a line has fewer than two coordinates."""


class NotALineStringError(RouteProgressError):
    """Raised when a line operation receives a geometry of another kind."""


class InvalidRingError(RouteProgressError):
    """Raised when a polygon ring is not closed or has too few positions."""


class StepIndexOutOfRangeError(RouteProgressError, IndexError):
    """Raised when a leg or step index does not exist in the route."""


class EmptyRouteError(RouteProgressError):
    """Raised when a route or leg is missing or carries no steps."""


__all__ = [
    "RouteProgressError",
    "InvalidUnitError",
    "InvalidDistanceError",
    "DegenerateLineError",
    "NotALineStringError",
    "InvalidRingError",
    "StepIndexOutOfRangeError",
    "EmptyRouteError",
]
