"""Per-step distance and off-route queries for a route leg."""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..config import OFF_ROUTE_THRESHOLD_KM
from ..errors import EmptyRouteError, StepIndexOutOfRangeError
from ..geometry.measurement import PointLike, distance, line_distance
from ..geometry.models import Coordinate, as_coordinate
from ..geometry.projection import point_on_line
from ..geometry.slicing import line_slice
from ..geometry.units import Unit, UnitLike
from .models import DirectionsRoute, RouteLeg, RouteStep

LOGGER = logging.getLogger(__name__)


def validate_step(leg: Optional[RouteLeg], step_index: int) -> RouteStep:
    """Return ``leg.steps[step_index]`` or raise a descriptive error."""

    if leg is None:
        raise EmptyRouteError("The provided route is empty.")
    if not leg.steps:
        raise EmptyRouteError("The provided route has an empty set of steps.")
    if step_index < 0 or step_index >= len(leg.steps):
        raise StepIndexOutOfRangeError(
            f"The provided route doesn't have so many steps ({step_index})."
        )
    return leg.steps[step_index]


class RouteUtils:
    """Relate a position to the steps of a route leg.

    ``off_route_threshold_km`` is the largest distance from a step at which a
    position still counts as being on that step. Distances are returned in
    kilometres unless a unit is given.
    """

    def __init__(self, off_route_threshold_km: float = OFF_ROUTE_THRESHOLD_KM) -> None:
        self.off_route_threshold_km = off_route_threshold_km

    def snap_to_route(
        self, position: PointLike, leg: Optional[RouteLeg], step_index: int
    ) -> Coordinate:
        """Return the point of the step geometry closest to ``position``."""

        step = validate_step(leg, step_index)
        coords = step.coordinates
        # Nothing to project onto.
        if len(coords) == 1:
            return coords[0]
        return point_on_line(position, coords).point

    def distance_to_step(
        self,
        position: PointLike,
        leg: Optional[RouteLeg],
        step_index: int,
        units: Optional[UnitLike] = None,
    ) -> float:
        closest = self.snap_to_route(position, leg, step_index)
        return distance(position, closest, units)

    def is_in_step(
        self, position: PointLike, leg: Optional[RouteLeg], step_index: int
    ) -> bool:
        step_distance = self.distance_to_step(
            position, leg, step_index, Unit.KILOMETERS
        )
        return step_distance <= self.off_route_threshold_km

    def is_off_route(self, position: PointLike, leg: Optional[RouteLeg]) -> bool:
        """Return True when no step of ``leg`` is within the threshold."""

        validate_step(leg, 0)
        for step_index in range(len(leg.steps)):
            if self.is_in_step(position, leg, step_index):
                return False
        return True

    def closest_step(self, position: PointLike, leg: Optional[RouteLeg]) -> int:
        """Return the index of the step nearest to ``position``.

        Ties go to the later step in the leg.
        """

        validate_step(leg, 0)
        min_distance = math.inf
        closest_index = 0
        for step_index in range(len(leg.steps)):
            step_distance = self.distance_to_step(position, leg, step_index)
            if step_distance <= min_distance:
                min_distance = step_distance
                closest_index = step_index
        return closest_index

    def distance_to_end_of_step(
        self,
        position: PointLike,
        leg: Optional[RouteLeg],
        step_index: int,
        units: Optional[UnitLike] = None,
    ) -> float:
        """Distance along the step from the snapped position to its last vertex."""

        step = validate_step(leg, step_index)
        coords = step.coordinates
        if len(coords) < 2:
            return 0.0
        snapped = point_on_line(position, coords).point
        remaining = line_slice(snapped, coords[-1], coords)
        return line_distance(remaining, units)

    def distance_to_end_of_route(
        self,
        position: PointLike,
        route: Optional[DirectionsRoute],
        units: Optional[UnitLike] = None,
    ) -> float:
        """Distance along the whole route from the snapped position to its end."""

        if route is None or not route.legs:
            raise EmptyRouteError("The provided route is empty.")
        coords = route.coordinates()
        if not coords:
            raise EmptyRouteError("The provided route has no geometry.")
        if len(coords) < 2:
            return 0.0
        remaining = line_slice(as_coordinate(position), coords[-1], coords)
        LOGGER.debug("Remaining route has %d vertices", len(remaining))
        return line_distance(remaining, units)
