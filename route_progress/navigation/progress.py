"""Mutable progress state of a user along a directions route."""

from __future__ import annotations

import logging
from enum import IntEnum

from ..config import OFF_ROUTE_THRESHOLD_KM
from ..errors import EmptyRouteError, StepIndexOutOfRangeError
from .models import DirectionsRoute, RouteLeg, RouteStep

LOGGER = logging.getLogger(__name__)


class AlertLevel(IntEnum):
    NONE = 0
    DEPART = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4
    ARRIVE = 5


class RouteProgress:
    """Leg/step position and distances for one navigation session.

    Instances have a single owner which applies updates one fix at a time;
    the object performs no locking of its own. Distances are in metres and
    durations in seconds.
    """

    def __init__(
        self,
        route: DirectionsRoute,
        off_route_threshold_km: float = OFF_ROUTE_THRESHOLD_KM,
    ) -> None:
        if route is None or not route.legs:
            raise EmptyRouteError("The provided route is empty.")
        if any(not leg.steps for leg in route.legs):
            raise EmptyRouteError("The provided route has a leg without steps.")
        self.route = route
        self.off_route_threshold_km = off_route_threshold_km
        self.leg_index = 0
        self.step_index = 0
        self.distance_traveled = 0.0
        self.distance_remaining_on_step = 0.0
        self.duration_remaining_on_step = 0.0
        self.user_snap_to_step_distance_from_maneuver = 0.0
        self.alert_level = AlertLevel.NONE

    # ------------------------------------------------------------------
    # Route
    # ------------------------------------------------------------------

    @property
    def fraction_traveled(self) -> float:
        """Share of the route distance travelled, between 0 and 1."""

        total = self.route.distance or 0.0
        if total == 0:
            return 0.0
        fraction = self.distance_traveled / total
        LOGGER.debug("fraction %f", fraction)
        return fraction

    @property
    def distance_remaining_on_route(self) -> float:
        return (self.route.distance or 0.0) - self.distance_traveled

    # ------------------------------------------------------------------
    # Leg / step lookups
    # ------------------------------------------------------------------

    @property
    def current_leg(self) -> RouteLeg:
        return self.route.legs[self.leg_index]

    @property
    def current_step(self) -> RouteStep:
        return self.current_leg.steps[self.step_index]

    @property
    def upcoming_step(self) -> RouteStep:
        """Step after the current one, crossing into the next leg if needed.

        On the final step of the final leg the current step is returned.
        """

        steps = self.current_leg.steps
        if self.step_index + 1 < len(steps):
            return steps[self.step_index + 1]
        if self.leg_index + 1 < len(self.route.legs):
            return self.route.legs[self.leg_index + 1].steps[0]
        return self.current_step

    @property
    def is_on_final_step(self) -> bool:
        return (
            self.leg_index == len(self.route.legs) - 1
            and self.step_index == len(self.current_leg.steps) - 1
        )

    @property
    def distance_traveled_on_step(self) -> float:
        """Metres covered on the current step, measured along its geometry."""

        return self.current_step.geometry_length - self.distance_remaining_on_step

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def advance_to_next_step(self) -> RouteStep:
        """Move to the next step, rolling over into the next leg.

        Calling this on the final step of the final leg changes nothing.
        """

        if self.step_index + 1 < len(self.current_leg.steps):
            self.step_index += 1
        elif self.leg_index + 1 < len(self.route.legs):
            self.leg_index += 1
            self.step_index = 0
        else:
            LOGGER.debug("Already on the final step; staying put")
            return self.current_step
        LOGGER.info("Advanced to leg %d step %d", self.leg_index, self.step_index)
        return self.current_step

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_leg_index(self, leg_index: int) -> None:
        if leg_index < 0 or leg_index >= len(self.route.legs):
            raise StepIndexOutOfRangeError(
                f"The provided route doesn't have so many legs ({leg_index})."
            )
        self.leg_index = leg_index
        if self.step_index >= len(self.current_leg.steps):
            self.step_index = 0

    def set_step_index(self, step_index: int) -> None:
        if step_index < 0 or step_index >= len(self.current_leg.steps):
            raise StepIndexOutOfRangeError(
                f"The provided route doesn't have so many steps ({step_index})."
            )
        self.step_index = step_index

    def set_distance_traveled(self, distance_traveled: float) -> None:
        self.distance_traveled = distance_traveled

    def set_distance_remaining_on_step(self, distance_remaining: float) -> None:
        self.distance_remaining_on_step = distance_remaining

    def set_duration_remaining_on_step(self, duration_remaining: float) -> None:
        self.duration_remaining_on_step = duration_remaining
