"""Single-writer navigation loop feeding location fixes into :class:`RouteProgress`."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Callable, List, Optional, Tuple

from ..config import (
    HIGH_ALERT_INTERVAL_S,
    MANEUVER_ZONE_RADIUS_M,
    MAX_TURN_COMPLETION_OFFSET_DEG,
    MEDIUM_ALERT_INTERVAL_S,
    MIN_DISTANCE_FOR_HIGH_ALERT_M,
    MIN_DISTANCE_FOR_MEDIUM_ALERT_M,
)
from ..geometry.models import Coordinate
from ..geometry.units import Unit
from .models import MANEUVER_ARRIVE, DirectionsRoute, RouteStep
from .progress import AlertLevel, RouteProgress
from .route_utils import RouteUtils

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocationFix:
    """A position reported by the location provider.

    ``bearing`` is the heading in degrees and ``speed`` is in metres per
    second; either may be unknown.
    """

    coordinate: Coordinate
    bearing: Optional[float] = None
    speed: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """Snapshot of the session state after processing one fix."""

    location: Coordinate
    raw_location: Coordinate
    leg_index: int
    step_index: int
    distance_traveled: float
    distance_remaining_on_step: float
    duration_remaining_on_step: float
    distance_remaining_on_route: float
    fraction_traveled: float
    alert_level: AlertLevel
    off_route: bool


ProgressListener = Callable[[ProgressUpdate], None]
AlertLevelListener = Callable[[AlertLevel, RouteProgress], None]
OffRouteListener = Callable[[LocationFix], None]


def _wrap_degrees(value: float) -> float:
    return value % 360.0


def _angle_difference(first: float, second: float) -> float:
    diff = abs(_wrap_degrees(first) - _wrap_degrees(second))
    return min(diff, 360.0 - diff)


class NavigationSession:
    """Owns a :class:`RouteProgress` and applies location fixes one at a time.

    ``update`` may be called from any thread; fixes are processed strictly in
    sequence. Listeners run on the calling thread after the state update has
    been committed.
    """

    def __init__(
        self,
        route: DirectionsRoute,
        *,
        snap_to_route: bool = True,
        route_utils: Optional[RouteUtils] = None,
        on_progress: Optional[ProgressListener] = None,
        on_alert_level_change: Optional[AlertLevelListener] = None,
        on_off_route: Optional[OffRouteListener] = None,
    ) -> None:
        self.route_utils = route_utils or RouteUtils()
        self.progress = RouteProgress(route, self.route_utils.off_route_threshold_km)
        self.snap_to_route = snap_to_route
        self.on_progress = on_progress
        self.on_alert_level_change = on_alert_level_change
        self.on_off_route = on_off_route
        self._lock = threading.Lock()
        self._active = True
        self._off_route = False
        # Metres of steps already completed before the current one.
        self._completed_distance = 0.0
        LOGGER.info(
            "Navigation started: %d legs, %.1f m",
            len(route.legs),
            route.distance or 0.0,
        )

    @property
    def is_active(self) -> bool:
        return self._active

    def end(self) -> None:
        with self._lock:
            if self._active:
                self._active = False
                LOGGER.info(
                    "Navigation ended at leg %d step %d",
                    self.progress.leg_index,
                    self.progress.step_index,
                )

    # ------------------------------------------------------------------
    # Core method, call on every location fix
    # ------------------------------------------------------------------

    def update(self, fix: LocationFix) -> ProgressUpdate:
        """Apply ``fix`` to the route progress and notify listeners.

        Raises:
            RuntimeError: If the session has ended.
        """

        with self._lock:
            if not self._active:
                raise RuntimeError("Navigation session has ended")
            update, alert_changed = self._apply(fix)

        if alert_changed and self.on_alert_level_change is not None:
            self.on_alert_level_change(update.alert_level, self.progress)
        if update.off_route and self.on_off_route is not None:
            self.on_off_route(fix)
        if self.on_progress is not None:
            self.on_progress(update)
        return update

    def replay(self, fixes: List[LocationFix]) -> List[ProgressUpdate]:
        return [self.update(fix) for fix in fixes]

    # ------------------------------------------------------------------
    # Internals, called with the lock held
    # ------------------------------------------------------------------

    def _apply(self, fix: LocationFix) -> Tuple[ProgressUpdate, bool]:
        progress = self.progress
        position = fix.coordinate
        snapped = self.route_utils.snap_to_route(
            position, progress.current_leg, progress.step_index
        )
        alert_level = self._monitor_step_progress(fix, snapped)

        off_route = self.route_utils.is_off_route(position, progress.current_leg)
        if off_route != self._off_route:
            if off_route:
                LOGGER.warning(
                    "User off route at (%.6f, %.6f)", position.longitude, position.latitude
                )
            else:
                LOGGER.info("User back on route")
            self._off_route = off_route

        traveled_on_step = min(
            max(progress.distance_traveled_on_step, 0.0),
            progress.current_step.geometry_length,
        )
        progress.set_distance_traveled(self._completed_distance + traveled_on_step)

        alert_changed = progress.alert_level != alert_level
        if alert_changed:
            LOGGER.debug("Alert level %s -> %s", progress.alert_level.name, alert_level.name)
            progress.alert_level = alert_level

        location = snapped if self.snap_to_route and not off_route else position
        update = ProgressUpdate(
            location=location,
            raw_location=position,
            leg_index=progress.leg_index,
            step_index=progress.step_index,
            distance_traveled=progress.distance_traveled,
            distance_remaining_on_step=progress.distance_remaining_on_step,
            duration_remaining_on_step=progress.duration_remaining_on_step,
            distance_remaining_on_route=progress.distance_remaining_on_route,
            fraction_traveled=progress.fraction_traveled,
            alert_level=alert_level,
            off_route=off_route,
        )
        return update, alert_changed

    def _monitor_step_progress(self, fix: LocationFix, snapped: Coordinate) -> AlertLevel:
        progress = self.progress
        # Force an announcement when the user begins the route.
        if progress.alert_level == AlertLevel.NONE:
            alert_level = AlertLevel.DEPART
        else:
            alert_level = progress.alert_level

        remaining = self._refresh_step_remaining(snapped, fix.speed)

        if remaining <= MANEUVER_ZONE_RADIUS_M:
            upcoming = progress.upcoming_step
            maneuver_type = upcoming.maneuver.type if upcoming.maneuver else None
            if progress.is_on_final_step or (
                maneuver_type == MANEUVER_ARRIVE and self._on_final_leg()
            ):
                return AlertLevel.ARRIVE
            if maneuver_type == MANEUVER_ARRIVE:
                self._roll_over_waypoint(fix)
                return AlertLevel.ARRIVE
            if self._course_matches(fix.bearing, upcoming):
                self._complete_current_step()
                next_snapped = self.route_utils.snap_to_route(
                    fix.coordinate, progress.current_leg, progress.step_index
                )
                self._refresh_step_remaining(next_snapped, fix.speed)
                if progress.duration_remaining_on_step <= MEDIUM_ALERT_INTERVAL_S:
                    return AlertLevel.MEDIUM
                return AlertLevel.LOW
            return alert_level

        step_distance = progress.current_step.distance
        duration = progress.duration_remaining_on_step
        if duration <= HIGH_ALERT_INTERVAL_S and step_distance > MIN_DISTANCE_FOR_HIGH_ALERT_M:
            return AlertLevel.HIGH
        if (
            duration <= MEDIUM_ALERT_INTERVAL_S
            and step_distance > MIN_DISTANCE_FOR_MEDIUM_ALERT_M
        ):
            return AlertLevel.MEDIUM
        return alert_level

    def _refresh_step_remaining(self, snapped: Coordinate, speed: Optional[float]) -> float:
        progress = self.progress
        remaining = self.route_utils.distance_to_end_of_step(
            snapped, progress.current_leg, progress.step_index, Unit.METERS
        )
        progress.set_distance_remaining_on_step(remaining)
        progress.user_snap_to_step_distance_from_maneuver = remaining
        progress.set_duration_remaining_on_step(
            self._remaining_duration(progress.current_step, remaining, speed)
        )
        return remaining

    @staticmethod
    def _remaining_duration(step: RouteStep, remaining: float, speed: Optional[float]) -> float:
        if speed is not None and speed > 0:
            return remaining / speed
        # No usable speed: assume the provider's average pace for the step.
        if step.distance <= 0:
            return 0.0
        return step.duration * min(remaining / step.distance, 1.0)

    @staticmethod
    def _course_matches(user_bearing: Optional[float], upcoming: RouteStep) -> bool:
        if user_bearing is None or upcoming.maneuver is None:
            return True
        offset = _angle_difference(upcoming.maneuver.bearing_after, user_bearing)
        return offset <= MAX_TURN_COMPLETION_OFFSET_DEG

    def _on_final_leg(self) -> bool:
        return self.progress.leg_index == len(self.progress.route.legs) - 1

    def _roll_over_waypoint(self, fix: LocationFix) -> None:
        """Complete the current leg at an intermediate waypoint and start the next."""

        progress = self.progress
        leg_index = progress.leg_index
        self._complete_current_step()
        # Skip the leg's arrive step(s); a heading check does not apply here.
        while (
            progress.leg_index == leg_index
            and not progress.is_on_final_step
            and progress.current_step.maneuver is not None
            and progress.current_step.maneuver.type == MANEUVER_ARRIVE
        ):
            self._complete_current_step()
        LOGGER.info("Reached waypoint %d; now on leg %d", leg_index + 1, progress.leg_index)
        snapped = self.route_utils.snap_to_route(
            fix.coordinate, progress.current_leg, progress.step_index
        )
        self._refresh_step_remaining(snapped, fix.speed)

    def _complete_current_step(self) -> None:
        progress = self.progress
        if progress.is_on_final_step:
            return
        self._completed_distance += progress.current_step.distance
        progress.advance_to_next_step()
