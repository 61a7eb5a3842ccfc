"""Replay recorded location fixes against a directions route."""

from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

import pandas as pd

from ..config import OFF_ROUTE_THRESHOLD_KM, POLYLINE_PRECISION
from ..errors import RouteProgressError
from ..geometry.models import Coordinate
from ..navigation.models import DirectionsRoute, RouteLeg, RouteStep, StepManeuver
from ..navigation.route_utils import RouteUtils
from ..navigation.session import LocationFix, NavigationSession, ProgressUpdate

PathLike = Union[str, Path]

LOGGER = logging.getLogger(__name__)

_REQUIRED_FIX_COLUMNS = ("longitude", "latitude")


def _parse_maneuver(payload: Mapping[str, Any]) -> Optional[StepManeuver]:
    if not payload:
        return None
    location = payload.get("location")
    if not location or len(location) < 2:
        raise ValueError("Maneuver is missing a [longitude, latitude] location")
    return StepManeuver(
        location=Coordinate(longitude=float(location[0]), latitude=float(location[1])),
        bearing_before=float(payload.get("bearing_before", 0.0)),
        bearing_after=float(payload.get("bearing_after", 0.0)),
        type=str(payload.get("type", "turn")),
        modifier=payload.get("modifier"),
        instruction=str(payload.get("instruction", "")),
    )


def route_from_payload(
    payload: Mapping[str, Any], precision: int = POLYLINE_PRECISION
) -> DirectionsRoute:
    """Build a :class:`DirectionsRoute` from a directions-style mapping.

    Accepts either a route object or a full response with a ``routes`` list,
    in which case the first route is used.
    """

    if "routes" in payload:
        routes = payload.get("routes") or []
        if not routes:
            raise ValueError("Directions response contains no routes")
        payload = routes[0]
    legs: List[RouteLeg] = []
    for leg_payload in payload.get("legs") or []:
        steps = [
            RouteStep(
                geometry=str(step.get("geometry", "")),
                distance=float(step.get("distance", 0.0)),
                duration=float(step.get("duration", 0.0)),
                maneuver=_parse_maneuver(step.get("maneuver") or {}),
                name=str(step.get("name", "")),
                precision=precision,
            )
            for step in leg_payload.get("steps") or []
        ]
        legs.append(
            RouteLeg(
                steps=steps,
                distance=leg_payload.get("distance"),
                duration=leg_payload.get("duration"),
                summary=str(leg_payload.get("summary", "")),
            )
        )
    geometry = payload.get("geometry")
    return DirectionsRoute(
        legs=legs,
        distance=payload.get("distance"),
        duration=payload.get("duration"),
        geometry=geometry if isinstance(geometry, str) else None,
        precision=precision,
    )


def load_route(path: PathLike, precision: int = POLYLINE_PRECISION) -> DirectionsRoute:
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return route_from_payload(payload, precision)


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    number = float(value)
    if math.isnan(number):
        return None
    return number


def load_fixes(path: PathLike) -> List[LocationFix]:
    """Read fixes from a CSV with ``longitude,latitude[,bearing,speed]`` columns."""

    frame = pd.read_csv(path)
    frame.columns = [str(col).strip().lower() for col in frame.columns]
    missing = [col for col in _REQUIRED_FIX_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Fixes file is missing columns: {', '.join(missing)}")
    fixes: List[LocationFix] = []
    for row in frame.to_dict(orient="records"):
        fixes.append(
            LocationFix(
                coordinate=Coordinate(
                    longitude=float(row["longitude"]), latitude=float(row["latitude"])
                ),
                bearing=_optional_float(row.get("bearing")),
                speed=_optional_float(row.get("speed")),
            )
        )
    return fixes


def replay_route(
    route: DirectionsRoute,
    fixes: Sequence[LocationFix],
    *,
    off_route_threshold_km: float = OFF_ROUTE_THRESHOLD_KM,
    snap_to_route: bool = True,
) -> List[ProgressUpdate]:
    """Feed ``fixes`` through a fresh navigation session and collect the updates."""

    session = NavigationSession(
        route,
        snap_to_route=snap_to_route,
        route_utils=RouteUtils(off_route_threshold_km),
    )
    try:
        return session.replay(list(fixes))
    finally:
        session.end()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay recorded location fixes against a directions route."
    )
    parser.add_argument("route", type=Path, help="Directions route JSON file")
    parser.add_argument("fixes", type=Path, help="CSV of longitude,latitude fixes")
    parser.add_argument(
        "--threshold-km",
        type=float,
        default=OFF_ROUTE_THRESHOLD_KM,
        help=f"Off-route threshold in kilometres (default: {OFF_ROUTE_THRESHOLD_KM})",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=POLYLINE_PRECISION,
        help=f"Encoded polyline precision (default: {POLYLINE_PRECISION})",
    )
    parser.add_argument(
        "--no-snap",
        action="store_true",
        help="Report raw positions instead of positions snapped to the route",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m route_progress.tools.replay_route``."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )

    try:
        route = load_route(args.route, args.precision)
        fixes = load_fixes(args.fixes)
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to load inputs: %s", exc)
        return 1

    try:
        updates = replay_route(
            route,
            fixes,
            off_route_threshold_km=args.threshold_km,
            snap_to_route=not args.no_snap,
        )
    except RouteProgressError as exc:
        LOGGER.error("Replay failed: %s", exc)
        return 1

    for index, update in enumerate(updates):
        LOGGER.info(
            "fix=%d leg=%d step=%d remaining_step=%.1fm remaining_route=%.1fm "
            "alert=%s off_route=%s",
            index,
            update.leg_index,
            update.step_index,
            update.distance_remaining_on_step,
            update.distance_remaining_on_route,
            update.alert_level.name,
            update.off_route,
        )
    off_route_count = sum(1 for update in updates if update.off_route)
    LOGGER.info("Replayed %d fixes (%d off route)", len(updates), off_route_count)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
