"""Central configuration for the route progress engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every value can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower()


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Measurement defaults
# ---------------------------------------------------------------------------
# Unit used when callers do not pass one explicitly. Must be one of the names
# understood by route_progress.geometry.units.
DEFAULT_UNIT = _env_str("ROUTE_PROGRESS_DEFAULT_UNIT", "kilometers")

# Decimal precision of encoded step geometries. OSRM v5 responses use 5,
# Mapbox Directions v5 with geometries=polyline6 uses 6.
POLYLINE_PRECISION = _env_int("ROUTE_PROGRESS_POLYLINE_PRECISION", 6)


# ---------------------------------------------------------------------------
# Off-route detection
# ---------------------------------------------------------------------------
# Distance (kilometres) from every step of the current leg beyond which the
# user is considered off-route. 0.1 km = 100 metres.
OFF_ROUTE_THRESHOLD_KM = _env_float("ROUTE_PROGRESS_OFF_ROUTE_THRESHOLD_KM", 0.1)


# ---------------------------------------------------------------------------
# Step monitoring / alerts
# ---------------------------------------------------------------------------
# Radius (metres) around the upcoming maneuver in which a step may complete.
MANEUVER_ZONE_RADIUS_M = _env_float("ROUTE_PROGRESS_MANEUVER_ZONE_RADIUS_M", 40.0)

# Maximum difference (degrees) between the user's heading and the maneuver's
# exit bearing for the turn to count as completed.
MAX_TURN_COMPLETION_OFFSET_DEG = _env_float(
    "ROUTE_PROGRESS_MAX_TURN_COMPLETION_OFFSET_DEG", 30.0
)

# Remaining step duration (seconds) under which high / medium alerts fire.
HIGH_ALERT_INTERVAL_S = _env_float("ROUTE_PROGRESS_HIGH_ALERT_INTERVAL_S", 15.0)
MEDIUM_ALERT_INTERVAL_S = _env_float("ROUTE_PROGRESS_MEDIUM_ALERT_INTERVAL_S", 70.0)

# Steps shorter than these distances (metres) never raise the matching alert.
MIN_DISTANCE_FOR_HIGH_ALERT_M = _env_float(
    "ROUTE_PROGRESS_MIN_DISTANCE_FOR_HIGH_ALERT_M", 100.0
)
MIN_DISTANCE_FOR_MEDIUM_ALERT_M = _env_float(
    "ROUTE_PROGRESS_MIN_DISTANCE_FOR_MEDIUM_ALERT_M", 400.0
)
