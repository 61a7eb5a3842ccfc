"""Dataclasses describing a directions route as consumed by the navigation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from polyline import decode as polyline_decode
from polyline import encode as polyline_encode

from ..config import POLYLINE_PRECISION
from ..geometry.measurement import line_distance
from ..geometry.models import Coordinate
from ..geometry.units import Unit

MANEUVER_DEPART = "depart"
MANEUVER_ARRIVE = "arrive"


def decode_geometry(encoded: str, precision: int = POLYLINE_PRECISION) -> List[Coordinate]:
    """Decode an encoded polyline string into coordinates."""

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded, precision)
    except (ValueError, TypeError, IndexError) as exc:
        raise ValueError("Unable to decode polyline") from exc
    return [Coordinate.from_lat_lon(lat, lon) for lat, lon in decoded]


def encode_geometry(
    coordinates: Sequence[Coordinate], precision: int = POLYLINE_PRECISION
) -> str:
    return polyline_encode([(c.latitude, c.longitude) for c in coordinates], precision)


@dataclass(slots=True)
class StepManeuver:
    location: Coordinate
    bearing_before: float = 0.0
    bearing_after: float = 0.0
    type: str = "turn"
    modifier: Optional[str] = None
    instruction: str = ""


@dataclass(slots=True)
class RouteStep:
    """One maneuver-to-maneuver stretch of a leg.

    ``distance`` is in metres and ``duration`` in seconds, as reported by the
    directions provider.
    """

    geometry: str
    distance: float
    duration: float
    maneuver: Optional[StepManeuver] = None
    name: str = ""
    precision: int = POLYLINE_PRECISION
    _coordinates: Optional[Tuple[Coordinate, ...]] = field(
        default=None, repr=False, compare=False
    )

    @classmethod
    def from_coordinates(
        cls,
        coordinates: Sequence[Coordinate],
        *,
        distance: Optional[float] = None,
        duration: float = 0.0,
        maneuver: Optional[StepManeuver] = None,
        name: str = "",
        precision: int = POLYLINE_PRECISION,
    ) -> "RouteStep":
        """Build a step from already decoded coordinates."""

        coords = tuple(coordinates)
        if distance is None:
            distance = line_distance(coords, Unit.METERS)
        if maneuver is None and coords:
            maneuver = StepManeuver(location=coords[0])
        return cls(
            geometry=encode_geometry(coords, precision),
            distance=distance,
            duration=duration,
            maneuver=maneuver,
            name=name,
            precision=precision,
            _coordinates=coords,
        )

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        """Decoded step geometry, decoded once and cached."""

        if self._coordinates is None:
            self._coordinates = tuple(decode_geometry(self.geometry, self.precision))
        return self._coordinates

    @property
    def geometry_length(self) -> float:
        """Length of the decoded geometry in metres."""

        return line_distance(self.coordinates, Unit.METERS)


@dataclass(slots=True)
class RouteLeg:
    """Route between two consecutive waypoints."""

    steps: List[RouteStep]
    distance: Optional[float] = None
    duration: Optional[float] = None
    summary: str = ""

    def __post_init__(self) -> None:
        if self.distance is None:
            self.distance = sum(step.distance for step in self.steps)
        if self.duration is None:
            self.duration = sum(step.duration for step in self.steps)


@dataclass(slots=True)
class DirectionsRoute:
    legs: List[RouteLeg]
    distance: Optional[float] = None
    duration: Optional[float] = None
    geometry: Optional[str] = None
    precision: int = POLYLINE_PRECISION

    def __post_init__(self) -> None:
        if self.distance is None:
            self.distance = sum(leg.distance or 0.0 for leg in self.legs)
        if self.duration is None:
            self.duration = sum(leg.duration or 0.0 for leg in self.legs)

    def coordinates(self) -> List[Coordinate]:
        """Overall route geometry.

        Falls back to chaining every step's geometry when the route carries no
        overview geometry, dropping the vertex shared by consecutive steps.
        """

        if self.geometry:
            return decode_geometry(self.geometry, self.precision)
        chained: List[Coordinate] = []
        for leg in self.legs:
            for step in leg.steps:
                for coord in step.coordinates:
                    if chained and chained[-1].same_position(coord):
                        continue
                    chained.append(coord)
        return chained
