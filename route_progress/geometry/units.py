"""Distance unit conversion through a common radians pivot.

Factors express how many units span one radian of arc on a sphere with
radius 6373 km.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from ..config import DEFAULT_UNIT
from ..errors import InvalidDistanceError, InvalidUnitError

LOGGER = logging.getLogger(__name__)


class Unit(str, Enum):
    MILES = "miles"
    NAUTICAL_MILES = "nauticalmiles"
    KILOMETERS = "kilometers"
    METERS = "meters"
    CENTIMETERS = "centimeters"
    FEET = "feet"
    YARDS = "yards"
    INCHES = "inches"
    DEGREES = "degrees"
    RADIANS = "radians"


UnitLike = Union[Unit, str]

FACTORS: Mapping[Unit, float] = MappingProxyType(
    {
        Unit.MILES: 3960.0,
        Unit.NAUTICAL_MILES: 3441.145,
        Unit.KILOMETERS: 6373.0,
        Unit.METERS: 6373000.0,
        Unit.CENTIMETERS: 6.373e8,
        Unit.FEET: 20908792.65,
        Unit.YARDS: 6969600.0,
        Unit.INCHES: 250905600.0,
        Unit.DEGREES: 57.2957795,
        Unit.RADIANS: 1.0,
    }
)

_ALIASES: Mapping[str, Unit] = MappingProxyType(
    {
        "kilometres": Unit.KILOMETERS,
        "metres": Unit.METERS,
        "centimetres": Unit.CENTIMETERS,
    }
)


def parse_unit(unit: Optional[UnitLike]) -> Unit:
    """Return the :class:`Unit` for ``unit``; ``None`` selects the default."""

    if unit is None:
        return DEFAULT
    if isinstance(unit, Unit):
        return unit
    name = str(unit).strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return Unit(name)
    except ValueError:
        raise InvalidUnitError(f"Unknown distance unit: {unit!r}") from None


def _resolve_default(name: str) -> Unit:
    try:
        return parse_unit(name)
    except InvalidUnitError:
        LOGGER.warning(
            "Ignoring unknown default unit %r; using %s", name, Unit.KILOMETERS.value
        )
        return Unit.KILOMETERS


DEFAULT = _resolve_default(DEFAULT_UNIT)


def to_radians_factor(unit: Optional[UnitLike]) -> float:
    return FACTORS[parse_unit(unit)]


def radians_to_distance(radians: float, unit: Optional[UnitLike] = None) -> float:
    """Convert a (possibly signed) angular distance into ``unit``."""

    return radians * to_radians_factor(unit)


def distance_to_radians(distance: float, unit: Optional[UnitLike] = None) -> float:
    """Convert a (possibly signed) distance in ``unit`` into radians."""

    return distance / to_radians_factor(unit)


def distance_to_degrees(distance: float, unit: Optional[UnitLike] = None) -> float:
    return radians_to_degrees(distance_to_radians(distance, unit))


def degrees_to_radians(degrees: float) -> float:
    return math.radians(math.fmod(degrees, 360.0))


def radians_to_degrees(radians: float) -> float:
    return math.degrees(math.fmod(radians, 2 * math.pi))


def convert_distance(
    distance: float,
    from_unit: UnitLike,
    to_unit: Optional[UnitLike] = None,
) -> float:
    """Convert ``distance`` between units.

    Args:
        distance: Non-negative distance expressed in ``from_unit``.
        from_unit: Unit of the input value.
        to_unit: Target unit; defaults to the configured default unit.

    Returns:
        The distance expressed in ``to_unit``.

    Raises:
        InvalidDistanceError: If ``distance`` is negative.
        InvalidUnitError: If either unit is unknown.
    """

    if distance < 0:
        raise InvalidDistanceError(f"Distance must be non-negative, got {distance}")
    return radians_to_distance(distance_to_radians(distance, from_unit), to_unit)
