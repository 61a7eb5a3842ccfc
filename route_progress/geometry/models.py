"""Value types describing coordinates and geometries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Sequence, Tuple, Union

from ..errors import InvalidRingError


class GeometryKind(str, Enum):
    """Tag identifying the shape of a geometry value."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A longitude/latitude position in decimal degrees."""

    longitude: float
    latitude: float
    altitude: Optional[float] = None

    @classmethod
    def from_lat_lon(cls, latitude: float, longitude: float) -> "Coordinate":
        """Build a coordinate from ``(lat, lon)`` ordered values."""

        return cls(longitude=float(longitude), latitude=float(latitude))

    def same_position(self, other: "Coordinate") -> bool:
        """Return True when both coordinates share longitude and latitude."""

        return self.longitude == other.longitude and self.latitude == other.latitude


Polyline = Sequence[Coordinate]
Ring = Sequence[Coordinate]
# (west, south, east, north)
BoundingBox = Tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class Point:
    coordinate: Coordinate
    kind: ClassVar[GeometryKind] = GeometryKind.POINT


@dataclass(frozen=True, slots=True)
class LineString:
    """An ordered path of coordinates."""

    coordinates: Tuple[Coordinate, ...]
    kind: ClassVar[GeometryKind] = GeometryKind.LINE_STRING

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(self.coordinates))

    def __len__(self) -> int:
        return len(self.coordinates)


def _validate_ring(ring: Tuple[Coordinate, ...], label: str) -> None:
    if len(ring) < 4:
        raise InvalidRingError(
            f"{label} ring needs at least 4 positions, got {len(ring)}"
        )
    if not ring[0].same_position(ring[-1]):
        raise InvalidRingError(f"{label} ring must start and end on the same position")


@dataclass(frozen=True, slots=True)
class Polygon:
    """An outer ring with optional holes; every ring must be closed."""

    outer: Tuple[Coordinate, ...]
    holes: Tuple[Tuple[Coordinate, ...], ...] = field(default_factory=tuple)
    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    def __post_init__(self) -> None:
        outer = tuple(self.outer)
        holes = tuple(tuple(hole) for hole in self.holes)
        _validate_ring(outer, "Outer")
        for hole in holes:
            _validate_ring(hole, "Hole")
        object.__setattr__(self, "outer", outer)
        object.__setattr__(self, "holes", holes)

    @property
    def rings(self) -> Tuple[Tuple[Coordinate, ...], ...]:
        return (self.outer,) + self.holes


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    polygons: Tuple[Polygon, ...]
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))


Geometry = Union[Point, LineString, Polygon, MultiPolygon]


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """Closest point on a line to a query position.

    ``segment_index`` is ``i`` for the segment ``[i, i + 1]`` the point lies
    on, including the case where it coincides with either vertex.
    """

    point: Coordinate
    segment_index: int
    distance_from_query: float


def as_coordinate(value: Union[Coordinate, Point]) -> Coordinate:
    """Return the coordinate wrapped by ``value``."""

    if isinstance(value, Point):
        return value.coordinate
    return value


def coordinates_of(line: Union[LineString, Polyline]) -> Tuple[Coordinate, ...]:
    """Return the coordinates of a line given as geometry or plain sequence."""

    if isinstance(line, LineString):
        return line.coordinates
    return tuple(line)
