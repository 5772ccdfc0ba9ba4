# geomodel/abstractions/types/geo_types.py
"""Geographic value types shared by the geocell index and the record layer."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


# Exception classes for geocell operations
class GeocellError(Exception):
    """Base geocell error."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class InvalidArgumentError(GeocellError, ValueError):
    """Raised when an operation receives an argument outside its domain."""
    pass


class InvalidCoordinateError(InvalidArgumentError):
    """Raised when a latitude or longitude is outside the world bounds."""
    pass


class ParseError(GeocellError, ValueError):
    """Raised when a textual point cannot be parsed."""
    pass


class UnsupportedQueryError(GeocellError):
    """Raised when a bounding box cannot be answered by the geocell index."""
    pass


@dataclass(frozen=True)
class Point:
    """Immutable latitude/longitude pair in degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        lat, lng = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinateError(f"Coordinates must be finite, got: ({lat}, {lng})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude must be in [-90, 90], got: {lat}")
        if not -180.0 <= lng <= 180.0:
            raise InvalidCoordinateError(f"Longitude must be in [-180, 180], got: {lng}")

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class BoundingBox:
    """
    Query rectangle given by its southwest and northeast corners.

    No ordering is enforced between the corners; inverted boxes are a
    defined degenerate case for the query path.
    """
    southwest: Point
    northeast: Point

    @property
    def lat_span(self) -> float:
        return self.northeast.latitude - self.southwest.latitude

    @property
    def lng_span(self) -> float:
        return self.northeast.longitude - self.southwest.longitude

    def contains(self, point: Point) -> bool:
        """Check if point is within the box (edges included)."""
        return (self.southwest.latitude <= point.latitude <= self.northeast.latitude and
                self.southwest.longitude <= point.longitude <= self.northeast.longitude)

    @classmethod
    def from_text(cls, southwest: str, northeast: str) -> 'BoundingBox':
        """Build a box from two "lat,lng" strings."""
        # Local import keeps the types module free of codec dependencies
        from ...grid_systems.cell_codec import point_from_text
        return cls(point_from_text(southwest), point_from_text(northeast))


@dataclass(frozen=True)
class GridIndex:
    """Absolute (row, column) position on the finest-resolution grid."""
    row: int
    column: int

    def is_origin(self) -> bool:
        return self.row == 0 and self.column == 0


@dataclass(frozen=True)
class CellSize:
    """Angular size of one cell at a given resolution, in degrees."""
    lat_span: float
    lng_span: float
