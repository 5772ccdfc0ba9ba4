"""Base record type for geocell-indexed models."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..abstractions.types import InvalidArgumentError, Point
from ..grid_systems import encode_all, point_from_text
from .serialization import GeocellFormat, StoredCell, serialize_cell


@dataclass
class GeoModel:
    """
    Record with a location and the geocells derived from it.

    Subclass as a dataclass to add attributes; every added field needs a
    default. `geocells` holds one stored cell per resolution 1..7 and is
    refreshed by the store before every save.

    Example:
        @dataclass
        class Place(GeoModel):
            name: str = ''

        place = Place(location="38.7,-9.1", name="Lisbon")
    """
    location: Optional[Union[Point, str]] = None
    geocells: List[StoredCell] = field(default_factory=list)
    record_id: Optional[str] = None

    @property
    def point(self) -> Optional[Point]:
        """Location as a Point, parsing "lat,lng" strings."""
        if self.location is None or isinstance(self.location, Point):
            return self.location
        if isinstance(self.location, str):
            return point_from_text(self.location)
        raise InvalidArgumentError(
            f"Location must be a Point or 'lat,lng' string, got: {type(self.location).__name__}"
        )

    def update_geocells(self, fmt: GeocellFormat = GeocellFormat.KEY):
        """Update geocells based on the current location."""
        point = self.point
        if point is None:
            self.geocells = []
        else:
            self.geocells = [serialize_cell(key, fmt) for key in encode_all(point)]

    def before_save(self, fmt: GeocellFormat = GeocellFormat.KEY):
        """Normalise the location and refresh geocells prior to storage."""
        if self.location is not None:
            self.location = self.point
        self.update_geocells(fmt)
