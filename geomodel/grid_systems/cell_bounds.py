"""Geographic extent of geocells."""

from dataclasses import dataclass
from typing import Tuple

from shapely.geometry import Polygon, box

from ..abstractions.types import BoundingBox, InvalidArgumentError, Point
from .cell_codec import unpack_symbol
from .geometry import EAST, GRID_SIZE, MAX_RESOLUTION, NORTH, SOUTH, WEST


@dataclass(frozen=True)
class CellBounds:
    """Rectangle covered by a geocell, in degrees."""
    cell_key: str
    south: float
    west: float
    north: float
    east: float

    @property
    def polygon(self) -> Polygon:
        """Get bounds as polygon (x = longitude, y = latitude)."""
        return box(*self.as_tuple())

    @property
    def center(self) -> Point:
        return Point((self.south + self.north) / 2, (self.west + self.east) / 2)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Bounds as (minx, miny, maxx, maxy)."""
        return (self.west, self.south, self.east, self.north)

    def contains(self, point: Point) -> bool:
        """Check if point is within the cell (edges included)."""
        return (self.south <= point.latitude <= self.north and
                self.west <= point.longitude <= self.east)

    def covers(self, other: 'CellBounds') -> bool:
        """Check if another cell lies entirely inside this one."""
        return (self.south <= other.south and other.north <= self.north and
                self.west <= other.west and other.east <= self.east)

    def intersects_box(self, query: BoundingBox) -> bool:
        """Check if the cell overlaps a query box (touching counts)."""
        return self.polygon.intersects(box(query.southwest.longitude, query.southwest.latitude,
                                           query.northeast.longitude, query.northeast.latitude))


def cell_bounds(cell_key: str) -> CellBounds:
    """
    Compute the rectangle covered by a cell.

    Args:
        cell_key: Geocell key; the empty key is the whole world

    Returns:
        CellBounds for the key
    """
    if len(cell_key) > MAX_RESOLUTION:
        raise InvalidArgumentError(
            f"Cell key longer than {MAX_RESOLUTION} symbols: {cell_key!r}"
        )

    north, south, east, west = NORTH, SOUTH, EAST, WEST
    for symbol in cell_key:
        x, y = unpack_symbol(symbol)
        lat_span = (north - south) / GRID_SIZE
        lng_span = (east - west) / GRID_SIZE

        south += lat_span * y
        north = south + lat_span
        west += lng_span * x
        east = west + lng_span

    return CellBounds(cell_key=cell_key, south=south, west=west, north=north, east=east)
