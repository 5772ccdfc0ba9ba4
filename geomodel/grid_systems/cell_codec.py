"""
Point <-> geocell key encoding.

A geocell key is a string with one symbol per quadtree level. At every level
the current box is split into a 4x4 grid and the symbol records which
sub-cell the point falls into. Each symbol packs one base-4 column digit (x)
and one base-4 row digit (y):

    bit 3: row high bit     bit 2: column high bit
    bit 1: row low bit      bit 0: column low bit

so that, for example, the top-level split of the world reads (north up):

    a b e f
    8 9 c d
    2 3 6 7
    0 1 4 5
"""

import logging
import math
from typing import List, Sequence, Tuple, Union

import numpy as np

from ..abstractions.types import (
    GridIndex, InvalidArgumentError, InvalidCoordinateError, ParseError, Point
)
from .geometry import (
    ALPHABET, EAST, GRID_CELLS, GRID_SIZE, MAX_RESOLUTION, NORTH, SOUTH, WEST,
    validate_resolution
)

logger = logging.getLogger(__name__)

_SYMBOL_INDEX = {symbol: i for i, symbol in enumerate(ALPHABET)}
_SYMBOL_ARRAY = np.array(list(ALPHABET))


def pack_symbol(x: int, y: int) -> str:
    """
    Get the alphabet symbol for local grid position (x, y).

    Args:
        x: Column digit in [0, 3]
        y: Row digit in [0, 3]

    Returns:
        Single-character symbol
    """
    if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
        raise InvalidArgumentError(f"Grid position out of range: ({x}, {y})")
    return ALPHABET[(y & 2) << 2 | (x & 2) << 1 | (y & 1) << 1 | (x & 1)]


def unpack_symbol(symbol: str) -> Tuple[int, int]:
    """
    Get the local grid position (x, y) for an alphabet symbol.

    Args:
        symbol: Single-character symbol

    Returns:
        (column digit, row digit)
    """
    idx = _SYMBOL_INDEX.get(symbol)
    if idx is None:
        raise InvalidArgumentError(f"Invalid geocell symbol: {symbol!r}")
    return ((idx & 4) >> 1 | (idx & 1),
            (idx & 8) >> 2 | (idx & 2) >> 1)


def encode(point: Point, resolution: int = MAX_RESOLUTION) -> str:
    """
    Calculate the geocell key containing point.

    Sub-cell digits are clamped to [0, GRID_SIZE - 1]: points on the north
    or east edge go to the last row/column so that lat=90 and lng=180 stay
    inside the grid, and points that rounding puts just below a box edge
    go to its first row/column.

    Args:
        point: Point to encode
        resolution: Key length; 0 gives the empty (whole world) key

    Returns:
        Cell key of exactly `resolution` symbols
    """
    validate_resolution(resolution, allow_zero=True)
    lat, lng = point.latitude, point.longitude
    north, south, east, west = NORTH, SOUTH, EAST, WEST

    cell = []
    while len(cell) < resolution:
        lat_span = (north - south) / GRID_SIZE
        lng_span = (east - west) / GRID_SIZE

        # Rounding can leave the point just outside the current box
        x = max(0, min(math.floor(GRID_SIZE * (lng - west) / (east - west)), GRID_SIZE - 1))
        y = max(0, min(math.floor(GRID_SIZE * (lat - south) / (north - south)), GRID_SIZE - 1))
        cell.append(pack_symbol(x, y))

        south += lat_span * y
        north = south + lat_span
        west += lng_span * x
        east = west + lng_span

    return ''.join(cell)


def encode_all(point: Point) -> List[str]:
    """Get the keys for point at every resolution from 1 to MAX_RESOLUTION."""
    full_key = encode(point, MAX_RESOLUTION)
    # Coarser keys are prefixes of the finest one
    return [full_key[:res] for res in range(1, MAX_RESOLUTION + 1)]


def encode_many(latitudes: Union[Sequence[float], np.ndarray],
                longitudes: Union[Sequence[float], np.ndarray],
                resolution: int = MAX_RESOLUTION) -> np.ndarray:
    """
    Vectorised encode for bulk indexing.

    Args:
        latitudes: Latitudes in degrees
        longitudes: Longitudes in degrees, same shape as latitudes
        resolution: Key length

    Returns:
        Array of cell keys with the input shape
    """
    validate_resolution(resolution, allow_zero=True)
    lat = np.asarray(latitudes, dtype=np.float64)
    lng = np.asarray(longitudes, dtype=np.float64)

    if lat.shape != lng.shape:
        raise InvalidArgumentError(
            f"Latitude and longitude shapes differ: {lat.shape} vs {lng.shape}"
        )
    if not (np.all(np.isfinite(lat)) and np.all(np.isfinite(lng))):
        raise InvalidCoordinateError("Coordinates must be finite")
    if np.any((lat < SOUTH) | (lat > NORTH)) or np.any((lng < WEST) | (lng > EAST)):
        raise InvalidCoordinateError("Coordinates outside world bounds")

    north = np.full(lat.shape, NORTH)
    south = np.full(lat.shape, SOUTH)
    east = np.full(lat.shape, EAST)
    west = np.full(lat.shape, WEST)
    keys = np.full(lat.shape, '', dtype=f'<U{max(resolution, 1)}')

    for _ in range(resolution):
        lat_span = (north - south) / GRID_SIZE
        lng_span = (east - west) / GRID_SIZE

        x = np.clip(np.floor(GRID_SIZE * (lng - west) / (east - west)), 0, GRID_SIZE - 1).astype(np.int64)
        y = np.clip(np.floor(GRID_SIZE * (lat - south) / (north - south)), 0, GRID_SIZE - 1).astype(np.int64)
        packed = (y & 2) << 2 | (x & 2) << 1 | (y & 1) << 1 | (x & 1)
        keys = np.char.add(keys, _SYMBOL_ARRAY[packed])

        south = south + lat_span * y
        north = south + lat_span
        west = west + lng_span * x
        east = west + lng_span

    logger.debug(f"Encoded {lat.size} points at resolution {resolution}")
    return keys


def decode(cell_key: str) -> GridIndex:
    """
    Get the finest-grid index of a cell's southwest corner.

    Keys shorter than MAX_RESOLUTION are treated as if padded with zero
    digits, so a coarse key maps to the first fine cell it contains.

    Args:
        cell_key: Geocell key

    Returns:
        GridIndex of the cell
    """
    if not isinstance(cell_key, str):
        raise InvalidArgumentError(f"Cell key must be a string, got: {type(cell_key).__name__}")
    if len(cell_key) > MAX_RESOLUTION:
        raise InvalidArgumentError(
            f"Cell key longer than {MAX_RESOLUTION} symbols: {cell_key!r}"
        )

    row = column = 0
    for i, symbol in enumerate(cell_key, start=1):
        x, y = unpack_symbol(symbol)
        multiplier = GRID_SIZE ** (MAX_RESOLUTION - i)
        column += x * multiplier
        row += y * multiplier
    return GridIndex(row=row, column=column)


def index_to_key(index: GridIndex, resolution: int = MAX_RESOLUTION) -> str:
    """
    Get the key of the cell containing a finest-grid index.

    Always emits exactly `resolution` symbols, zero levels included.

    Args:
        index: Finest-grid position
        resolution: Length of the returned key

    Returns:
        Cell key
    """
    validate_resolution(resolution, allow_zero=True)
    row, column = index.row, index.column
    if not (0 <= row < GRID_CELLS and 0 <= column < GRID_CELLS):
        raise InvalidArgumentError(f"Grid index outside the grid: ({row}, {column})")

    cell = []
    for i in range(1, resolution + 1):
        divider = GRID_SIZE ** (MAX_RESOLUTION - i)
        cell.append(pack_symbol(column // divider, row // divider))
        row %= divider
        column %= divider
    return ''.join(cell)


def point_from_text(text: str) -> Point:
    """
    Parse a "lat,lng" string into a Point.

    Args:
        text: Comma-separated latitude and longitude

    Returns:
        Point
    """
    parts = text.split(',') if isinstance(text, str) else []
    if len(parts) != 2:
        raise ParseError(f"Expected 'lat,lng', got: {text!r}")
    try:
        lat, lng = (float(part.strip()) for part in parts)
    except ValueError as e:
        raise ParseError(f"Non-numeric coordinate in {text!r}", e) from e
    return Point(lat, lng)
