"""Grid geometry constants for the geocell quadtree."""

from typing import Tuple

from ..abstractions.types import CellSize, InvalidArgumentError

# Alphabet length must always be GRID_SIZE ** 2
GRID_SIZE = 4
ALPHABET = '0123456789abcdef'

# 7 levels is ~150 m of latitude per cell, enough for most queries
MAX_RESOLUTION = 7

# Number of cells along one axis of the finest grid
GRID_CELLS = GRID_SIZE ** MAX_RESOLUTION

NORTH = 90.0
SOUTH = -90.0
EAST = 180.0
WEST = -180.0


def _build_cell_sizes() -> Tuple[CellSize, ...]:
    """Cell sizes indexed by resolution; slot 0 is the whole world."""
    sizes = []
    for res in range(MAX_RESOLUTION + 1):
        num_cells = GRID_SIZE ** res
        sizes.append(CellSize(lat_span=(NORTH - SOUTH) / num_cells,
                              lng_span=(EAST - WEST) / num_cells))
    return tuple(sizes)


CELL_SIZES = _build_cell_sizes()


def validate_resolution(resolution: int, allow_zero: bool = False) -> int:
    """
    Check a resolution is within the grid depth.

    Args:
        resolution: Quadtree depth
        allow_zero: Whether the whole-world level 0 is accepted

    Returns:
        The resolution, unchanged
    """
    lowest = 0 if allow_zero else 1
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise InvalidArgumentError(f"Resolution must be an int, got: {resolution!r}")
    if not lowest <= resolution <= MAX_RESOLUTION:
        raise InvalidArgumentError(
            f"Resolution must be in [{lowest}, {MAX_RESOLUTION}], got: {resolution}"
        )
    return resolution


def cell_size(resolution: int) -> CellSize:
    """Get the angular (lat, lng) size of a cell at resolution."""
    return CELL_SIZES[validate_resolution(resolution)]


def index_step(resolution: int) -> int:
    """Finest-grid index span covered by one cell at resolution."""
    return GRID_SIZE ** (MAX_RESOLUTION - validate_resolution(resolution, allow_zero=True))
