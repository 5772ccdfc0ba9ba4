"""Covering-cell enumeration for bounding-box queries."""

import logging
from typing import Set, Tuple

from ..abstractions.types import BoundingBox, GridIndex, InvalidArgumentError
from .cell_codec import decode, encode, index_to_key
from .geometry import ALPHABET, index_step
from .resolution import select_resolution

logger = logging.getLogger(__name__)


def query_cells(sw_cell: str, ne_cell: str) -> Set[str]:
    """
    Get the cells whose union covers the box between two corner cells.

    The result is a conservative cover: it contains every point of the box
    and usually some outside it, so matches must be checked against the
    exact coordinates afterwards.

    Args:
        sw_cell: Key of the cell holding the southwest corner
        ne_cell: Key of the cell holding the northeast corner, same length

    Returns:
        Set of cell keys; empty if the northeast corner lies south or west
        of the southwest one (inverted or antimeridian-crossing boxes)
    """
    resolution = len(sw_cell)
    if resolution != len(ne_cell):
        raise InvalidArgumentError(
            f"Corner cells differ in resolution: {sw_cell!r} vs {ne_cell!r}"
        )

    sw_idx = decode(sw_cell)
    ne_idx = decode(ne_cell)

    if ne_idx.row < sw_idx.row or ne_idx.column < sw_idx.column:
        # TODO: split boxes crossing the 180th meridian into two queries
        logger.warning(f"Inverted query box between {sw_cell!r} and {ne_cell!r}, no cells")
        return set()

    if sw_idx.is_origin() and ne_idx.is_origin():
        # Very zoomed out, just use the top-level cells
        return set(ALPHABET)

    step = index_step(resolution)
    cells = set()
    for row in range(sw_idx.row, ne_idx.row + 1, step):
        for column in range(sw_idx.column, ne_idx.column + 1, step):
            cells.add(index_to_key(GridIndex(row=row, column=column), resolution))

    logger.debug(f"Enumerated {len(cells)} cells at resolution {resolution}")
    return cells


def candidate_cells(box: BoundingBox, resolution: int) -> Set[str]:
    """
    Get the covering cells for a box at a given resolution.

    Args:
        box: Query bounding box
        resolution: Resolution for both corner cells

    Returns:
        Set of cell keys (see query_cells)
    """
    return query_cells(encode(box.southwest, resolution),
                       encode(box.northeast, resolution))


def query_plan(box: BoundingBox) -> Tuple[int, Set[str]]:
    """Select the resolution for box and get its covering cells."""
    resolution = select_resolution(box)
    return resolution, candidate_cells(box, resolution)
