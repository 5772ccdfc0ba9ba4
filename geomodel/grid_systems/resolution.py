"""Query resolution selection."""

import logging

from ..abstractions.types import BoundingBox
from .geometry import CELL_SIZES, MAX_RESOLUTION

logger = logging.getLogger(__name__)


def select_resolution(box: BoundingBox) -> int:
    """
    Pick the query resolution for a bounding box.

    The resolution is the number of levels whose cell height is strictly
    larger than the smaller of the box's two spans, i.e. the finest level
    whose cells are still bigger than the box's tightest dimension. Only the
    latitude cell size is compared, for both spans.

    Args:
        box: Query bounding box

    Returns:
        Resolution in [0, MAX_RESOLUTION]; 0 means the box is larger than a
        top-level cell
    """
    span = min(box.lat_span, box.lng_span)
    resolution = sum(1 for res in range(1, MAX_RESOLUTION + 1)
                     if CELL_SIZES[res].lat_span > span)
    logger.debug(f"Selected resolution {resolution} for span {span}")
    return resolution
