"""
Geocell indexing for bounding-box queries on flat key-value stores.

Each record stores a small set of hierarchical quadtree cell keys computed
from its coordinates; a bounding box is turned into a resolution and a set
of covering cell keys that a store can match with an equality filter on a
multi-valued field.
"""

__version__ = "1.0.0"
__description__ = "Quadtree geocell indexing for bounding-box queries"

# Note: the record layer and logging are imported explicitly when needed
# (geomodel.database, geomodel.infrastructure.logging).

from .abstractions.types import (
    BoundingBox, GridIndex, Point,
    GeocellError, InvalidArgumentError, InvalidCoordinateError,
    ParseError, UnsupportedQueryError
)
from .grid_systems import (
    MAX_RESOLUTION,
    candidate_cells,
    cell_bounds,
    decode,
    encode,
    encode_all,
    encode_many,
    index_to_key,
    point_from_text,
    query_cells,
    query_plan,
    select_resolution
)

__all__ = [
    '__version__',
    '__description__',
    'BoundingBox', 'GridIndex', 'Point',
    'GeocellError', 'InvalidArgumentError', 'InvalidCoordinateError',
    'ParseError', 'UnsupportedQueryError',
    'MAX_RESOLUTION',
    'candidate_cells',
    'cell_bounds',
    'decode',
    'encode',
    'encode_all',
    'encode_many',
    'index_to_key',
    'point_from_text',
    'query_cells',
    'query_plan',
    'select_resolution',
]
