# geomodel/grid_systems/__init__.py
"""Geocell quadtree: encoding, decoding and query cell enumeration."""

from .geometry import (
    ALPHABET,
    CELL_SIZES,
    GRID_SIZE,
    MAX_RESOLUTION,
    cell_size
)
from .cell_codec import (
    decode,
    encode,
    encode_all,
    encode_many,
    index_to_key,
    pack_symbol,
    point_from_text,
    unpack_symbol
)
from .resolution import select_resolution
from .query_cells import candidate_cells, query_cells, query_plan
from .cell_bounds import CellBounds, cell_bounds

__all__ = [
    'ALPHABET',
    'CELL_SIZES',
    'GRID_SIZE',
    'MAX_RESOLUTION',
    'cell_size',
    'decode',
    'encode',
    'encode_all',
    'encode_many',
    'index_to_key',
    'pack_symbol',
    'point_from_text',
    'unpack_symbol',
    'select_resolution',
    'candidate_cells',
    'query_cells',
    'query_plan',
    'CellBounds',
    'cell_bounds'
]
