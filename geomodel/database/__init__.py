"""Record-store integration for geocell-indexed models."""

from .serialization import GeocellFormat, serialize_cell, serialize_cells
from .geo_model import GeoModel
from .memory_store import GeoStore

__all__ = [
    'GeocellFormat',
    'serialize_cell',
    'serialize_cells',
    'GeoModel',
    'GeoStore'
]
