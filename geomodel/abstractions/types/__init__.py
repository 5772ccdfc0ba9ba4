# geomodel/abstractions/types/__init__.py
"""Type definitions for the abstractions layer."""

from .geo_types import (
    Point, BoundingBox, GridIndex, CellSize,
    GeocellError, InvalidArgumentError, InvalidCoordinateError,
    ParseError, UnsupportedQueryError
)

__all__ = [
    # Values
    'Point', 'BoundingBox', 'GridIndex', 'CellSize',

    # Errors
    'GeocellError', 'InvalidArgumentError', 'InvalidCoordinateError',
    'ParseError', 'UnsupportedQueryError',
]
