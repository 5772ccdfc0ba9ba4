"""Shared fixtures for grid system tests."""

import pytest

from geomodel.abstractions.types import BoundingBox, Point


@pytest.fixture
def sample_points():
    """Points spread over the world, including the grid corners."""
    return [
        Point(0.0, 0.0),
        Point(10.0, 10.0),
        Point(38.7223, -9.1393),      # Lisbon
        Point(-33.8688, 151.2093),    # Sydney
        Point(51.5074, -0.1278),      # London
        Point(-54.8019, -68.3030),    # Ushuaia
        Point(89.999, 179.999),
        Point(-90.0, -180.0),
        Point(90.0, 180.0),
    ]


@pytest.fixture
def sample_boxes():
    """Sample query boxes."""
    return {
        'tiny': BoundingBox(Point(10.0, 10.0), Point(10.001, 10.001)),
        'city': BoundingBox(Point(38.6, -9.3), Point(38.8, -9.0)),
        'country': BoundingBox(Point(36.9, -9.6), Point(42.2, -6.1)),
        'world': BoundingBox(Point(-90.0, -180.0), Point(90.0, 180.0)),
        'inverted': BoundingBox(Point(10.0, 10.0), Point(5.0, 5.0)),
        'antimeridian': BoundingBox(Point(0.0, 170.0), Point(10.0, -170.0)),
    }
