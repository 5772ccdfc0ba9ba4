"""Tests for query resolution selection."""

import pytest

from geomodel.abstractions.types import BoundingBox, Point
from geomodel.grid_systems import CELL_SIZES, MAX_RESOLUTION, select_resolution


def make_box(south, west, north, east):
    return BoundingBox(Point(south, west), Point(north, east))


class TestSelectResolution:
    """Test resolution selection against the cell size table."""

    def test_tiny_box_uses_finest_resolution(self, sample_boxes):
        assert select_resolution(sample_boxes['tiny']) == MAX_RESOLUTION

    def test_world_box_is_coarser_than_top_level(self, sample_boxes):
        assert select_resolution(sample_boxes['world']) == 0

    @pytest.mark.parametrize("span,expected", [
        (80.0, 0),
        (20.0, 1),
        (1.0, 3),
        (0.5, 4),
        (0.1, 5),
        (0.02, 6),
        (0.005, 7),
    ])
    def test_span_to_resolution(self, span, expected):
        assert select_resolution(make_box(0, 0, span, span)) == expected

    @pytest.mark.parametrize("res", range(1, MAX_RESOLUTION + 1))
    def test_tie_is_not_counted(self, res):
        """A span equal to a cell height selects the next coarser level."""
        span = CELL_SIZES[res].lat_span
        assert select_resolution(make_box(0, 0, span, 100)) == res - 1

    def test_uses_smaller_span(self):
        # Latitude span 40, longitude span 0.5
        assert select_resolution(make_box(0, 0, 40, 0.5)) == 4
        # Latitude span 0.5, longitude span 40
        assert select_resolution(make_box(0, 0, 0.5, 40)) == 4

    def test_compares_latitude_sizes_only(self):
        """A 5 degree longitude span is compared with cell heights, not widths."""
        # Heights above 5: 45, 11.25. Widths above 5 would add 5.625.
        assert select_resolution(make_box(0, 0, 10, 5)) == 2

    def test_point_box_saturates(self):
        assert select_resolution(make_box(10, 10, 10, 10)) == MAX_RESOLUTION

    def test_inverted_box_saturates(self, sample_boxes):
        assert select_resolution(sample_boxes['inverted']) == MAX_RESOLUTION
        assert select_resolution(sample_boxes['antimeridian']) == MAX_RESOLUTION
