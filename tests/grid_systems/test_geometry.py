"""Tests for grid geometry constants."""

import pytest

from geomodel.abstractions.types import CellSize, InvalidArgumentError
from geomodel.grid_systems.geometry import (
    ALPHABET, CELL_SIZES, GRID_CELLS, GRID_SIZE, MAX_RESOLUTION,
    cell_size, index_step, validate_resolution
)


class TestGridConstants:
    """Test the fixed grid layout."""

    def test_alphabet_matches_grid(self):
        assert len(ALPHABET) == GRID_SIZE ** 2
        assert len(set(ALPHABET)) == len(ALPHABET)
        assert ALPHABET == '0123456789abcdef'

    def test_grid_depth(self):
        assert MAX_RESOLUTION == 7
        assert GRID_CELLS == 4 ** 7 == 16384

    @pytest.mark.parametrize("res,lat_span,lng_span", [
        (1, 45.0, 90.0),
        (2, 11.25, 22.5),
        (3, 2.8125, 5.625),
        (4, 0.703125, 1.40625),
        (7, 180.0 / 16384, 360.0 / 16384),
    ])
    def test_cell_sizes(self, res, lat_span, lng_span):
        """Test the per-resolution cell size table."""
        assert CELL_SIZES[res] == CellSize(lat_span, lng_span)
        assert cell_size(res) == CellSize(lat_span, lng_span)

    def test_cell_sizes_shrink(self):
        for res in range(1, MAX_RESOLUTION + 1):
            assert CELL_SIZES[res].lat_span * GRID_SIZE == CELL_SIZES[res - 1].lat_span
            assert CELL_SIZES[res].lng_span * GRID_SIZE == CELL_SIZES[res - 1].lng_span

    def test_cell_sizes_immutable(self):
        with pytest.raises(TypeError):
            CELL_SIZES[1] = CellSize(1.0, 1.0)


class TestResolutionValidation:
    """Test resolution bounds checks."""

    @pytest.mark.parametrize("res", [0, 8, -1])
    def test_cell_size_out_of_range(self, res):
        with pytest.raises(InvalidArgumentError):
            cell_size(res)

    @pytest.mark.parametrize("res", [True, 1.0, "3", None])
    def test_non_int_resolution(self, res):
        with pytest.raises(InvalidArgumentError):
            validate_resolution(res)

    def test_zero_allowed_when_requested(self):
        assert validate_resolution(0, allow_zero=True) == 0

    def test_index_step(self):
        assert index_step(7) == 1
        assert index_step(6) == 4
        assert index_step(1) == 4096
        assert index_step(0) == 16384
