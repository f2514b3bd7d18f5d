"""Tests for toroidal adjacency and the terrain grid."""

import numpy as np
import pytest

from worldgen.exceptions import GridInvariantError
from worldgen.terrain.grid import TerrainGrid, neighbor, neighbors
from worldgen.terrain.zones import LatitudeZones
from worldgen.terrain_types import TerrainSubtype
from worldgen.types import DIRECTION_DELTAS, Direction


class TestNeighbor:
    """Tests for toroidal neighbour lookup."""

    def test_interior_offsets(self) -> None:
        """Interior cells step by the compass delta."""
        assert neighbor(3, 3, Direction.NORTH, 8) == (2, 3)
        assert neighbor(3, 3, Direction.SOUTHEAST, 8) == (4, 4)
        assert neighbor(3, 3, Direction.WEST, 8) == (3, 2)

    def test_rows_wrap(self) -> None:
        """Row 0 and row N-1 are adjacent."""
        assert neighbor(0, 4, Direction.NORTH, 8) == (7, 4)
        assert neighbor(7, 4, Direction.SOUTH, 8) == (0, 4)

    def test_columns_wrap(self) -> None:
        """Column 0 and column N-1 are adjacent."""
        assert neighbor(4, 0, Direction.WEST, 8) == (4, 7)
        assert neighbor(4, 7, Direction.EAST, 8) == (4, 0)

    def test_corner_diagonals_wrap_both_axes(self) -> None:
        """Diagonals at corners wrap rows and columns together."""
        assert neighbor(0, 0, Direction.NORTHWEST, 8) == (7, 7)
        assert neighbor(7, 7, Direction.SOUTHEAST, 8) == (0, 0)
        assert neighbor(7, 0, Direction.SOUTHWEST, 8) == (0, 7)
        assert neighbor(0, 7, Direction.NORTHEAST, 8) == (7, 0)

    @pytest.mark.parametrize("size", [4, 8, 16])
    def test_opposite_returns_home(self, size: int) -> None:
        """Stepping forward then back returns to the same cell everywhere."""
        for row in range(size):
            for column in range(size):
                for direction in DIRECTION_DELTAS:
                    there = neighbor(row, column, direction, size)
                    back = neighbor(*there, direction.opposite, size)
                    assert back == (row, column)

    def test_eight_distinct_neighbours(self) -> None:
        """Every cell has exactly eight distinct neighbours."""
        for row in range(8):
            for column in range(8):
                cells = [coord for _, coord in neighbors(row, column, 8)]
                assert len(cells) == 8
                assert len(set(cells)) == 8
                assert (row, column) not in cells

    def test_off_grid_raises(self) -> None:
        """A coordinate outside the torus is a defect."""
        with pytest.raises(GridInvariantError):
            neighbor(8, 0, Direction.NORTH, 8)
        with pytest.raises(GridInvariantError):
            neighbor(0, -1, Direction.NORTH, 8)

    def test_non_compass_direction_raises(self) -> None:
        """STILL and NONE have no neighbour."""
        with pytest.raises(GridInvariantError):
            neighbor(1, 1, Direction.STILL, 8)
        with pytest.raises(GridInvariantError):
            neighbor(1, 1, Direction.NONE, 8)


class TestTerrainGrid:
    """Tests for TerrainGrid layer storage."""

    def test_layer_shapes(self) -> None:
        """Scalar layers are (N, N); seasonal layers are (S, N, N)."""
        grid = TerrainGrid(8, 3)
        assert grid.elevation.shape == (8, 8)
        assert grid.subtype.shape == (8, 8)
        assert grid.temperature.shape == (3, 8, 8)
        assert grid.wind_direction.shape == (3, 8, 8)
        assert grid.cell_count == 64

    def test_seasonal_layers_start_unset(self) -> None:
        """Climate layers start as NaN until a stage fills them."""
        grid = TerrainGrid(4, 4)
        assert np.isnan(grid.temperature).all()
        assert np.isnan(grid.rainfall).all()
        assert (grid.wind_direction == Direction.NONE).all()

    def test_coords_row_major(self) -> None:
        """coords() walks rows first."""
        grid = TerrainGrid(4, 1)
        coords = list(grid.coords())
        assert coords[:5] == [(0, 0), (0, 1), (0, 2), (0, 3), (1, 0)]
        assert len(coords) == 16

    def test_shifted_matches_neighbor(self) -> None:
        """shifted() reads each cell's neighbour value in that direction."""
        grid = TerrainGrid(4, 1)
        layer = np.arange(16, dtype=np.float64).reshape(4, 4)
        for direction in DIRECTION_DELTAS:
            view = grid.shifted(layer, direction)
            for row, column in grid.coords():
                assert view[row, column] == layer[grid.neighbor(row, column, direction)]

    def test_shifted_seasonal_layer(self) -> None:
        """shifted() rolls only the spatial axes of seasonal layers."""
        grid = TerrainGrid(4, 2)
        layer = np.arange(32, dtype=np.float64).reshape(2, 4, 4)
        view = grid.shifted(layer, Direction.EAST)
        np.testing.assert_array_equal(view[1, :, 0], layer[1, :, 1])
        np.testing.assert_array_equal(view[0, :, 3], layer[0, :, 0])

    def test_subtype_mask(self) -> None:
        """subtype_mask selects cells whose subtype is in the set."""
        grid = TerrainGrid(4, 1)
        grid.subtype[:] = TerrainSubtype.PLAINS
        grid.subtype[1, 2] = TerrainSubtype.SEA
        grid.subtype[3, 3] = TerrainSubtype.LAKE
        mask = grid.subtype_mask(frozenset({TerrainSubtype.SEA, TerrainSubtype.LAKE}))
        assert mask.sum() == 2
        assert mask[1, 2] and mask[3, 3]

    def test_rainfall_mean(self) -> None:
        """Mean rainfall averages over every season."""
        grid = TerrainGrid(4, 4)
        grid.rainfall[:, 2, 2] = [10.0, 20.0, 30.0, 40.0]
        assert grid.rainfall_mean(2, 2) == pytest.approx(25.0)

    def test_freeze_makes_layers_read_only(self) -> None:
        """Frozen grids reject writes."""
        grid = TerrainGrid(4, 2)
        grid.freeze()
        assert grid.frozen
        with pytest.raises(ValueError):
            grid.elevation[0, 0] = 1.0
        with pytest.raises(ValueError):
            grid.rainfall[0, 0, 0] = 1.0
        with pytest.raises(ValueError):
            grid.render_tag[0, 0] = "plains"


class TestLatitudeZones:
    """Tests for latitude band limits."""

    def test_default_size_bands(self) -> None:
        """Bands for a 128 grid (last row index 127)."""
        zones = LatitudeZones.for_size(128)
        assert zones.half == 63
        assert zones.tenth == 12
        assert (zones.equator_top, zones.equator_bottom) == (51, 75)
        assert (zones.polar_north, zones.polar_south) == (12, 115)
        assert (zones.desert_north, zones.desert_south) == (39, 87)

    def test_polar_limits_inclusive_vs_strict(self) -> None:
        """Band-limit rows are polar but not deep polar."""
        zones = LatitudeZones.for_size(128)
        assert zones.is_polar(12) and not zones.is_deep_polar(12)
        assert zones.is_deep_polar(11)
        assert zones.is_polar(115) and not zones.is_deep_polar(115)

    def test_equator_limits_inclusive_vs_strict(self) -> None:
        """Band-limit rows are equatorial but not inner equatorial."""
        zones = LatitudeZones.for_size(128)
        assert zones.is_equatorial(51) and not zones.is_inner_equatorial(51)
        assert zones.is_inner_equatorial(52)
        assert not zones.is_equatorial(50)

    def test_desert_belts(self) -> None:
        """Desert belts sit just outside the equatorial band."""
        zones = LatitudeZones.for_size(128)
        assert zones.is_desert(39) and zones.is_desert(50)
        assert not zones.is_desert(51)
        assert zones.is_desert(76) and zones.is_desert(87)
        assert not zones.is_desert(88)

    def test_hemisphere_includes_middle_row(self) -> None:
        """The middle row belongs to the north."""
        zones = LatitudeZones.for_size(128)
        assert zones.is_north(63)
        assert not zones.is_north(64)

    def test_predicates_vectorize(self) -> None:
        """Predicates accept row arrays."""
        zones = LatitudeZones.for_size(128)
        rows = zones.row_grid(128)
        polar = zones.is_polar(rows)
        assert polar.shape == (128, 128)
        assert polar[0].all() and not polar[64].any()
