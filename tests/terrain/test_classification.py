"""Tests for height classification."""

import numpy as np
import pytest

from worldgen.terrain.classification import (
    HeightClassifier,
    exaggerate_relief,
    provisional_limits,
)
from worldgen.terrain.grid import TerrainGrid
from worldgen.terrain.noise import generate_noise
from worldgen.terrain_types import TerrainSubtype, TerrainType


class TestProvisionalLimits:
    """Tests for the first-pass thresholds."""

    def test_land_heavy_relief(self) -> None:
        """Peaks above the trough depth lift the water line."""
        water, deep, hill, mountain = provisional_limits(10.0, 0.0)
        assert water == pytest.approx(5.0)
        assert deep == pytest.approx(10.0 / 3)
        assert hill == pytest.approx(7.5)
        assert mountain == pytest.approx(8.75)

    def test_deep_troughs_pin_water_to_zero(self) -> None:
        """Troughs deeper than the peaks are high keep sea level at zero."""
        water, deep, hill, mountain = provisional_limits(2.0, -5.0)
        assert water == 0.0
        assert deep == pytest.approx(-5.0)
        assert hill == pytest.approx(1.5)
        assert mountain == pytest.approx(1.75)

    def test_thresholds_ordered(self) -> None:
        for highest, lowest in [(10.0, 0.0), (9.0, 1.0), (3.0, -1.0), (2.0, -5.0)]:
            water, deep, hill, mountain = provisional_limits(highest, lowest)
            assert deep <= water < hill < mountain <= highest


class TestExaggerateRelief:
    """Tests for relief exaggeration."""

    def test_positive_water_line(self) -> None:
        """Each band moves by its own offset when the water line is above zero."""
        elevation = np.array([[1.0, 4.0, 9.0, 8.0, 6.0]])
        result = exaggerate_relief(elevation, 5.0, 10.0 / 3, 7.5, 8.75)
        np.testing.assert_allclose(result, [[-10.25, -2.5, 11.5, 9.5, 3.0]])

    def test_zero_water_line(self) -> None:
        """Fixed sea drops when the water line sits at zero."""
        elevation = np.array([[-6.0, -1.0, 0.0, 0.5, 1.6, 2.0]])
        result = exaggerate_relief(elevation, 0.0, -5.0, 1.5, 1.75)
        np.testing.assert_allclose(result, [[-8.5, -2.5, -1.5, 0.25, 3.1, 4.5]])

    def test_input_not_modified(self) -> None:
        elevation = np.array([[1.0, 9.0]])
        exaggerate_relief(elevation, 5.0, 10.0 / 3, 7.5, 8.75)
        np.testing.assert_array_equal(elevation, [[1.0, 9.0]])


class TestHeightClassifier:
    """Tests for the full two-pass classification."""

    @pytest.fixture
    def classified(self) -> tuple[TerrainGrid, object]:
        grid = TerrainGrid(16, 4)
        noise = generate_noise(16, 8, np.random.default_rng(11))
        stats = HeightClassifier().classify(grid, noise)
        return grid, stats

    def test_only_generated_types(self, classified) -> None:
        """Height classification produces only the five base types."""
        grid, _ = classified
        allowed = {
            TerrainType.OCEAN,
            TerrainType.WATER,
            TerrainType.PLAINS,
            TerrainType.HILL,
            TerrainType.MOUNTAIN,
        }
        assert set(np.unique(grid.terrain_type).tolist()) <= {int(t) for t in allowed}

    def test_final_thresholds_ordered(self, classified) -> None:
        """Final thresholds satisfy deep <= water < hill < mountain."""
        _, stats = classified
        assert stats.water_limit == 0.0
        assert stats.ordered

    def test_extremes_cover_elevation(self, classified) -> None:
        """Recorded extremes bound every exaggerated elevation."""
        grid, stats = classified
        assert stats.highest >= grid.elevation.max()
        assert stats.lowest <= grid.elevation.min()

    def test_types_match_thresholds(self, classified) -> None:
        """Each cell's type agrees with its elevation band."""
        grid, stats = classified
        elevation = grid.elevation
        ocean = grid.terrain_type == TerrainType.OCEAN
        water = grid.terrain_type == TerrainType.WATER
        mountain = grid.terrain_type == TerrainType.MOUNTAIN
        assert (elevation[ocean] <= stats.deep_ocean_limit).all()
        assert (elevation[water] <= stats.water_limit).all()
        assert (elevation[water] > stats.deep_ocean_limit).all()
        assert (elevation[mountain] >= stats.mountain_limit).all()

    def test_subtypes_and_tags_follow_types(self, classified) -> None:
        """Water cells are sea; land subtypes and tags mirror the type."""
        grid, _ = classified
        for row, column in grid.coords():
            terrain = TerrainType(int(grid.terrain_type[row, column]))
            subtype = grid.subtype_at(row, column)
            tag = grid.render_tag[row, column]
            if terrain in (TerrainType.OCEAN, TerrainType.WATER):
                assert subtype == TerrainSubtype.SEA
            else:
                assert subtype.label == tag
            assert tag == terrain.name.lower()

    def test_highest_cell_is_mountain(self, classified) -> None:
        """The peak always clears the mountain limit."""
        grid, _ = classified
        peak = np.unravel_index(np.argmax(grid.elevation), grid.elevation.shape)
        assert grid.terrain_type[peak] == TerrainType.MOUNTAIN

    def test_low_relief_field_floods_lowest_cells(self) -> None:
        """A field spanning 0 to 10 puts its lower half under water."""
        grid = TerrainGrid(4, 1)
        noise = np.linspace(0.0, 1.0, 16).reshape(4, 4)
        stats = HeightClassifier().classify(grid, noise)
        sea = grid.subtype_mask(frozenset({TerrainSubtype.SEA}))
        assert sea[0, 0]
        assert not sea[3, 3]
        assert stats.lowest < 0 < stats.highest

    def test_raised_relief_has_no_sea(self) -> None:
        """A narrow, all-positive field stays dry even though deep sits above sea level."""
        grid = TerrainGrid(4, 1)
        noise = np.linspace(0.7, 1.0, 16).reshape(4, 4)
        stats = HeightClassifier().classify(grid, noise)
        assert stats.deep_ocean_limit > stats.water_limit
        assert not stats.ordered
        assert (grid.elevation > stats.water_limit).all()

        flooded = np.isin(grid.terrain_type, [TerrainType.OCEAN, TerrainType.WATER])
        assert not flooded.any()
        assert not grid.subtype_mask(frozenset({TerrainSubtype.SEA})).any()
        # Lowland halved below the old deep limit stays plains
        assert grid.elevation[0, 0] <= stats.deep_ocean_limit
        assert grid.terrain_type[0, 0] == TerrainType.PLAINS
        assert grid.render_tag[0, 0] == "plains"
