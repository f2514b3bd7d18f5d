"""Tests for post-generation validation."""

import numpy as np
import pytest

from worldgen.terrain.config import TerrainConfig
from worldgen.terrain.validation import validate_terrain
from worldgen.terrain_types import TerrainSubtype, TerrainType
from worldgen.types import Direction


@pytest.fixture
def config() -> TerrainConfig:
    return TerrainConfig(size=8, seasons=4)


class TestValidateTerrain:
    def test_clean_grid_passes(self, make_grid, relief, config) -> None:
        grid = make_grid()
        grid.terrain_type[0, 0] = TerrainType.OCEAN
        grid.subtype[0, 0] = TerrainSubtype.SEA
        result = validate_terrain(grid, relief, config)
        assert result.passed
        assert result.errors == []
        assert result.warnings == []

    def test_all_land_is_a_warning(self, make_grid, relief, config) -> None:
        result = validate_terrain(make_grid(), relief, config)
        assert result.passed
        assert any("No ocean" in w for w in result.warnings)

    def test_wrong_shape(self, make_grid, relief) -> None:
        result = validate_terrain(make_grid(size=8), relief, TerrainConfig(size=16))
        assert not result.passed

    def test_unset_climate(self, make_grid, relief, config) -> None:
        grid = make_grid()
        grid.temperature[2, 3, 3] = np.nan
        grid.wind_direction[0, 1, 1] = Direction.NONE
        result = validate_terrain(grid, relief, config)
        assert not result.passed
        assert len(result.errors) == 2

    def test_unclassified_cell(self, make_grid, relief, config) -> None:
        grid = make_grid()
        grid.subtype[4, 4] = TerrainSubtype.EMPTY
        grid.terrain_type[5, 5] = TerrainType.LIGHT
        result = validate_terrain(grid, relief, config)
        assert len(result.errors) == 2

    def test_broken_river_link(self, make_grid, relief, config) -> None:
        grid = make_grid()
        grid.has_river[2, 2] = True
        grid.river_exit[2, 2] = Direction.EAST
        result = validate_terrain(grid, relief, config)
        assert not result.passed

        grid.has_river[2, 3] = True
        grid.river_entrance[2, 3] = Direction.WEST
        assert validate_terrain(grid, relief, config).passed

    def test_wet_dry_cell(self, make_grid, relief, config) -> None:
        grid = make_grid()
        grid.rainfall[:, 6, 6] = 1500.0
        assert not validate_terrain(grid, relief, config).passed

        grid.subtype[6, 6] = TerrainSubtype.LAKE
        assert validate_terrain(grid, relief, config).passed

    def test_unordered_thresholds_warn(self, make_grid, config) -> None:
        from worldgen.terrain.context import ReliefStats

        relief = ReliefStats(10.0, -5.0, 0.0, 1.0, 7.5, 8.75)
        result = validate_terrain(make_grid(), relief, config)
        assert result.passed
        assert any("out of order" in w for w in result.warnings)
