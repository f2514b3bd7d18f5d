"""Shared test fixtures for world generator tests."""

from collections.abc import Callable

import numpy as np
import pytest

from worldgen.terrain.config import TerrainConfig
from worldgen.terrain.context import ReliefStats
from worldgen.terrain.generator import GenerationResult, generate_terrain
from worldgen.terrain.grid import TerrainGrid
from worldgen.terrain_types import TerrainSubtype, TerrainType
from worldgen.types import Direction
from worldgen.world import World

GridFactory = Callable[..., TerrainGrid]


@pytest.fixture
def make_grid() -> GridFactory:
    """Factory for hand-built grids with every layer filled.

    All cells start as plains at elevation 1 with zero climate and
    still wind; tests override the cells they care about.
    """

    def _make(
        size: int = 8,
        seasons: int = 4,
        subtype: TerrainSubtype = TerrainSubtype.PLAINS,
        elevation: float = 1.0,
    ) -> TerrainGrid:
        grid = TerrainGrid(size, seasons)
        grid.elevation[:] = elevation
        grid.terrain_type[:] = TerrainType.PLAINS
        grid.subtype[:] = subtype
        grid.render_tag[:] = subtype.label
        grid.temperature[:] = 0.0
        grid.pressure[:] = 0.0
        grid.rainfall[:] = 0.0
        grid.wind_speed[:] = 0.0
        grid.wind_direction[:] = Direction.STILL
        return grid

    return _make


@pytest.fixture
def relief() -> ReliefStats:
    """Relief statistics with sea level at zero and peaks at 10."""
    return ReliefStats(
        highest=10.0,
        lowest=-5.0,
        water_limit=0.0,
        deep_ocean_limit=-2.5,
        hill_limit=7.5,
        mountain_limit=8.75,
    )


@pytest.fixture(scope="module")
def small_config() -> TerrainConfig:
    """8x8 world, four seasons, fixed seed."""
    return TerrainConfig(size=8, seasons=4, seed=7)


@pytest.fixture(scope="module")
def small_result(small_config: TerrainConfig) -> GenerationResult:
    """Generated 8x8 world shared by a test module."""
    return generate_terrain(small_config)


@pytest.fixture(scope="module")
def small_world(small_result: GenerationResult) -> World:
    """Read-only snapshot of the shared 8x8 world."""
    return World(small_result.grid, seed=small_result.config.seed)


@pytest.fixture(scope="module")
def medium_result() -> GenerationResult:
    """Generated 32x32 world; large enough to grow rivers."""
    return generate_terrain(TerrainConfig(size=32, seasons=4, seed=2024))


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
