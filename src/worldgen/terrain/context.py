"""Per-run generation context threaded through every pipeline stage."""

from dataclasses import dataclass

import numpy as np

from .config import TerrainConfig
from .disjoint_set import DisjointSet
from .grid import TerrainGrid
from .zones import LatitudeZones


@dataclass(frozen=True)
class ReliefStats:
    """Elevation extremes and classification thresholds."""

    highest: float
    lowest: float
    water_limit: float
    deep_ocean_limit: float
    hill_limit: float
    mountain_limit: float

    @property
    def ordered(self) -> bool:
        """Whether deep ocean <= water <= hill <= mountain."""
        return (
            self.deep_ocean_limit
            <= self.water_limit
            <= self.hill_limit
            <= self.mountain_limit
        )


@dataclass
class GenerationContext:
    """Everything one generation run owns.

    Created once per request. The RNG is the single random stream for the
    whole run; stages draw from it in pipeline order.
    """

    config: TerrainConfig
    rng: np.random.Generator
    grid: TerrainGrid
    zones: LatitudeZones
    relief: ReliefStats | None = None
    basins: DisjointSet | None = None

    @classmethod
    def create(cls, config: TerrainConfig) -> "GenerationContext":
        return cls(
            config=config,
            rng=np.random.default_rng(config.seed),
            grid=TerrainGrid(config.size, config.seasons),
            zones=LatitudeZones.for_size(config.size),
        )

    def require_relief(self) -> ReliefStats:
        """Relief statistics; only available after height classification."""
        if self.relief is None:
            raise RuntimeError("Height classification has not run yet")
        return self.relief
