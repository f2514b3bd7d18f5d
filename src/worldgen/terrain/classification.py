"""Height classification: elevation, adaptive relief thresholds, terrain types.

Two passes over the scaled noise field. The first derives provisional
thresholds from the elevation extremes and exaggerates the relief around
them; the second recomputes thresholds against the exaggerated extremes with
sea level pinned at zero and assigns a terrain type, subtype and render tag
to every cell.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import TerrainSubtype, TerrainType
from .context import ReliefStats
from .grid import TerrainGrid

logger = logging.getLogger(__name__)


def _land_limits(highest: float, water_limit: float) -> tuple[float, float]:
    """Hill and mountain limits, clamped between the water line and the peaks."""
    mountain_limit = highest - highest / 8
    hill_limit = highest - highest / 4
    if hill_limit < water_limit:
        hill_limit = water_limit + 1
    if hill_limit > mountain_limit:
        hill_limit = mountain_limit - 0.05
    return hill_limit, mountain_limit


def provisional_limits(highest: float, lowest: float) -> tuple[float, float, float, float]:
    """Thresholds used to exaggerate the raw relief.

    Args:
        highest: Largest raw elevation.
        lowest: Smallest raw elevation.

    Returns:
        (water_limit, deep_ocean_limit, hill_limit, mountain_limit).
    """
    temp = highest + lowest / 2
    if highest > abs(lowest):
        water_limit = temp / 2 if temp > 0 else temp
    else:
        water_limit = 0.0

    if water_limit > 0:
        deep_ocean_limit = water_limit / 1.5
    else:
        deep_ocean_limit = lowest + abs(water_limit / 2)
        if deep_ocean_limit > water_limit:
            deep_ocean_limit = lowest - 0.01

    hill_limit, mountain_limit = _land_limits(highest, water_limit)
    return water_limit, deep_ocean_limit, hill_limit, mountain_limit


def exaggerate_relief(
    elevation: NDArray[np.float64],
    water_limit: float,
    deep_ocean_limit: float,
    hill_limit: float,
    mountain_limit: float,
) -> NDArray[np.float64]:
    """Push seas deeper and peaks higher, and flatten lowland.

    Returns:
        New elevation array; the input is not modified.
    """
    h = elevation
    deep = (h <= deep_ocean_limit) & (h <= water_limit)
    shallow = ~deep & (h <= water_limit)
    mountain = ~deep & ~shallow & (h >= mountain_limit)
    hill = ~deep & ~shallow & ~mountain & (h >= hill_limit)
    lowland = ~deep & ~shallow & ~mountain & ~hill & (h > 0)

    if water_limit > 0:
        deep_drop = min(-deep_ocean_limit - 2.5, -1.5 * hill_limit)
        shallow_drop = -water_limit - 1.5
    else:
        deep_drop = -2.5
        shallow_drop = -1.5

    result = h.copy()
    result[deep] += deep_drop
    result[shallow] += shallow_drop
    result[mountain] += 2.5
    result[hill] += 1.5
    result[lowland] /= 2
    return result


class HeightClassifier:
    """Turns a normalized noise field into classified elevation."""

    def __init__(self, height_scale: float = 10.0):
        self.height_scale = height_scale

    def classify(self, grid: TerrainGrid, noise: NDArray[np.float64]) -> ReliefStats:
        """Fill elevation, terrain type, subtype and render tag on the grid.

        Args:
            grid: Grid to fill.
            noise: Normalized noise of shape (size, size).

        Returns:
            Final elevation extremes and thresholds.
        """
        elevation = noise * self.height_scale
        highest = float(elevation.max())
        lowest = float(elevation.min())

        water, deep, hill, mountain = provisional_limits(highest, lowest)
        logger.debug(
            f"Provisional limits: deep={deep:.3f} water={water:.3f} "
            f"hill={hill:.3f} mountain={mountain:.3f}"
        )

        elevation = exaggerate_relief(elevation, water, deep, hill, mountain)
        highest = max(highest, float(elevation.max()))
        lowest = min(lowest, float(elevation.min()))

        # Sea level is zero from here on
        water = 0.0
        deep = lowest / 2
        if deep > water:
            deep = lowest + 0.5
        hill, mountain = _land_limits(highest, water)

        grid.elevation[:] = elevation
        self._assign_types(grid, elevation, deep, water, hill, mountain)

        return ReliefStats(
            highest=highest,
            lowest=lowest,
            water_limit=water,
            deep_ocean_limit=deep,
            hill_limit=hill,
            mountain_limit=mountain,
        )

    def _assign_types(
        self,
        grid: TerrainGrid,
        elevation: NDArray[np.float64],
        deep: float,
        water: float,
        hill: float,
        mountain: float,
    ) -> None:
        # Deep ocean is a subset of water; on all-land relief deep sits above sea level
        below_water = elevation <= water
        conditions = [
            below_water & (elevation <= deep),
            below_water,
            elevation >= mountain,
            elevation >= hill,
        ]
        grid.terrain_type[:] = np.select(
            conditions,
            [TerrainType.OCEAN, TerrainType.WATER, TerrainType.MOUNTAIN, TerrainType.HILL],
            default=TerrainType.PLAINS,
        )
        grid.subtype[:] = np.select(
            conditions,
            [TerrainSubtype.SEA, TerrainSubtype.SEA, TerrainSubtype.MOUNTAIN, TerrainSubtype.HILL],
            default=TerrainSubtype.PLAINS,
        )
        grid.render_tag[:] = np.select(
            conditions,
            ["ocean", "water", "mountain", "hill"],
            default="plains",
        ).astype(object)
