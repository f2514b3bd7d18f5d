"""Seasonal climate: temperature, pressure, wind and rainfall.

Every field is computed for all cells of one season at once. Neighbour
lookups go through toroidal shifts of whole layers, so each stage reads a
consistent snapshot of the stage before it.
"""

import logging

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..terrain_types import TerrainSubtype
from ..types import DIRECTION_DELTAS, WIND_SCAN_ORDER, Direction
from .config import ClimateConfig
from .context import GenerationContext, ReliefStats
from .grid import TerrainGrid
from .zones import LatitudeZones

logger = logging.getLogger(__name__)

_WATER = frozenset({TerrainSubtype.SEA, TerrainSubtype.LAKE})


def land_values(grid: TerrainGrid) -> NDArray[np.int32]:
    """Per-cell land score: sea/lake 0, mountain 2, anything else 1."""
    values = np.ones_like(grid.subtype, dtype=np.int32)
    values[grid.subtype_mask(_WATER)] = 0
    values[grid.subtype == TerrainSubtype.MOUNTAIN] = 2
    return values


def nearby_land(grid: TerrainGrid) -> NDArray[np.int32]:
    """Sum of the land score over each cell and its eight neighbours."""
    kernel = np.ones((3, 3), dtype=np.int32)
    return ndimage.convolve(land_values(grid), kernel, mode="wrap")


def _tiered(land: NDArray, high: float, mid: float, low: float) -> NDArray[np.float64]:
    """Pick a value per cell by nearby-land tier (>= 40, >= 20, below)."""
    return np.where(land >= 40, high, np.where(land >= 20, mid, low)).astype(np.float64)


def deposit_wind_rainfall(grid: TerrainGrid, row: int, column: int, season: int) -> None:
    """Carry one cell's wind-borne rain to its downwind neighbour.

    Mountains block the wind: when the downwind neighbour is a mountain the
    rain falls on the cell itself.
    """
    speed = float(grid.wind_speed[season, row, column])
    if speed <= 0:
        return
    direction = Direction(int(grid.wind_direction[season, row, column]))
    if not direction.is_compass:
        return

    n_row, n_column = grid.neighbor(row, column, direction)
    if grid.subtype[n_row, n_column] == TerrainSubtype.MOUNTAIN:
        grid.rainfall[season, row, column] += speed
    else:
        grid.rainfall[season, n_row, n_column] += speed


class ClimateSimulator:
    """Fills the seasonal climate layers of a classified grid."""

    def __init__(self, config: ClimateConfig, zones: LatitudeZones, summer: int, winter: int):
        self.config = config
        self.zones = zones
        self.summer = summer
        self.winter = winter

    @classmethod
    def from_context(cls, ctx: GenerationContext) -> "ClimateSimulator":
        return cls(ctx.config.climate, ctx.zones, ctx.config.summer, ctx.config.winter)

    def run(self, ctx: GenerationContext) -> None:
        """Compute every climate layer in dependency order."""
        grid = ctx.grid
        relief = ctx.require_relief()

        grid.nearby_land[:] = nearby_land(grid)

        for season in range(grid.seasons):
            grid.temperature[season] = self.temperature(grid, relief, season)

        for season in range(grid.seasons):
            grid.pressure[season] = self.pressure(grid, relief, season, ctx.rng)

        for season in range(grid.seasons):
            direction, speed = self.wind(grid, grid.pressure[season])
            grid.wind_direction[season] = direction
            grid.wind_speed[season] = speed

        for season in range(grid.seasons):
            grid.rainfall[season] = self.rainfall(grid, season)

        logger.info(
            f"Climate: temperature {np.nanmin(grid.temperature):.1f}..{np.nanmax(grid.temperature):.1f}, "
            f"mean rainfall {np.nanmean(grid.rainfall):.1f}"
        )

    def raw_temperature(self, grid: TerrainGrid, relief: ReliefStats, season: int) -> NDArray[np.float64]:
        """First temperature sweep: zone, land, season and elevation shifts."""
        size = grid.size
        rows = self.zones.row_grid(size)
        land = grid.nearby_land
        water = grid.subtype_mask(_WATER)
        h = grid.elevation

        temp = np.full((size, size), self.config.base_temperature, dtype=np.float64)
        temp += np.where(water, 5.0, -5.0)

        deep_polar = self.zones.is_deep_polar(rows)
        inner_equator = self.zones.is_inner_equatorial(rows)
        temp[deep_polar] -= 20
        temp[~deep_polar & inner_equator] += 20

        temp += np.select([land > 75, land > 55, land > 25], [-10.0, -5.0, 0.0], default=5.0)

        # Warm season adds the full shift, cold season removes it (less near the equator)
        warm_shift = _tiered(land, 20, 10, 5)
        cold_shift = np.where(inner_equator, _tiered(land, 10, 5, 0), warm_shift)
        north = self.zones.is_north(rows)
        for hemisphere, warm, cold in ((north, self.summer, self.winter), (~north, self.winter, self.summer)):
            if season == warm:
                temp[hemisphere] += warm_shift[hemisphere]
            elif season == cold:
                temp[hemisphere] -= cold_shift[hemisphere]

        temp += np.select(
            [h >= relief.highest, h >= relief.highest / 4, h <= relief.lowest / 4],
            [-10.0, -5.0, 5.0],
            default=0.0,
        )

        temp[water & (temp > 30)] -= 5
        return temp

    def temperature(self, grid: TerrainGrid, relief: ReliefStats, season: int) -> NDArray[np.float64]:
        """Raw temperature averaged over each cell and its eight neighbours."""
        raw = self.raw_temperature(grid, relief, season)
        return ndimage.uniform_filter(raw, size=3, mode="wrap")

    def pressure(
        self,
        grid: TerrainGrid,
        relief: ReliefStats,
        season: int,
        rng: np.random.Generator,
    ) -> NDArray[np.float64]:
        """Pressure from elevation and latitude, scaled by a random factor of 1-3."""
        rows = self.zones.row_grid(grid.size)
        h = grid.elevation
        low_drop = abs(relief.lowest)

        pressure = np.where(h <= relief.water_limit, h + relief.highest, h - low_drop)
        pressure = pressure + np.where(self.zones.is_desert(rows), relief.highest, 0.0)
        pressure += np.where(self.zones.is_polar(rows), relief.highest, 0.0)
        pressure -= np.where(self.zones.is_equatorial(rows), low_drop, 0.0)

        if season == self.summer:
            pressure += relief.lowest / 4
        elif season == self.winter:
            pressure += relief.highest / 4

        return pressure * rng.integers(1, 4, size=(grid.size, grid.size))

    def wind(
        self, grid: TerrainGrid, pressure: NDArray[np.float64]
    ) -> tuple[NDArray[np.uint8], NDArray[np.float64]]:
        """Point each cell at its lowest-pressure neighbour.

        Neighbours are scanned in a fixed order and ties go to the later
        one. A cell with no neighbour at or below its own pressure is still.

        Returns:
            (direction, speed) arrays for one season.
        """
        lowest = pressure.copy()
        direction = np.full(pressure.shape, Direction.STILL, dtype=np.uint8)

        for candidate in WIND_SCAN_ORDER:
            neighbour_pressure = grid.shifted(pressure, candidate)
            lower = neighbour_pressure <= lowest
            lowest = np.where(lower, neighbour_pressure, lowest)
            direction[lower] = candidate

        return direction, np.abs(pressure - lowest)

    def rainfall(self, grid: TerrainGrid, season: int) -> NDArray[np.float64]:
        """Rainfall from inverse pressure, wind transport and zone adjustments."""
        rows = self.zones.row_grid(grid.size)
        land = grid.nearby_land
        rain = -grid.pressure[season].copy()

        speed = grid.wind_speed[season]
        wind_direction = grid.wind_direction[season]
        mountain = grid.subtype == TerrainSubtype.MOUNTAIN
        for direction, (d_row, d_column) in DIRECTION_DELTAS.items():
            blowing = (wind_direction == direction) & (speed > 0)
            blocked = blowing & grid.shifted(mountain, direction)
            rain += np.where(blocked, speed, 0.0)
            carried = np.where(blowing & ~blocked, speed, 0.0)
            rain += np.roll(carried, shift=(d_row, d_column), axis=(0, 1))

        rain += np.where(grid.subtype_mask(_WATER), 100.0, 0.0)
        rain += np.where(mountain, 10.0, 0.0)
        rain += np.select([land <= 20, land <= 40], [50.0, 25.0], default=0.0)
        rain += np.where(self.zones.is_equatorial(rows), 25.0, 0.0)
        rain -= np.where(self.zones.is_desert(rows), 20.0, 0.0)
        rain -= np.where(self.zones.is_polar(rows), 20.0, 0.0)
        rain += -20.0 if season in (self.summer, self.winter) else 20.0
        return rain
