"""Biome reclassification from climate and rivers, and render tag selection."""

import logging

import numpy as np

from ..terrain_types import TerrainSubtype as T
from ..types import Direction
from .context import GenerationContext, ReliefStats
from .grid import TerrainGrid
from .zones import LatitudeZones

logger = logging.getLogger(__name__)

# Compass codes are written into render tags in this order.
TAG_ORDER: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.WEST,
    Direction.EAST,
    Direction.NORTHEAST,
    Direction.NORTHWEST,
    Direction.SOUTHEAST,
    Direction.SOUTHWEST,
)


def render_tag(
    subtype: T,
    has_river: bool,
    entrance: Direction,
    exit_: Direction,
    current: str | None = None,
) -> str | None:
    """Symbolic image name for a cell.

    Args:
        subtype: Final subtype of the cell.
        has_river: Whether a river runs through the cell.
        entrance: Direction the river comes from.
        exit_: Direction the river leaves toward.
        current: Tag assigned by an earlier stage; sea cells keep it.

    Returns:
        Tag such as "plains", "forestend" or "NhillSE"; None for lakes.
    """
    if subtype == T.LAKE:
        return None
    if subtype == T.SEA:
        return current
    if subtype == T.ICE:
        return "ice"
    if not has_river:
        return subtype.label

    if (
        Direction.STILL in (entrance, exit_)
        or entrance == exit_
        or not (entrance.is_compass and exit_.is_compass)
    ):
        return f"{subtype.label}end"

    first, second = sorted((entrance, exit_), key=TAG_ORDER.index)
    return f"{first.code}{subtype.label}{second.code}"


class BiomeClassifier:
    """Applies the seasonal biome rules to every land cell."""

    def __init__(self, zones: LatitudeZones, relief: ReliefStats, summer: int, winter: int):
        self.zones = zones
        self.relief = relief
        self.summer = summer
        self.winter = winter

    @classmethod
    def from_context(cls, ctx: GenerationContext) -> "BiomeClassifier":
        return cls(ctx.zones, ctx.require_relief(), ctx.config.summer, ctx.config.winter)

    def run(self, ctx: GenerationContext) -> None:
        grid = ctx.grid
        for _ in range(grid.seasons):
            for row, column in grid.coords():
                self.reclassify(grid, row, column)
                grid.render_tag[row, column] = render_tag(
                    grid.subtype_at(row, column),
                    bool(grid.has_river[row, column]),
                    Direction(int(grid.river_entrance[row, column])),
                    Direction(int(grid.river_exit[row, column])),
                    grid.render_tag[row, column],
                )

        counts = np.bincount(grid.subtype.ravel(), minlength=len(T))
        present = {T(i).label: int(n) for i, n in enumerate(counts) if n}
        logger.info(f"Biomes: {present}")

    def _in_hill_band(self, height: float) -> bool:
        return self.relief.highest / 4 <= height < self.relief.highest

    def reclassify(self, grid: TerrainGrid, row: int, column: int) -> T:
        """Run every biome rule on one cell, in order, and store the result."""
        avg = grid.rainfall_mean(row, column)
        summer = float(grid.temperature[self.summer, row, column])
        winter = float(grid.temperature[self.winter, row, column])
        north = bool(self.zones.is_north(row))
        local, other = (summer, winter) if north else (winter, summer)
        height = float(grid.elevation[row, column])

        growing = summer >= 5 or winter >= 5
        frozen = summer <= 0 and winter <= 0
        s = grid.subtype_at(row, column)

        # Forest growth
        if (s == T.HILL and avg >= 50) or (s == T.PLAINS and avg >= 100):
            if local >= 15 and other > 5:
                s = T.FOREST
            elif local >= 5:
                s = T.SNOWFOREST
        elif (s == T.SNOWHILL and avg >= 50) or (s == T.TUNDRA and avg >= 100):
            if growing:
                s = T.SNOWFOREST

        # Drought
        if avg <= 30 and growing:
            if s == T.HILL:
                s = T.DRYHILL
            elif s == T.PLAINS:
                s = T.DESERT
            elif s == T.FOREST:
                s = T.DRYHILL if self._in_hill_band(height) else T.DESERT

        # Recovery from drought
        if s in (T.DESERT, T.DRYHILL) and growing:
            if avg > 50:
                s = T.FOREST
            elif avg > 30:
                s = T.PLAINS if s == T.DESERT else T.HILL

        if summer > 0 or winter > 0:
            if local < 10:
                if s == T.HILL:
                    s = T.SNOWHILL
                elif s == T.PLAINS:
                    s = T.TUNDRA
                elif s == T.DESERT:
                    s = T.SNOWDESERT
                elif s == T.FOREST:
                    s = T.SNOWFOREST if local >= 5 else T.TUNDRA
            else:
                if s == T.SNOWHILL:
                    s = T.HILL
                elif s == T.TUNDRA:
                    s = T.PLAINS
                elif s == T.SNOWDESERT:
                    s = T.DESERT
                elif s == T.SNOWFOREST and local >= 15:
                    s = T.FOREST
        elif frozen:
            if s == T.MOUNTAIN:
                s = T.SNOWMOUNTAIN
            elif s == T.HILL:
                s = T.SNOWHILL
            elif s in (T.PLAINS, T.FOREST):
                s = T.SNOWDESERT
            elif s in (T.LAKE, T.SEA):
                s = T.ICE

        if self.zones.is_polar(row) and local >= 5:
            if s == T.FOREST:
                s = T.SNOWFOREST
            elif s == T.PLAINS:
                s = T.TUNDRA

        if s in (T.TUNDRA, T.SNOWFOREST) and (avg < 30 or frozen):
            s = T.SNOWDESERT

        if s == T.SNOWFOREST and local < 5:
            s = T.SNOWHILL if self._in_hill_band(height) else T.TUNDRA

        grid.subtype[row, column] = s
        return s
