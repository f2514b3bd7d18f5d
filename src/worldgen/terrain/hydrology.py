"""Hydrology: river growth from rainy mountains, lake formation.

Rivers start on wet mountain cells and wander downhill one neighbour at a
time. A union-find over cells keeps a river from flowing back into its own
drainage basin. Every river step and every lake feeds moisture back into
the surrounding rainfall and nudges local temperature toward mild.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from ..terrain_types import TerrainSubtype
from ..types import Coord, Direction
from .climate import deposit_wind_rainfall
from .config import HydrologyConfig
from .context import GenerationContext
from .disjoint_set import DisjointSet, basin_forest, cell_key
from .grid import TerrainGrid

logger = logging.getLogger(__name__)

# Index table for random exit draws. The first draw covers [0, 7), so the
# last entry is only reachable through the narrowing search or the scan.
RIVER_DIRECTIONS: tuple[Direction, ...] = (
    Direction.SOUTHWEST,
    Direction.SOUTH,
    Direction.SOUTHEAST,
    Direction.WEST,
    Direction.EAST,
    Direction.NORTHWEST,
    Direction.NORTH,
    Direction.NORTHEAST,
)

NAME_ADJECTIVES = (
    "windy",
    "grey",
    "gloomy",
    "ringing",
    "whistling",
    "rolling",
    "endless",
    "cursed",
    "wild",
    "eternal",
)

NAME_NOUNS = (
    "waters",
    "waters",
    "river",
    "waters",
    "rapids",
    "rapids",
    "torrent",
    "torrent",
    "river",
    "river",
)


@dataclass
class River:
    """A river path from its source to where it ends."""

    name: str
    path: list[Coord] = field(default_factory=list)

    @property
    def source(self) -> Coord:
        return self.path[0]

    @property
    def mouth(self) -> Coord:
        return self.path[-1]

    def __len__(self) -> int:
        return len(self.path)


def river_name(rng: np.random.Generator) -> str:
    """Draw a river name such as "The wild rapids"."""
    adjective = NAME_ADJECTIVES[int(rng.integers(0, 10))]
    noun = NAME_NOUNS[int(rng.integers(0, 10))]
    return f"The {adjective} {noun}"


def adjust_rainfall(grid: TerrainGrid, row: int, column: int, factor: int) -> None:
    """Moisten a cell and its neighbours and pull their temperature toward mild.

    Applied to every season. The cell gets 2 * factor rain and a strong
    temperature correction; each neighbour gets factor rain and a weak one.
    """
    grid.rainfall[:, row, column] += 2 * factor
    temp = grid.temperature[:, row, column]
    grid.temperature[:, row, column] = np.where(
        temp < 15, temp + 5, np.where(temp > 25, temp - 5, temp + 1)
    )

    for _, (n_row, n_column) in grid.neighbors(row, column):
        grid.rainfall[:, n_row, n_column] += factor
        temp = grid.temperature[:, n_row, n_column]
        grid.temperature[:, n_row, n_column] = np.where(
            temp < 10, temp + 1, np.where(temp > 30, temp - 1, temp)
        )


def end_tag(subtype: TerrainSubtype) -> str:
    """Render tag for a cell where a river starts or stops."""
    return f"{subtype.label}end"


class HydrologyEngine:
    """Grows rivers and forms lakes on a grid with computed climate."""

    def __init__(self, config: HydrologyConfig, grid: TerrainGrid, basins: DisjointSet | None = None):
        self.config = config
        self.grid = grid
        self.basins = basins if basins is not None else basin_forest(grid.cell_count)

    def run(self, ctx: GenerationContext) -> tuple[list[River], list[Coord]]:
        """Seed every river, then flood lakes.

        Returns:
            (rivers, lake cells).
        """
        ctx.basins = self.basins
        rivers = self.seed_rivers(ctx.rng)
        lakes = self.form_lakes()
        logger.info(f"Hydrology: {len(rivers)} rivers, {len(lakes)} lakes")
        return rivers, lakes

    def _key(self, row: int, column: int) -> int:
        return cell_key(row, column, self.grid.size)

    def valid_direction(self, row: int, column: int, index: int) -> Coord | None:
        """Neighbour a river at (row, column) may flow into, or None.

        The neighbour must be in a different basin, no higher than the
        current cell and free of rivers, and the current cell must not be
        a sink (sea, lake or ice).
        """
        grid = self.grid
        if grid.subtype_at(row, column).stops_rivers:
            return None

        n_row, n_column = grid.neighbor(row, column, RIVER_DIRECTIONS[index])
        if self.basins.connected(self._key(row, column), self._key(n_row, n_column)):
            return None
        if grid.elevation[n_row, n_column] > grid.elevation[row, column]:
            return None
        if grid.has_river[n_row, n_column]:
            return None
        return n_row, n_column

    def has_valid_exit(self, row: int, column: int) -> bool:
        return any(
            self.valid_direction(row, column, index) is not None
            for index in range(len(RIVER_DIRECTIONS))
        )

    def choose_exit(self, row: int, column: int, rng: np.random.Generator) -> tuple[Direction, Coord] | None:
        """Pick the direction a river leaves a cell.

        One random draw first. On failure the draw window [lo, hi] narrows
        after every miss; once it is empty the table is scanned in order.

        Returns:
            (direction, neighbour) or None when no exit exists.
        """
        index = int(rng.integers(0, 7))
        target = self.valid_direction(row, column, index)

        lo, hi = 0, 7
        while target is None and self.has_valid_exit(row, column):
            if lo > hi:
                for index in range(len(RIVER_DIRECTIONS)):
                    target = self.valid_direction(row, column, index)
                    if target is not None:
                        break
                break

            index = lo if hi <= lo else int(rng.integers(lo, hi))
            target = self.valid_direction(row, column, index)
            if index >= hi // 2:
                hi -= 1
            else:
                lo += 1

        if target is None:
            return None
        return RIVER_DIRECTIONS[index], target

    def grow_river(self, row: int, column: int, rng: np.random.Generator) -> River:
        """Start a river at a source cell and follow it until it stops."""
        grid = self.grid
        river = River(name=river_name(rng), path=[(row, column)])

        grid.river_entrance[row, column] = Direction.STILL
        grid.has_river[row, column] = True
        grid.river_name[row, column] = river.name

        while (
            not grid.subtype_at(row, column).stops_rivers
            and grid.river_exit[row, column] != Direction.STILL
        ):
            grid.rainfall[:, row, column] += self.config.river_rainfall_boost
            for season in range(grid.seasons):
                deposit_wind_rainfall(grid, row, column, season)

            exit_ = self.choose_exit(row, column, rng)
            if exit_ is None:
                grid.render_tag[row, column] = end_tag(grid.subtype_at(row, column))
                grid.river_exit[row, column] = Direction.STILL
                break

            direction, (n_row, n_column) = exit_
            self.basins.merge(self._key(n_row, n_column), self._key(row, column))
            grid.river_exit[row, column] = direction
            grid.river_entrance[n_row, n_column] = direction.opposite
            grid.has_river[n_row, n_column] = True
            grid.river_name[n_row, n_column] = river.name

            row, column = n_row, n_column
            river.path.append((row, column))
            adjust_rainfall(grid, row, column, self.config.river_factor)

        logger.debug(f"{river.name}: {len(river)} cells from {river.source} to {river.mouth}")
        return river

    def is_source(self, row: int, column: int) -> bool:
        """Whether a river can spring from this cell right now."""
        grid = self.grid
        subtype = grid.subtype_at(row, column)
        if grid.has_river[row, column] or subtype.stops_rivers or not subtype.is_mountain:
            return False
        if grid.rainfall_mean(row, column) <= self.config.source_rainfall_min:
            return False
        return any(not grid.has_river[n] for _, n in grid.neighbors(row, column))

    def seed_rivers(self, rng: np.random.Generator) -> list[River]:
        """Scan the grid in row-major order and grow a river from each source."""
        rivers = []
        for row, column in self.grid.coords():
            if self.is_source(row, column):
                rivers.append(self.grow_river(row, column, rng))
        return rivers

    def form_lakes(self) -> list[Coord]:
        """Flood every river-free cell whose mean rainfall is too high.

        Each lake wets its surroundings, which can push neighbours over the
        limit, so the scan repeats until a full pass floods nothing.
        """
        grid = self.grid
        limit = self.config.lake_rainfall_min
        lakes: list[Coord] = []

        flooded = True
        while flooded:
            flooded = False
            for row, column in grid.coords():
                if grid.has_river[row, column] or grid.subtype[row, column] == TerrainSubtype.LAKE:
                    continue
                if grid.rainfall_mean(row, column) <= limit:
                    continue

                grid.render_tag[row, column] = end_tag(grid.subtype_at(row, column))
                grid.subtype[row, column] = TerrainSubtype.LAKE
                adjust_rainfall(grid, row, column, self.config.lake_factor)
                for _, (n_row, n_column) in grid.neighbors(row, column):
                    adjust_rainfall(grid, n_row, n_column, self.config.lake_factor)

                lakes.append((row, column))
                flooded = True

        return lakes
