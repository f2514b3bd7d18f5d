"""Read-only world snapshot handed to consumers after generation."""

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .exceptions import CellNotFoundError
from .terrain_types import TerrainSubtype, TerrainType
from .types import Coord, Direction, WindSample

if TYPE_CHECKING:
    from .terrain.grid import TerrainGrid


class CellRecord(BaseModel, frozen=True):
    """Immutable view of one generated cell."""

    row: int
    column: int
    elevation: float
    terrain_type: TerrainType
    subtype: TerrainSubtype
    render_tag: str | None = None
    nearby_land: int = 0

    temperature: tuple[float, ...] = ()
    pressure: tuple[float, ...] = ()
    rainfall: tuple[float, ...] = ()
    wind: tuple[WindSample, ...] = ()

    has_river: bool = False
    river_name: str = ""
    river_entrance: Direction = Direction.NONE
    river_exit: Direction = Direction.NONE

    @classmethod
    def from_grid(cls, grid: "TerrainGrid", row: int, column: int) -> "CellRecord":
        """Build a record from the grid layers at one coordinate."""
        seasons = range(grid.seasons)
        return cls(
            row=row,
            column=column,
            elevation=float(grid.elevation[row, column]),
            terrain_type=TerrainType(int(grid.terrain_type[row, column])),
            subtype=TerrainSubtype(int(grid.subtype[row, column])),
            render_tag=grid.render_tag[row, column],
            nearby_land=int(grid.nearby_land[row, column]),
            temperature=tuple(float(t) for t in grid.temperature[:, row, column]),
            pressure=tuple(float(p) for p in grid.pressure[:, row, column]),
            rainfall=tuple(float(r) for r in grid.rainfall[:, row, column]),
            wind=tuple(
                WindSample(
                    direction=Direction(int(grid.wind_direction[s, row, column])),
                    speed=float(grid.wind_speed[s, row, column]),
                )
                for s in seasons
            ),
            has_river=bool(grid.has_river[row, column]),
            river_name=str(grid.river_name[row, column]),
            river_entrance=Direction(int(grid.river_entrance[row, column])),
            river_exit=Direction(int(grid.river_exit[row, column])),
        )

    @property
    def position(self) -> Coord:
        return self.row, self.column

    @property
    def mean_rainfall(self) -> float:
        return sum(self.rainfall) / len(self.rainfall) if self.rainfall else 0.0


class World(Mapping[Coord, CellRecord]):
    """Mapping of (row, column) to CellRecord over a frozen grid.

    Records are built on demand from the grid layers, so a large world
    does not hold one model per cell.
    """

    def __init__(self, grid: "TerrainGrid", seed: int | None = None):
        if not grid.frozen:
            grid.freeze()
        self._grid = grid
        self.seed = seed

    @property
    def size(self) -> int:
        return self._grid.size

    @property
    def seasons(self) -> int:
        return self._grid.seasons

    @property
    def grid(self) -> "TerrainGrid":
        """Underlying layers; every array is read-only."""
        return self._grid

    def in_bounds(self, row: int, column: int) -> bool:
        """Check if a coordinate is on the grid."""
        return 0 <= row < self.size and 0 <= column < self.size

    def _require(self, row: int, column: int) -> None:
        if not self.in_bounds(row, column):
            raise CellNotFoundError(f"No cell at ({row}, {column}) in a {self.size}x{self.size} world")

    def cell(self, row: int, column: int) -> CellRecord:
        """Get the record at a coordinate.

        Raises:
            CellNotFoundError: If the coordinate is off the grid.
        """
        self._require(row, column)
        return CellRecord.from_grid(self._grid, row, column)

    def neighbors(self, row: int, column: int) -> dict[Direction, CellRecord]:
        """The eight cells around a coordinate, keyed by direction."""
        self._require(row, column)
        return {
            direction: CellRecord.from_grid(self._grid, n_row, n_column)
            for direction, (n_row, n_column) in self._grid.neighbors(row, column)
        }

    def __getitem__(self, key: Coord) -> CellRecord:
        try:
            row, column = key
        except (TypeError, ValueError):
            raise CellNotFoundError(f"Cell keys are (row, column) pairs, got {key!r}") from None
        return self.cell(row, column)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._grid.coords())

    def __len__(self) -> int:
        return self._grid.cell_count

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        row, column = key
        return isinstance(row, int) and isinstance(column, int) and self.in_bounds(row, column)
