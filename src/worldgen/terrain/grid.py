"""Toroidal terrain grid: per-layer cell storage and 8-neighbour adjacency.

Cells are addressed by (row, column) in [0, size). Neighbours are derived by
modular arithmetic, so every cell has exactly eight of them and the edges
wrap independently on both axes.
"""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import GridInvariantError
from ..terrain_types import TerrainSubtype, TerrainType
from ..types import DIRECTION_DELTAS, Coord, Direction


def neighbor(row: int, column: int, direction: Direction, size: int) -> Coord:
    """Return the toroidal neighbour of a cell in a compass direction.

    Args:
        row: Cell row.
        column: Cell column.
        direction: One of the eight compass points.
        size: Grid edge length.

    Returns:
        (row, column) of the neighbour.

    Raises:
        GridInvariantError: If the cell is off the grid or the direction is
            not a compass point.
    """
    if not (0 <= row < size and 0 <= column < size):
        raise GridInvariantError(f"Cell ({row}, {column}) is outside a {size}x{size} torus")
    delta = DIRECTION_DELTAS.get(direction)
    if delta is None:
        raise GridInvariantError(f"{direction.name} has no neighbour offset")
    d_row, d_column = delta
    return (row + d_row) % size, (column + d_column) % size


def neighbors(row: int, column: int, size: int) -> list[tuple[Direction, Coord]]:
    """Return all eight (direction, coordinate) neighbours of a cell."""
    return [(direction, neighbor(row, column, direction, size)) for direction in DIRECTION_DELTAS]


class TerrainGrid:
    """Owns every cell layer of one generated world.

    Scalar layers have shape (size, size); seasonal layers have shape
    (seasons, size, size). Seasonal float layers start as NaN so that a cell
    a stage forgot to fill stays detectable.
    """

    def __init__(self, size: int, seasons: int):
        self.size = size
        self.seasons = seasons

        shape = (size, size)
        seasonal = (seasons, size, size)

        self.elevation = np.zeros(shape, dtype=np.float64)
        self.terrain_type = np.full(shape, TerrainType.EMPTY, dtype=np.uint8)
        self.subtype = np.full(shape, TerrainSubtype.EMPTY, dtype=np.uint8)
        self.nearby_land = np.zeros(shape, dtype=np.int32)

        self.temperature = np.full(seasonal, np.nan, dtype=np.float64)
        self.pressure = np.full(seasonal, np.nan, dtype=np.float64)
        self.rainfall = np.full(seasonal, np.nan, dtype=np.float64)
        self.wind_speed = np.full(seasonal, np.nan, dtype=np.float64)
        self.wind_direction = np.full(seasonal, Direction.NONE, dtype=np.uint8)

        self.has_river = np.zeros(shape, dtype=bool)
        self.river_name = np.full(shape, "", dtype=object)
        self.river_entrance = np.full(shape, Direction.NONE, dtype=np.uint8)
        self.river_exit = np.full(shape, Direction.NONE, dtype=np.uint8)
        self.render_tag = np.full(shape, None, dtype=object)

        self._frozen = False

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    @property
    def frozen(self) -> bool:
        return self._frozen

    def coords(self):
        """Iterate over every (row, column) in row-major order."""
        for row in range(self.size):
            for column in range(self.size):
                yield row, column

    def neighbor(self, row: int, column: int, direction: Direction) -> Coord:
        return neighbor(row, column, direction, self.size)

    def neighbors(self, row: int, column: int) -> list[tuple[Direction, Coord]]:
        return neighbors(row, column, self.size)

    def shifted(self, layer: NDArray, direction: Direction) -> NDArray:
        """View each cell's neighbour value in a direction.

        result[..., r, c] == layer[..., (r + dr) % size, (c + dc) % size]
        """
        d_row, d_column = DIRECTION_DELTAS[direction]
        return np.roll(layer, shift=(-d_row, -d_column), axis=(-2, -1))

    def subtype_at(self, row: int, column: int) -> TerrainSubtype:
        return TerrainSubtype(int(self.subtype[row, column]))

    def subtype_mask(self, subtypes: frozenset[TerrainSubtype]) -> NDArray[np.bool_]:
        """Boolean mask of cells whose subtype is in the given set."""
        return np.isin(self.subtype, [int(s) for s in subtypes])

    def rainfall_mean(self, row: int, column: int) -> float:
        """Mean rainfall over all seasons for one cell."""
        return float(self.rainfall[:, row, column].mean())

    def freeze(self) -> None:
        """Make every layer read-only. The grid must not change afterwards."""
        for layer in self._layers():
            layer.flags.writeable = False
        self._frozen = True

    def _layers(self) -> list[NDArray]:
        return [
            self.elevation,
            self.terrain_type,
            self.subtype,
            self.nearby_land,
            self.temperature,
            self.pressure,
            self.rainfall,
            self.wind_speed,
            self.wind_direction,
            self.has_river,
            self.river_name,
            self.river_entrance,
            self.river_exit,
            self.render_tag,
        ]
