"""Latitude bands derived from the grid size.

Rows run from the north pole (row 0) to the south pole (row size - 1). The
bands are integer row limits computed from the last row index.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class LatitudeZones:
    """Row limits of the polar, desert and equatorial bands."""

    half: int
    tenth: int
    equator_top: int
    equator_bottom: int
    polar_north: int
    polar_south: int
    desert_north: int
    desert_south: int

    @classmethod
    def for_size(cls, size: int) -> "LatitudeZones":
        max_index = size - 1
        half = max_index // 2
        tenth = max_index // 10
        equator_top = half - tenth
        equator_bottom = half + tenth
        return cls(
            half=half,
            tenth=tenth,
            equator_top=equator_top,
            equator_bottom=equator_bottom,
            polar_north=tenth,
            polar_south=max_index - tenth,
            desert_north=equator_top - tenth,
            desert_south=equator_bottom + tenth,
        )

    def is_north(self, row):
        """Northern hemisphere includes the middle row."""
        return row <= self.half

    def is_polar(self, row):
        """Polar rows including the band limits."""
        return (row <= self.polar_north) | (row >= self.polar_south)

    def is_deep_polar(self, row):
        """Polar rows strictly beyond the band limits."""
        return (row < self.polar_north) | (row > self.polar_south)

    def is_equatorial(self, row):
        """Equatorial rows including the band limits."""
        return (row >= self.equator_top) & (row <= self.equator_bottom)

    def is_inner_equatorial(self, row):
        """Equatorial rows strictly inside the band limits."""
        return (row > self.equator_top) & (row < self.equator_bottom)

    def is_desert(self, row):
        """Subtropical desert belts on either side of the equator."""
        north = (row >= self.desert_north) & (row < self.equator_top)
        south = (row > self.equator_bottom) & (row <= self.desert_south)
        return north | south

    def row_grid(self, size: int) -> NDArray[np.int64]:
        """(size, size) array holding each cell's row index."""
        return np.broadcast_to(np.arange(size)[:, np.newaxis], (size, size))
