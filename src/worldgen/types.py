"""Core types for the world generator: compass directions and wind samples."""

from enum import IntEnum

from pydantic import BaseModel


class Direction(IntEnum):
    """Compass direction laid out like a numeric keypad.

    NONE marks "no direction recorded yet"; STILL marks a deliberate absence
    of flow (calm air, a river source or a river end).
    """

    NONE = 0
    SOUTHWEST = 1
    SOUTH = 2
    SOUTHEAST = 3
    WEST = 4
    STILL = 5
    EAST = 6
    NORTHWEST = 7
    NORTH = 8
    NORTHEAST = 9

    @property
    def is_compass(self) -> bool:
        """Whether this is one of the eight compass points."""
        return self in DIRECTION_DELTAS

    @property
    def opposite(self) -> "Direction":
        """Compass point facing the other way (NONE/STILL map to themselves)."""
        return OPPOSITES.get(self, self)

    @property
    def code(self) -> str:
        """Short compass code used in render tags (e.g. "NE")."""
        return DIRECTION_CODES.get(self, "")


# Row/column deltas. Rows grow southward, columns grow eastward.
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTHWEST: (-1, -1),
    Direction.NORTH: (-1, 0),
    Direction.NORTHEAST: (-1, 1),
    Direction.WEST: (0, -1),
    Direction.EAST: (0, 1),
    Direction.SOUTHWEST: (1, -1),
    Direction.SOUTH: (1, 0),
    Direction.SOUTHEAST: (1, 1),
}

OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.NORTHEAST: Direction.SOUTHWEST,
    Direction.SOUTHWEST: Direction.NORTHEAST,
    Direction.NORTHWEST: Direction.SOUTHEAST,
    Direction.SOUTHEAST: Direction.NORTHWEST,
}

DIRECTION_CODES: dict[Direction, str] = {
    Direction.NORTH: "N",
    Direction.SOUTH: "S",
    Direction.WEST: "W",
    Direction.EAST: "E",
    Direction.NORTHEAST: "NE",
    Direction.NORTHWEST: "NW",
    Direction.SOUTHEAST: "SE",
    Direction.SOUTHWEST: "SW",
}

# Order in which wind looks for the lowest surrounding pressure.
WIND_SCAN_ORDER: tuple[Direction, ...] = (
    Direction.NORTHWEST,
    Direction.NORTH,
    Direction.NORTHEAST,
    Direction.WEST,
    Direction.EAST,
    Direction.SOUTHWEST,
    Direction.SOUTH,
    Direction.SOUTHEAST,
)


class WindSample(BaseModel, frozen=True):
    """Wind for one cell in one season."""

    direction: Direction = Direction.STILL
    speed: float = 0.0

    def __str__(self) -> str:
        return f"{self.direction.name.lower()} {self.speed:g}"


# (row, column) on the grid.
Coord = tuple[int, int]
