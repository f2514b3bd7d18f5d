"""Custom exceptions for world generation."""


class WorldGenError(Exception):
    """Base exception for world generation errors."""

    pass


class GridInvariantError(WorldGenError):
    """Raised when toroidal adjacency is violated (an internal defect)."""

    pass


class GenerationError(WorldGenError):
    """Raised when a finished grid fails validation."""

    pass


class CellNotFoundError(WorldGenError, KeyError):
    """Raised when a queried coordinate is not on the grid."""

    pass
