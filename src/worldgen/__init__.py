"""Seasonal toroidal world generator."""

from .catalog import SpriteCatalog
from .exceptions import (
    CellNotFoundError,
    GenerationError,
    GridInvariantError,
    WorldGenError,
)
from .inspector import describe_cell
from .terrain import TerrainConfig, generate_terrain, generate_world
from .terrain_types import TerrainSubtype, TerrainType
from .types import Direction, WindSample
from .world import CellRecord, World

__all__ = [
    # Types
    "Direction",
    "WindSample",
    "TerrainType",
    "TerrainSubtype",
    # World
    "World",
    "CellRecord",
    # Generation
    "TerrainConfig",
    "generate_terrain",
    "generate_world",
    # Consumers
    "SpriteCatalog",
    "describe_cell",
    # Exceptions
    "WorldGenError",
    "GridInvariantError",
    "GenerationError",
    "CellNotFoundError",
]
