"""Procedural world generation package.

This package implements the generation pipeline for seasonal toroidal
worlds: noise synthesis, height classification, climate simulation,
hydrology (rivers/lakes), and biome reclassification.
"""

from .config import ClimateConfig, HydrologyConfig, NoiseConfig, TerrainConfig
from .context import GenerationContext, ReliefStats
from .generator import GenerationResult, generate_terrain, generate_world
from .grid import TerrainGrid, neighbor, neighbors
from .validation import ValidationResult, validate_terrain

__all__ = [
    "ClimateConfig",
    "GenerationContext",
    "GenerationResult",
    "HydrologyConfig",
    "NoiseConfig",
    "ReliefStats",
    "TerrainConfig",
    "TerrainGrid",
    "ValidationResult",
    "generate_terrain",
    "generate_world",
    "neighbor",
    "neighbors",
    "validate_terrain",
]
