"""Main terrain generation orchestration."""

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from ..exceptions import GenerationError
from ..terrain_types import TerrainSubtype, TerrainType
from ..types import Coord
from ..world import World
from .biomes import BiomeClassifier
from .classification import HeightClassifier
from .climate import ClimateSimulator
from .config import TerrainConfig
from .context import GenerationContext, ReliefStats
from .grid import TerrainGrid
from .hydrology import HydrologyEngine, River
from .noise import generate_noise
from .validation import ValidationResult, validate_terrain

logger = logging.getLogger(__name__)


class GenerationResult:
    """Result of terrain generation with all intermediate data."""

    def __init__(
        self,
        grid: TerrainGrid,
        config: TerrainConfig,
        relief: ReliefStats,
        noise: NDArray[np.float64],
        rivers: list[River],
        lakes: list[Coord],
        validation: ValidationResult,
    ):
        self.grid = grid
        self.config = config
        self.relief = relief
        self.noise = noise
        self.rivers = rivers
        self.lakes = lakes
        self.validation = validation


def generate_terrain(config: TerrainConfig) -> GenerationResult:
    """Generate a complete seasonal world grid from configuration.

    Args:
        config: Terrain generation configuration.

    Returns:
        GenerationResult with the frozen grid and intermediate data.

    Raises:
        GenerationError: If the finished grid fails validation.
    """
    ctx = GenerationContext.create(config)
    size = config.size

    logger.info(
        f"Generating terrain {size}x{size} with {config.seasons} seasons, seed {config.seed}"
    )

    # Stage A: Noise
    logger.info(f"Stage A: Generating noise ({config.octaves} octaves)...")
    noise = generate_noise(size, config.octaves, ctx.rng, config.noise.persistence)

    # Stage B: Height classification
    logger.info("Stage B: Classifying heights...")
    ctx.relief = HeightClassifier(config.noise.height_scale).classify(ctx.grid, noise)
    relief = ctx.relief
    logger.info(
        f"Relief {relief.lowest:.2f}..{relief.highest:.2f}: "
        f"deep ocean <= {relief.deep_ocean_limit:.2f}, water <= {relief.water_limit:.2f}, "
        f"hill >= {relief.hill_limit:.2f}, mountain >= {relief.mountain_limit:.2f}"
    )

    # Stage C: Climate
    logger.info("Stage C: Simulating climate...")
    ClimateSimulator.from_context(ctx).run(ctx)

    # Stage D: Hydrology
    logger.info("Stage D: Growing rivers and lakes...")
    rivers, lakes = HydrologyEngine(config.hydrology, ctx.grid).run(ctx)
    river_cells = int(np.count_nonzero(ctx.grid.has_river))
    logger.info(f"Grew {len(rivers)} rivers over {river_cells} cells, formed {len(lakes)} lakes")

    # Stage E: Biomes
    logger.info("Stage E: Classifying biomes...")
    BiomeClassifier.from_context(ctx).run(ctx)

    # Stage F: Validation
    logger.info("Stage F: Validating...")
    validation = validate_terrain(ctx.grid, relief, config)
    if not validation.passed:
        raise GenerationError(
            f"Generated terrain failed validation: {'; '.join(validation.errors)}"
        )

    _log_terrain_stats(ctx.grid)

    # Debug output if enabled
    if config.debug_output_dir:
        _dump_debug_images(Path(config.debug_output_dir), ctx.grid)

    ctx.grid.freeze()

    return GenerationResult(
        grid=ctx.grid,
        config=config,
        relief=relief,
        noise=noise,
        rivers=rivers,
        lakes=lakes,
        validation=validation,
    )


def generate_world(config: TerrainConfig) -> World:
    """Generate a read-only World from configuration.

    Args:
        config: Terrain generation configuration.

    Returns:
        World mapping (row, column) to cell records.
    """
    result = generate_terrain(config)
    return World(result.grid, seed=config.seed)


def _log_terrain_stats(grid: TerrainGrid) -> None:
    """Log terrain generation statistics."""
    total = grid.cell_count

    logger.info(f"Terrain stats ({total:,} cells):")
    type_counts = np.bincount(grid.terrain_type.ravel(), minlength=len(TerrainType))
    for terrain_type in TerrainType:
        count = int(type_counts[terrain_type])
        if count:
            logger.info(f"  {terrain_type.label}: {count:,} ({count / total * 100:.1f}%)")

    subtype_counts = np.bincount(grid.subtype.ravel(), minlength=len(TerrainSubtype))
    for subtype in TerrainSubtype:
        count = int(subtype_counts[subtype])
        if count:
            logger.debug(f"  subtype {subtype.label}: {count:,} ({count / total * 100:.1f}%)")

    logger.info(
        f"  temperature {grid.temperature.min():.1f}..{grid.temperature.max():.1f} C, "
        f"rainfall {grid.rainfall.min():.1f}..{grid.rainfall.max():.1f}"
    )


def _debug_layers(grid: TerrainGrid) -> dict[str, tuple[NDArray, str]]:
    """Named 2D layers and their colormaps; seasonal layers get one map per season."""
    layers: dict[str, tuple[NDArray, str]] = {
        "elevation": (grid.elevation, "terrain"),
        "subtype": (grid.subtype, "tab20"),
        "rivers": (grid.has_river, "Blues"),
        "nearby_land": (grid.nearby_land, "Greens"),
    }
    for season in range(grid.seasons):
        layers[f"temperature_{season}"] = (grid.temperature[season], "coolwarm")
        layers[f"rainfall_{season}"] = (grid.rainfall[season], "YlGnBu")
        layers[f"pressure_{season}"] = (grid.pressure[season], "viridis")
    return layers


def _dump_debug_images(output_dir: Path, grid: TerrainGrid) -> None:
    """Save the grid's layers as PNGs for debugging.

    Args:
        output_dir: Directory to save images.
        grid: Fully generated grid.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.warning("matplotlib not available, skipping debug images")
        return

    output_dir.mkdir(parents=True, exist_ok=True)

    for name, (layer, cmap) in _debug_layers(grid).items():
        fig, ax = plt.subplots(figsize=(8, 8))
        if layer.dtype == np.uint8:
            ax.imshow(layer, cmap=cmap, vmin=0, vmax=len(TerrainSubtype) - 1, interpolation="nearest")
        else:
            image = ax.imshow(layer.astype(np.float64), cmap=cmap, interpolation="nearest")
            if layer.dtype != bool:
                fig.colorbar(image, ax=ax, shrink=0.8)
        ax.set_title(name.replace("_", " "))
        ax.set_axis_off()
        fig.savefig(output_dir / f"{name}.png", dpi=100, bbox_inches="tight")
        plt.close(fig)

    logger.info(f"Debug images for {grid.seasons} seasons saved to {output_dir}")
