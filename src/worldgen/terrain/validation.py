"""Post-generation validation."""

import logging

import numpy as np

from ..terrain_types import GENERATED_TERRAIN_TYPES, TerrainSubtype, TerrainType
from ..types import Direction
from .config import TerrainConfig
from .context import ReliefStats
from .grid import TerrainGrid

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of terrain validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_terrain(
    grid: TerrainGrid,
    relief: ReliefStats,
    config: TerrainConfig,
) -> ValidationResult:
    """Validate a generated grid against the world invariants.

    Args:
        grid: Fully generated grid.
        relief: Final relief statistics.
        config: Generation configuration.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Every layer covers the whole torus
    _check_shapes(grid, config, result)

    # Check 2: Climate fully populated
    _check_climate_populated(grid, result)

    # Check 3: Types and subtypes in range
    _check_classification(grid, result)

    # Check 4: River cells link up
    _check_river_links(grid, result)

    # Check 5: No dry-land cell left above the lake limit
    _check_lakes(grid, config.hydrology.lake_rainfall_min, result)

    # Check 6: Relief thresholds ordered, world has land and water
    _check_relief(grid, relief, result)

    # Log results
    if result.passed:
        logger.info("Terrain validation passed")
    else:
        logger.warning(f"Terrain validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_shapes(grid: TerrainGrid, config: TerrainConfig, result: ValidationResult) -> None:
    """Check layer shapes against the configured size and season count."""
    flat = (config.size, config.size)
    seasonal = (config.seasons, config.size, config.size)

    for name, layer in (
        ("elevation", grid.elevation),
        ("terrain_type", grid.terrain_type),
        ("subtype", grid.subtype),
        ("has_river", grid.has_river),
        ("render_tag", grid.render_tag),
    ):
        if layer.shape != flat:
            result.add_error(f"{name} has shape {layer.shape}, expected {flat}")

    for name, layer in (
        ("temperature", grid.temperature),
        ("pressure", grid.pressure),
        ("rainfall", grid.rainfall),
        ("wind_speed", grid.wind_speed),
        ("wind_direction", grid.wind_direction),
    ):
        if layer.shape != seasonal:
            result.add_error(f"{name} has shape {layer.shape}, expected {seasonal}")


def _check_climate_populated(grid: TerrainGrid, result: ValidationResult) -> None:
    """Check that no seasonal value was left unset."""
    for name, layer in (
        ("temperature", grid.temperature),
        ("pressure", grid.pressure),
        ("rainfall", grid.rainfall),
        ("wind_speed", grid.wind_speed),
    ):
        missing = int(np.count_nonzero(~np.isfinite(layer)))
        if missing:
            result.add_error(f"{name} has {missing} unset values")

    if np.any(grid.wind_speed < 0):
        result.add_error("Negative wind speed")

    unset_wind = int(np.count_nonzero(grid.wind_direction == Direction.NONE))
    if unset_wind:
        result.add_error(f"{unset_wind} wind samples have no direction")


def _check_classification(grid: TerrainGrid, result: ValidationResult) -> None:
    """Check terrain types and subtypes are known values."""
    allowed_types = [int(t) for t in GENERATED_TERRAIN_TYPES]
    stray_types = int(np.count_nonzero(~np.isin(grid.terrain_type, allowed_types)))
    if stray_types:
        result.add_error(f"{stray_types} cells have an unexpected terrain type")

    known = [int(s) for s in TerrainSubtype if s != TerrainSubtype.EMPTY]
    stray_subtypes = int(np.count_nonzero(~np.isin(grid.subtype, known)))
    if stray_subtypes:
        result.add_error(f"{stray_subtypes} cells have no valid subtype")


def _check_river_links(grid: TerrainGrid, result: ValidationResult) -> None:
    """Check each river exit is matched by the opposite entrance downstream."""
    broken = 0
    for row, column in grid.coords():
        exit_ = Direction(int(grid.river_exit[row, column]))
        if not exit_.is_compass:
            continue
        n_row, n_column = grid.neighbor(row, column, exit_)
        if (
            not grid.has_river[n_row, n_column]
            or grid.river_entrance[n_row, n_column] != exit_.opposite
            or grid.river_name[n_row, n_column] != grid.river_name[row, column]
        ):
            broken += 1

    if broken:
        result.add_error(f"{broken} river exits have no matching entrance")


def _check_lakes(grid: TerrainGrid, limit: float, result: ValidationResult) -> None:
    """Check that every very wet river-free cell became a lake (or froze)."""
    mean_rain = grid.rainfall.mean(axis=0)
    settled = np.isin(grid.subtype, [TerrainSubtype.LAKE, TerrainSubtype.ICE])
    flooded = ~grid.has_river & ~settled & (mean_rain > limit)
    count = int(np.count_nonzero(flooded))
    if count:
        result.add_error(f"{count} river-free cells exceed the lake limit {limit:g}")


def _check_relief(grid: TerrainGrid, relief: ReliefStats, result: ValidationResult) -> None:
    """Check threshold order and that both water and land exist."""
    if not relief.ordered:
        result.add_warning(
            f"Relief thresholds out of order: deep={relief.deep_ocean_limit:.3f} "
            f"water={relief.water_limit:.3f} hill={relief.hill_limit:.3f} "
            f"mountain={relief.mountain_limit:.3f}"
        )

    water = np.isin(grid.terrain_type, [TerrainType.OCEAN, TerrainType.WATER])
    if not water.any():
        result.add_warning("No ocean or water cells")
    if water.all():
        result.add_warning("No land cells")
