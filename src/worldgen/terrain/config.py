"""Terrain generation configuration models."""

from pydantic import BaseModel, Field, field_validator


class NoiseConfig(BaseModel):
    """Noise synthesis and relief parameters."""

    persistence: float = Field(
        default=0.95, description="Amplitude multiplier applied per octave"
    )
    high_range_divisor: int = Field(
        default=8, ge=1, description="Octave count; high range is size / divisor"
    )
    height_scale: float = Field(
        default=10.0, description="Multiplier turning [0, 1] noise into elevation"
    )


class ClimateConfig(BaseModel):
    """Seasonal climate parameters."""

    base_temperature: float = Field(
        default=14.0, description="Starting temperature in Celsius before zone shifts"
    )


class HydrologyConfig(BaseModel):
    """River and lake parameters."""

    source_rainfall_min: float = Field(
        default=20.0, description="Mean rainfall a mountain needs to spring a river"
    )
    river_rainfall_boost: float = Field(
        default=20.0, description="Rainfall added to every river cell per season"
    )
    river_factor: int = Field(
        default=1, description="AdjustRainfall factor applied along river paths"
    )
    lake_rainfall_min: float = Field(
        default=1000.0, description="Mean rainfall above which a dry cell floods"
    )
    lake_factor: int = Field(
        default=5, description="AdjustRainfall factor applied around lakes"
    )


class TerrainConfig(BaseModel):
    """Complete terrain generation configuration."""

    seed: int = Field(default=42, description="Random seed for reproducibility")
    size: int = Field(default=128, description="Grid edge length (power of two)")
    seasons: int = Field(default=4, description="Number of seasons per year")

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    climate: ClimateConfig = Field(default_factory=ClimateConfig)
    hydrology: HydrologyConfig = Field(default_factory=HydrologyConfig)

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )

    @field_validator("size")
    @classmethod
    def _size_is_power_of_two(cls, value: int) -> int:
        if value <= 0 or value & (value - 1):
            raise ValueError(f"size must be a positive power of two, got {value}")
        return value

    @field_validator("seasons")
    @classmethod
    def _seasons_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"seasons must be positive, got {value}")
        return value

    @property
    def high_range(self) -> int:
        """Largest relief step; at least one cell."""
        return max(1, self.size // self.noise.high_range_divisor)

    @property
    def octaves(self) -> int:
        """Number of noise octaves (size / high range)."""
        return self.size // self.high_range

    @property
    def summer(self) -> int:
        """Index of the northern summer season (1 of 4)."""
        return self.seasons // 4

    @property
    def winter(self) -> int:
        """Index of the northern winter season (3 of 4)."""
        return (3 * self.seasons) // 4
