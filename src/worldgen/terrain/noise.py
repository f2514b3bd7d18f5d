"""Noise synthesis for terrain generation.

Builds fractal value noise by block-sampling a white noise field at
power-of-two periods and blending the octaves with a persistence factor.
All sampling wraps at the grid edges so the result tiles on a torus.
"""

import numpy as np
from numpy.typing import NDArray


def white_noise(size: int, rng: np.random.Generator) -> NDArray[np.float64]:
    """Draw an independent value in [0, 1) for every cell.

    Args:
        size: Grid edge length.
        rng: Random number generator; consumes size * size draws.

    Returns:
        2D array of shape (size, size).
    """
    return rng.random((size, size))


def _sample_axis(size: int, period: int) -> tuple[NDArray[np.intp], NDArray[np.intp], NDArray[np.float64]]:
    """Lattice indices and blend weights along one axis for a sampling period."""
    index = np.arange(size)
    low = (index // period) * period
    high = (low + period) % size  # wrap around
    blend = (index - low) / period
    return low, high, blend


def smooth_noise(base: NDArray[np.float64], octave: int) -> NDArray[np.float64]:
    """Bilinearly interpolate the base noise sampled every 2**octave cells.

    Periods larger than the grid collapse onto the origin sample, which
    yields a constant field.

    Args:
        base: Square white noise field.
        octave: Octave index k; the sample period is 2**k.

    Returns:
        Smoothed field with the same shape as base.
    """
    size = base.shape[0]
    period = 1 << octave

    rows_low, rows_high, row_blend = _sample_axis(size, period)
    cols_low, cols_high, col_blend = _sample_axis(size, period)
    row_blend = row_blend[:, np.newaxis]
    col_blend = col_blend[np.newaxis, :]

    # blend along rows for the two sampled columns, then across columns
    left = base[np.ix_(rows_low, cols_low)] * (1 - row_blend) + base[np.ix_(rows_high, cols_low)] * row_blend
    right = base[np.ix_(rows_low, cols_high)] * (1 - row_blend) + base[np.ix_(rows_high, cols_high)] * row_blend

    return left * (1 - col_blend) + right * col_blend


def blend_octaves(
    base: NDArray[np.float64],
    octaves: int,
    persistence: float = 0.95,
) -> NDArray[np.float64]:
    """Blend smoothed octaves of a white noise field.

    Octaves are visited from the coarsest (highest index) down to 0. The
    running amplitude is multiplied by the persistence before each octave
    is accumulated, and the sum is divided by the total amplitude.

    Args:
        base: Square white noise field in [0, 1).
        octaves: Number of octaves to blend.
        persistence: Amplitude multiplier per octave.

    Returns:
        Normalized noise in [0, 1].
    """
    result = np.zeros_like(base, dtype=np.float64)
    amplitude = 1.0
    total_amplitude = 0.0

    for octave in range(octaves - 1, -1, -1):
        amplitude *= persistence
        total_amplitude += amplitude
        result += smooth_noise(base, octave) * amplitude

    if total_amplitude > 0:
        result /= total_amplitude
    return result


def generate_noise(
    size: int,
    octaves: int,
    rng: np.random.Generator,
    persistence: float = 0.95,
) -> NDArray[np.float64]:
    """Generate a normalized multi-octave noise field.

    Args:
        size: Grid edge length (power of two).
        octaves: Number of octaves.
        rng: Random number generator for the white noise.
        persistence: Amplitude multiplier per octave.

    Returns:
        2D array of shape (size, size) with values in [0, 1].
    """
    return blend_octaves(white_noise(size, rng), octaves, persistence)
