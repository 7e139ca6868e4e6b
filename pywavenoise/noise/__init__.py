"""
Wavelet noise module for pywavenoise.

Builds the shared band-limited 128^3 wavelet noise tile and computes wavelet
turbulence energy coefficients on simulation grids.

Components:
- Tile generation: white noise -> separable periodic down/upsampling ->
  band-limited residual -> even/odd parity correction, built once per process
- Tile cache: headerless float32 blob on disk
- Coefficients: clamped down/upsampling of a simulation grid, residual
  magnitude smoothed over axis neighbours
- WaveletNoiseField: per-field position/value transforms over the shared tile

Usage:
    import pywavenoise as pwn

    # Shared tile (built on first call only)
    tile = pwn.noise.generate_tile()

    # Noise field bound to a 64^3 simulation
    field = pwn.noise.WaveletNoiseField((64, 64, 64))

    # Turbulence energy weights of a density grid, in place
    pwn.noise.compute_coefficients(density, scratch1, scratch2)

Author: B.G.
"""

from .random_stream import RandomStream
from .tile import (
    build_noise_tile,
    generate_tile,
    get_noise_tile,
    parity_offset,
    parity_shift_kernel,
    reset_noise_tile,
    tile_volume,
)
from .tile_cache import load_tile, save_tile, tile_cache_path
from .coefficients import compute_coefficients
from .wavelet_field import WaveletNoiseField

__all__ = [
    "RandomStream",
    "build_noise_tile",
    "generate_tile",
    "get_noise_tile",
    "parity_offset",
    "parity_shift_kernel",
    "reset_noise_tile",
    "tile_volume",
    "load_tile",
    "save_tile",
    "tile_cache_path",
    "compute_coefficients",
    "WaveletNoiseField",
]
