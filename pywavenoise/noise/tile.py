"""
Wavelet noise tile generation for pywavenoise.

Builds the canonical 128^3 periodic, band-limited noise tile:

1. Fill the tile with standard normal white noise from a seeded stream
2. Downsample and upsample every line along x, then y, then z (periodic filters)
3. Subtract the coarse reconstruction, keeping the band-limited residual
4. Add an odd-offset shifted copy of the residual to cancel the even/odd
   variance difference of the construction

The tile is process-wide shared state: generate_tile() builds or loads it at
most once per process behind a lock and publishes it read-only. Noise field
objects only hold coordinate transforms into this shared tile.

Author: B.G.
"""

import threading

import numpy as np
import taichi as ti

from .. import constants as cte
from ..filters import (
    axis_lines,
    check_fast_mod_size,
    downsample_periodic,
    upsample_periodic,
)
from ..filters.indexing import _mod_fast_128
from .random_stream import RandomStream
from .tile_cache import load_tile, save_tile, tile_cache_path

_noise_tile = None
_tile_lock = threading.Lock()


@ti.kernel
def parity_shift_kernel(
    src: ti.types.ndarray(), dst: ti.types.ndarray(), n: ti.i32, offset: ti.i32
):
    """
    Write the odd-offset wrapped copy of src into dst.

    dst is traversed with x slowest and z fastest while src is read with the
    tile layout (x fastest), so the copy is also transposed in x/z.

    Args:
        src: Flat residual tile (x + y*n + z*n*n)
        dst: Flat output buffer of the same size
        n: Tile edge length (128)
        offset: Odd shift applied on every axis
    """
    for ix, iy, iz in ti.ndrange(n, n, n):
        dst[(ix * n + iy) * n + iz] = src[
            _mod_fast_128(ix + offset)
            + _mod_fast_128(iy + offset) * n
            + _mod_fast_128(iz + offset) * n * n
        ]


def parity_offset(n):
    """Half the tile size, bumped to the next odd value."""
    offset = n // 2
    if offset % 2 == 0:
        offset += 1
    return offset


def build_noise_tile(seed=None, n=cte.NOISE_TILE_SIZE, return_residual=False, verbose=False):
    """
    Build a fresh noise tile without touching the process-wide tile.

    Args:
        seed: Seed of the white noise (default: DEFAULT_RANDOM_SEED)
        n: Tile edge length, must be NOISE_TILE_SIZE
        return_residual: Also return the residual before the parity correction
        verbose: Print a progress notice

    Returns:
        numpy.ndarray: Flat float32 tile of n^3 values, or a (tile, residual)
        tuple when return_residual is True

    Raises:
        TileSizeError: If n is not the size supported by the fast indexer
    """
    check_fast_mod_size(n)
    if seed is None:
        seed = cte.DEFAULT_RANDOM_SEED

    if verbose:
        print(f"generating {n}^3 noise tile")

    n3 = n * n * n
    shape = (n, n, n)

    noise = RandomStream(seed).get_rand_norm(0.0, 1.0, size=n3)
    temp1 = np.zeros(n3, dtype=cte.FLOAT_TYPE_NP)
    temp2 = np.zeros(n3, dtype=cte.FLOAT_TYPE_NP)

    # x (stride 1), y (stride n), z (stride n*n)
    source = noise
    for axis in (2, 1, 0):
        lines = axis_lines(shape, axis)
        downsample_periodic(source, temp1, lines)
        upsample_periodic(temp1, temp2, lines)
        source = temp2

    noise -= temp2
    residual = noise.copy() if return_residual else None

    parity_shift_kernel(noise, temp1, n, parity_offset(n))
    noise += temp1

    del temp1, temp2
    if return_residual:
        return noise, residual
    return noise


def generate_tile(load_from_file=False, seed=None, filename=None, verbose=True):
    """
    Create the process-wide noise tile if it does not exist yet.

    Repeated calls return the already published tile without doing any work.
    Concurrent first calls build a single tile; the others wait for it.

    Args:
        load_from_file: Try the binary cache first and write it after a build
        seed: Seed of the white noise (default: DEFAULT_RANDOM_SEED)
        filename: Cache path (default: TILE_CACHE_FILENAME)
        verbose: Print progress notices

    Returns:
        numpy.ndarray: The shared read-only flat tile

    Raises:
        TileSizeError: If NOISE_TILE_SIZE is not supported by the fast indexer
    """
    global _noise_tile

    tile = _noise_tile
    if tile is not None:
        return tile

    with _tile_lock:
        if _noise_tile is not None:
            return _noise_tile

        tile = None
        if load_from_file:
            tile = load_tile(filename)
            if verbose:
                if tile is not None:
                    print(f"noise tile loaded from file '{tile_cache_path(filename)}'")
                else:
                    print(f"no usable noise tile in '{tile_cache_path(filename)}'")

        if tile is None:
            tile = build_noise_tile(seed=seed, verbose=verbose)
            if load_from_file and save_tile(tile, filename) and verbose:
                print(f"noise tile saved to '{tile_cache_path(filename)}'")

        tile.flags.writeable = False
        _noise_tile = tile

    return tile


def get_noise_tile():
    """Return the process-wide tile, or None if it was not generated yet."""
    return _noise_tile


def reset_noise_tile():
    """Drop the process-wide tile so that the next generate_tile() starts over."""
    global _noise_tile
    with _tile_lock:
        _noise_tile = None


def tile_volume(tile, n=cte.NOISE_TILE_SIZE):
    """View a flat tile as a (z, y, x) volume without copying."""
    return tile.reshape(n, n, n)
