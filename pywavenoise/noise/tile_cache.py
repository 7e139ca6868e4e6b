"""
Binary cache for the wavelet noise tile.

The cache is a flat, headerless sequence of N^3 native-endian float32 values,
the layout of the in-memory tile. A missing, unreadable or wrongly sized file
is a cache miss, never an error: the caller regenerates the tile.

Author: B.G.
"""

import os

import numpy as np

from .. import constants as cte


def tile_cache_path(filename=None):
    """Resolve the cache file name, defaulting to the working directory."""
    return os.fspath(filename) if filename is not None else cte.TILE_CACHE_FILENAME


def load_tile(filename=None, n=cte.NOISE_TILE_SIZE):
    """
    Read a cached tile.

    Args:
        filename: Path of the blob (default: TILE_CACHE_FILENAME)
        n: Tile edge length the blob is expected to hold

    Returns:
        numpy.ndarray or None: Flat float32 array of n^3 values, None on a miss
    """
    path = tile_cache_path(filename)
    try:
        data = np.fromfile(path, dtype=cte.FLOAT_TYPE_NP)
    except OSError:
        return None
    if data.shape[0] != n * n * n:
        return None
    return data


def save_tile(tile, filename=None):
    """
    Write a tile as a raw blob.

    Args:
        tile: float32 array holding the tile (any shape, written flat)
        filename: Target path (default: TILE_CACHE_FILENAME)

    Returns:
        bool: True if the file was written, False if it could not be opened
    """
    path = tile_cache_path(filename)
    try:
        np.ascontiguousarray(tile, dtype=cte.FLOAT_TYPE_NP).tofile(path)
    except OSError:
        return False
    return True
