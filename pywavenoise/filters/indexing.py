"""
Index helpers shared by the periodic and clamped filter banks.

Provides the periodic wrap functions (a fast bit-mask variant specialised to
the 128 tile edge and a general modulo), the clamp-to-edge helper, both as
plain Python functions and as Taichi functions for use inside kernels, and
the strided line description used to address 1D lines of flattened grids.

Author: B.G.
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from .. import constants as cte

_FAST_MOD_SIZE = 128
_FAST_MOD_MASK = _FAST_MOD_SIZE - 1


class TileSizeError(ValueError):
    """Raised when the fast 128 periodic indexer is used with another extent."""


def check_fast_mod_size(n):
    """
    Guard every fast-path entry point.

    Args:
        n: Periodic extent the caller is about to wrap indices into

    Raises:
        TileSizeError: If n differs from the extent the fast indexer supports
    """
    if n != _FAST_MOD_SIZE or cte.NOISE_TILE_SIZE != _FAST_MOD_SIZE:
        raise TileSizeError(
            f"Fast 128 modulo used with extent {n} (tile size {cte.NOISE_TILE_SIZE}); "
            f"only {_FAST_MOD_SIZE} is supported"
        )


def mod_fast_128(i):
    """Wrap i into [0, 128). Matches mod_slow(i, 128) for every integer."""
    return i & _FAST_MOD_MASK


def mod_slow(i, n):
    """Wrap i into [0, n) for any positive n, negative i included."""
    return ((i % n) + n) % n


def clamp_index(i, n):
    return min(max(i, 0), n - 1)


@ti.func
def _mod_fast_128(i: ti.i32) -> ti.i32:
    return i & _FAST_MOD_MASK


@ti.func
def _mod_slow(i: ti.i32, n: ti.i32) -> ti.i32:
    # ti.raw_mod keeps the sign of i, fold it back like the Python version
    return ti.raw_mod(ti.raw_mod(i, n) + n, n)


@ti.func
def _clamp_index(i: ti.i32, n: ti.i32) -> ti.i32:
    return ti.min(ti.max(i, 0), n - 1)


@dataclass
class StridedLines:
    """
    A family of 1D lines inside a flat buffer.

    Line ``l`` covers the elements ``bases[l] + k * stride`` for
    ``k in range(length)``. Lines of one family never overlap, so kernels can
    process them in parallel.

    Attributes:
        bases: int32 array of base offsets, one per line
        stride: Element distance between consecutive samples of a line
        length: Logical number of samples per line
    """

    bases: np.ndarray
    stride: int
    length: int

    @property
    def n_lines(self):
        return int(self.bases.shape[0])


def axis_lines(shape, axis):
    """
    Describe every line along ``axis`` of a C-ordered array of ``shape``.

    Args:
        shape: Array shape, e.g. (nz, ny, nx) for a 3D grid with x fastest
        axis: numpy axis to run the lines along (negative values allowed)

    Returns:
        StridedLines: One line per index combination of the remaining axes

    Example:
        # Lines along x of a 128^3 tile: stride 1, 128*128 lines
        lines = axis_lines((128, 128, 128), axis=2)
    """
    shape = tuple(int(s) for s in shape)
    axis = axis % len(shape)
    stride = int(np.prod(shape[axis + 1:], dtype=np.int64))
    flat = np.arange(int(np.prod(shape, dtype=np.int64)), dtype=np.int32).reshape(shape)
    bases = np.ascontiguousarray(np.take(flat, 0, axis=axis).ravel())
    return StridedLines(bases=bases, stride=stride, length=shape[axis])


def single_line(length, base=0, stride=1):
    """Describe one line of ``length`` samples starting at ``base``."""
    return StridedLines(
        bases=np.array([base], dtype=np.int32), stride=int(stride), length=int(length)
    )


def flat_view(buffer, name="buffer"):
    """
    Return a flat float view sharing memory with ``buffer``.

    Kernels write through the returned view, so copies are refused.

    Raises:
        TypeError: If buffer is not a numpy array of the simulation float type
        ValueError: If buffer is not C-contiguous
    """
    if not isinstance(buffer, np.ndarray):
        raise TypeError(f"{name} must be a numpy array")
    if buffer.dtype != cte.FLOAT_TYPE_NP:
        raise TypeError(
            f"{name} must have dtype {np.dtype(cte.FLOAT_TYPE_NP).name}, got {buffer.dtype}"
        )
    if not buffer.flags.c_contiguous:
        raise ValueError(f"{name} must be C-contiguous")
    return buffer.reshape(-1)
