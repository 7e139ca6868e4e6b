"""
Wavelet turbulence coefficients for pywavenoise.

Computes, directly on a simulation grid, a smoothed per-cell energy weight
from the grid's own high frequency content: the grid is downsampled and
upsampled along each axis with the clamped filter bank, the square root of the
absolute residual is taken, and interior cells receive the average of that
weight over their axis neighbours.

The shared noise tile is not involved.

Author: B.G.
"""

import numpy as np

from .. import constants as cte
from ..filters import axis_lines, downsample_clamped, upsample_clamped
from ..filters.indexing import flat_view

_SMOOTH_2D = cte.FLOAT_TYPE_NP(1.0 / 4.0)
_SMOOTH_3D = cte.FLOAT_TYPE_NP(1.0 / 6.0)


def _check_grids(grid, temp1, temp2):
    if grid.ndim not in (2, 3):
        raise ValueError("Input grid must be 2D (ny, nx) or 3D (nz, ny, nx)")
    for name, temp in (("temp1", temp1), ("temp2", temp2)):
        if temp.shape != grid.shape:
            raise ValueError(f"{name} shape {temp.shape} does not match grid shape {grid.shape}")
        if np.shares_memory(grid, temp):
            raise ValueError(f"{name} must not share memory with the input grid")
    if np.shares_memory(temp1, temp2):
        raise ValueError("temp1 and temp2 must not share memory")
    for name, buf in (("grid", grid), ("temp1", temp1), ("temp2", temp2)):
        flat_view(buf, name)


def _is_field(obj):
    return hasattr(obj, "to_numpy") and hasattr(obj, "from_numpy") and hasattr(obj, "shape")


def _check_fields(grid, temp1, temp2):
    for name, temp in (("temp1", temp1), ("temp2", temp2)):
        if not _is_field(temp):
            raise TypeError(f"{name} must be a Taichi field when grid is a Taichi field")
        if tuple(temp.shape) != tuple(grid.shape):
            raise ValueError(f"{name} shape {tuple(temp.shape)} does not match grid shape {tuple(grid.shape)}")
        if temp is grid:
            raise ValueError(f"{name} must not be the input grid")
    if temp1 is temp2:
        raise ValueError("temp1 and temp2 must be distinct fields")


def _neighbour_average(weight):
    """Sum of the axis neighbours of every interior cell, times 1/4 or 1/6."""
    if weight.ndim == 3:
        res = weight[1:-1, 1:-1, :-2] + weight[1:-1, 1:-1, 2:]
        res = res + (weight[1:-1, :-2, 1:-1] + weight[1:-1, 2:, 1:-1])
        res = res + (weight[:-2, 1:-1, 1:-1] + weight[2:, 1:-1, 1:-1])
        return res * _SMOOTH_3D
    res = weight[1:-1, :-2] + weight[1:-1, 2:]
    res = res + (weight[:-2, 1:-1] + weight[2:, 1:-1])
    return res * _SMOOTH_2D


def _compute_coefficients_numpy(grid, temp1, temp2):
    _check_grids(grid, temp1, temp2)

    # Single z slice: treat as a 2D grid
    if grid.ndim == 3 and grid.shape[0] == 1:
        _compute_coefficients_numpy(grid[0], temp1[0], temp2[0])
        return grid

    for extent in grid.shape:
        if extent < 2:
            raise ValueError(f"Every grid extent must be >= 2, got shape {grid.shape}")

    temp1.fill(0.0)
    temp2.fill(0.0)

    # x first, then y, then z for 3D grids
    source = grid
    for axis in range(grid.ndim - 1, -1, -1):
        lines = axis_lines(grid.shape, axis)
        downsample_clamped(source, temp1, lines)
        upsample_clamped(temp1, temp2, lines)
        source = temp2

    np.subtract(grid, temp2, out=temp1)
    np.abs(temp1, out=temp1)
    np.sqrt(temp1, out=temp1)

    interior = (slice(1, -1),) * grid.ndim
    grid[interior] = _neighbour_average(temp1)
    return grid


def compute_coefficients(grid, temp1, temp2):
    """
    Overwrite ``grid`` with its wavelet turbulence energy weights.

    Args:
        grid: Input grid, numpy float32 array of shape (ny, nx) or (nz, ny, nx)
              (a (1, ny, nx) array is treated as 2D), or a Taichi field of
              such a shape
        temp1: Scratch grid of the same shape and type, overwritten; holds the
               unsmoothed weight sqrt(|grid - coarse|) on return
        temp2: Scratch grid of the same shape and type, overwritten; holds the
               coarse reconstruction on return

    Returns:
        The updated grid (same object). The 1-cell border keeps its input values.

    Raises:
        ValueError: On mismatching shapes, extents < 2 or aliased buffers
        TypeError: On unsupported grid types or dtypes

    Example:
        density = np.random.rand(32, 64, 64).astype(np.float32)
        t1 = np.empty_like(density)
        t2 = np.empty_like(density)
        compute_coefficients(density, t1, t2)
    """
    if isinstance(grid, np.ndarray):
        if not (isinstance(temp1, np.ndarray) and isinstance(temp2, np.ndarray)):
            raise TypeError("temp1 and temp2 must be numpy arrays when grid is a numpy array")
        return _compute_coefficients_numpy(grid, temp1, temp2)

    if _is_field(grid):
        _check_fields(grid, temp1, temp2)
        data = grid.to_numpy()
        dtype = data.dtype
        g = np.ascontiguousarray(data, dtype=cte.FLOAT_TYPE_NP)
        t1 = np.zeros_like(g)
        t2 = np.zeros_like(g)
        _compute_coefficients_numpy(g, t1, t2)
        grid.from_numpy(g.astype(dtype))
        temp1.from_numpy(t1.astype(dtype))
        temp2.from_numpy(t2.astype(dtype))
        return grid

    raise TypeError("grid must be a numpy array or Taichi field")
