"""
Clamped (Neumann) wavelet filter bank.

Same analysis/refinement kernels as the periodic bank, but out-of-range source
indices are clamped to the first or last sample of the line (edge replication,
zero-derivative boundary). Used for finite simulation grids that are not
tileable, any line length >= 2 is accepted.

Author: B.G.
"""

import numpy as np
import taichi as ti

from .. import constants as cte
from .coefficients import A_COEFFS, A_HALF_WIDTH, P_COEFFS, P_FIRST_TAP
from .indexing import _clamp_index, flat_view

_P_HALF = (0.5 * P_COEFFS).astype(cte.FLOAT_TYPE_NP)


@ti.kernel
def downsample_clamped_kernel(
    src: ti.types.ndarray(),
    dst: ti.types.ndarray(),
    coeffs: ti.types.ndarray(),
    bases: ti.types.ndarray(),
    n: ti.i32,
    stride: ti.i32,
):
    for line, i in ti.ndrange(bases.shape[0], n // 2):
        base = bases[line]
        acc = ti.cast(0.0, cte.FLOAT_TYPE_TI)
        for t in range(coeffs.shape[0]):
            k = _clamp_index(2 * i - A_HALF_WIDTH + t, n)
            acc += coeffs[t] * src[base + k * stride]
        dst[base + i * stride] = acc


@ti.kernel
def upsample_clamped_kernel(
    src: ti.types.ndarray(),
    dst: ti.types.ndarray(),
    coeffs: ti.types.ndarray(),
    bases: ti.types.ndarray(),
    n: ti.i32,
    stride: ti.i32,
):
    half = n // 2
    for line, i in ti.ndrange(bases.shape[0], n):
        base = bases[line]
        acc = ti.cast(0.0, cte.FLOAT_TYPE_TI)
        for t in range(coeffs.shape[0]):
            k = _clamp_index(i // 2 + P_FIRST_TAP + t, half)
            acc += coeffs[t] * src[base + k * stride]
        dst[base + i * stride] = acc


def _check_length(lines):
    if lines.length < 2:
        raise ValueError(f"Clamped filtering needs lines of at least 2 samples, got {lines.length}")


def downsample_clamped(src, dst, lines):
    """
    Downsample every line of ``lines`` from ``src`` into ``dst`` with
    edge-replicating boundaries. Writes ``lines.length // 2`` samples per line.

    Returns:
        numpy.ndarray: dst
    """
    _check_length(lines)
    downsample_clamped_kernel(
        flat_view(src, "src"),
        flat_view(dst, "dst"),
        A_COEFFS,
        lines.bases,
        lines.length,
        lines.stride,
    )
    return dst


def upsample_clamped(src, dst, lines):
    """
    Upsample every line of ``lines`` from ``src`` into ``dst`` with
    edge-replicating boundaries. Reads ``lines.length // 2`` samples per line.

    Returns:
        numpy.ndarray: dst
    """
    _check_length(lines)
    upsample_clamped_kernel(
        flat_view(src, "src"),
        flat_view(dst, "dst"),
        _P_HALF,
        lines.bases,
        lines.length,
        lines.stride,
    )
    return dst


def downsample_clamped_line(values):
    """Reference numpy version of the clamped downsampling for one 1D line."""
    values = np.asarray(values, dtype=cte.FLOAT_TYPE_NP)
    n = values.shape[0]
    k = 2 * np.arange(n // 2)[:, None] - A_HALF_WIDTH + np.arange(A_COEFFS.shape[0])[None, :]
    k = np.clip(k, 0, n - 1)
    return (values[k] * A_COEFFS[None, :]).sum(axis=1, dtype=cte.FLOAT_TYPE_NP)


def upsample_clamped_line(values, n):
    """
    Reference numpy version of the clamped upsampling for one 1D line.

    Args:
        values: 1D array holding at least n // 2 coarse samples
        n: Length of the upsampled output

    Returns:
        numpy.ndarray: n fine samples
    """
    values = np.asarray(values, dtype=cte.FLOAT_TYPE_NP)
    half = n // 2
    i = np.arange(n)
    k = (i // 2 + P_FIRST_TAP)[:, None] + np.arange(_P_HALF.shape[0])[None, :]
    k = np.clip(k, 0, half - 1)
    return (values[k] * _P_HALF[None, :]).sum(axis=1, dtype=cte.FLOAT_TYPE_NP)
