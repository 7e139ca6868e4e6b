"""
Periodic (wrap-around) wavelet filter bank.

Downsampling halves a line with the 32-tap analysis kernel, upsampling doubles
it back with the 4-tap B-spline refinement kernel. Indices wrap around the line
so that the generated noise tile is seamlessly tileable.

Both operations work on flat buffers and a StridedLines description, so the
same kernel handles the x, y and z axes of a flattened volume by changing the
stride and the base offsets. Lines are processed in parallel; each output
sample is an ordered serial sum so results are reproducible.

The downsampling path uses the fast 128 wrap and refuses any other extent.

Author: B.G.
"""

import numpy as np
import taichi as ti

from .. import constants as cte
from .coefficients import A_COEFFS, A_HALF_WIDTH, P_COEFFS, P_FIRST_TAP
from .indexing import (
    _mod_fast_128,
    _mod_slow,
    check_fast_mod_size,
    flat_view,
    mod_fast_128,
    mod_slow,
)

# 0.5 * P, exact in float32
_P_HALF = (0.5 * P_COEFFS).astype(cte.FLOAT_TYPE_NP)


@ti.kernel
def downsample_periodic_kernel(
    src: ti.types.ndarray(),
    dst: ti.types.ndarray(),
    coeffs: ti.types.ndarray(),
    bases: ti.types.ndarray(),
    n: ti.i32,
    stride: ti.i32,
):
    """
    Periodic downsampling of every line, fast 128 wrap.

    Args:
        src: Flat source buffer
        dst: Flat target buffer, receives n/2 samples per line
        coeffs: 32-tap analysis kernel
        bases: Base offset of each line
        n: Logical line length (must be 128)
        stride: Element stride along the line
    """
    for line, i in ti.ndrange(bases.shape[0], n // 2):
        base = bases[line]
        acc = ti.cast(0.0, cte.FLOAT_TYPE_TI)
        for t in range(coeffs.shape[0]):
            k = 2 * i - A_HALF_WIDTH + t
            acc += coeffs[t] * src[base + _mod_fast_128(k) * stride]
        dst[base + i * stride] = acc


@ti.kernel
def upsample_periodic_kernel(
    src: ti.types.ndarray(),
    dst: ti.types.ndarray(),
    coeffs: ti.types.ndarray(),
    bases: ti.types.ndarray(),
    n: ti.i32,
    stride: ti.i32,
):
    """
    Periodic upsampling of every line, general modulo over n/2.

    Args:
        src: Flat source buffer holding n/2 samples per line
        dst: Flat target buffer, receives n samples per line
        coeffs: 4-tap refinement kernel, already scaled by one half
        bases: Base offset of each line
        n: Logical line length of the upsampled output
        stride: Element stride along the line
    """
    half = n // 2
    for line, i in ti.ndrange(bases.shape[0], n):
        base = bases[line]
        acc = ti.cast(0.0, cte.FLOAT_TYPE_TI)
        for t in range(coeffs.shape[0]):
            k = i // 2 + P_FIRST_TAP + t
            acc += coeffs[t] * src[base + _mod_slow(k, half) * stride]
        dst[base + i * stride] = acc


def downsample_periodic(src, dst, lines):
    """
    Downsample every line of ``lines`` from ``src`` into ``dst``.

    Args:
        src: numpy float32 C-contiguous array (any shape, read flat)
        dst: numpy float32 C-contiguous array, written in place
        lines: StridedLines with length 128

    Returns:
        numpy.ndarray: dst

    Raises:
        TileSizeError: If lines.length is not the supported tile size
    """
    check_fast_mod_size(lines.length)
    downsample_periodic_kernel(
        flat_view(src, "src"),
        flat_view(dst, "dst"),
        A_COEFFS,
        lines.bases,
        lines.length,
        lines.stride,
    )
    return dst


def upsample_periodic(src, dst, lines):
    """
    Upsample every line of ``lines`` from ``src`` into ``dst``.

    ``lines.length`` is the length of the upsampled output; the source line
    holds ``lines.length // 2`` samples at the same base and stride.

    Returns:
        numpy.ndarray: dst
    """
    if lines.length < 2 or lines.length % 2:
        raise ValueError(f"Periodic upsampling needs an even length >= 2, got {lines.length}")
    upsample_periodic_kernel(
        flat_view(src, "src"),
        flat_view(dst, "dst"),
        _P_HALF,
        lines.bases,
        lines.length,
        lines.stride,
    )
    return dst


def downsample_periodic_line(values):
    """
    Reference numpy version of the periodic downsampling for one 1D line.

    Args:
        values: 1D array of 128 samples

    Returns:
        numpy.ndarray: 64 coarse samples
    """
    values = np.asarray(values, dtype=cte.FLOAT_TYPE_NP)
    n = values.shape[0]
    check_fast_mod_size(n)
    k = 2 * np.arange(n // 2)[:, None] - A_HALF_WIDTH + np.arange(A_COEFFS.shape[0])[None, :]
    return (values[mod_fast_128(k)] * A_COEFFS[None, :]).sum(axis=1, dtype=cte.FLOAT_TYPE_NP)


def upsample_periodic_line(values):
    """
    Reference numpy version of the periodic upsampling for one 1D line.

    Args:
        values: 1D array of m coarse samples

    Returns:
        numpy.ndarray: 2*m fine samples
    """
    values = np.asarray(values, dtype=cte.FLOAT_TYPE_NP)
    half = values.shape[0]
    i = np.arange(2 * half)
    k = (i // 2 + P_FIRST_TAP)[:, None] + np.arange(_P_HALF.shape[0])[None, :]
    return (values[mod_slow(k, half)] * _P_HALF[None, :]).sum(axis=1, dtype=cte.FLOAT_TYPE_NP)
