"""Wavelet filter banks for pywavenoise.

Separable 1D downsampling/upsampling filters applied along strided lines of
flat buffers, in a periodic (tileable) and a clamped (finite grid) flavour,
plus the index helpers they share.

Author: B.G.
"""

from .coefficients import A_COEFFS, P_COEFFS
from .indexing import (
    StridedLines,
    TileSizeError,
    axis_lines,
    check_fast_mod_size,
    clamp_index,
    mod_fast_128,
    mod_slow,
    single_line,
)
from .periodic import (
    downsample_periodic,
    downsample_periodic_kernel,
    downsample_periodic_line,
    upsample_periodic,
    upsample_periodic_kernel,
    upsample_periodic_line,
)
from .clamped import (
    downsample_clamped,
    downsample_clamped_kernel,
    downsample_clamped_line,
    upsample_clamped,
    upsample_clamped_kernel,
    upsample_clamped_line,
)

__all__ = [
    "A_COEFFS",
    "P_COEFFS",
    "StridedLines",
    "TileSizeError",
    "axis_lines",
    "single_line",
    "check_fast_mod_size",
    "clamp_index",
    "mod_fast_128",
    "mod_slow",
    "downsample_periodic",
    "downsample_periodic_kernel",
    "downsample_periodic_line",
    "upsample_periodic",
    "upsample_periodic_kernel",
    "upsample_periodic_line",
    "downsample_clamped",
    "downsample_clamped_kernel",
    "downsample_clamped_line",
    "upsample_clamped",
    "upsample_clamped_kernel",
    "upsample_clamped_line",
]
