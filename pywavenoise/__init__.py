"""
pywavenoise: band-limited wavelet noise tiles and wavelet turbulence
coefficients for grid-based simulations, with Taichi kernels.

Submodules:
- constants: float types, tile size and default seeds
- filters: periodic and clamped wavelet filter banks on strided lines
- noise: tile generation and caching, coefficient fields, noise field config
- cli: command line tools

Author: B.G.
"""

__version__ = "0.0.1"

from . import constants
from . import filters
from . import noise

__all__ = ["__version__", "constants", "filters", "noise"]
