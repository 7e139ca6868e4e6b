"""
Global constants for pywavenoise.

Float types used on the numpy and Taichi sides, the fixed noise tile size and
the process-level defaults for tile generation.

Author: B.G.
"""

import numpy as np
import taichi as ti

# Simulation precision (Real)
FLOAT_TYPE_NP = np.float32
FLOAT_TYPE_TI = ti.f32

# Edge length of the canonical periodic noise tile. The fast periodic indexer
# is specialised to this value.
NOISE_TILE_SIZE = 128

# Process-level seed used for the white noise of the tile
DEFAULT_RANDOM_SEED = 13322223

# Added to DEFAULT_RANDOM_SEED when a noise field gets no fixed seed
FIELD_SEED_OFFSET = 123

# Default name of the binary tile cache (relative to the working directory)
TILE_CACHE_FILENAME = "waveletNoiseTile.bin"
