"""
Wavelet filter tables.

A_COEFFS is the 32-tap downsampling (analysis) kernel, P_COEFFS the 4-tap
upsampling (refinement) kernel of the quadratic B-spline. Both periodic and
clamped filter banks read the same tables.

Author: B.G.
"""

import numpy as np

from .. import constants as cte

# Centre sits between taps 15 and 16. Tap 28 reads 0.003546, its mirror 0.003545.
A_COEFFS = np.array(
    [
        0.000334, -0.001528, 0.000410, 0.003545, -0.000938, -0.008233, 0.002172, 0.019120,
        -0.005040, -0.044412, 0.011655, 0.103311, -0.025936, -0.243780, 0.033979, 0.655340,
        0.655340, 0.033979, -0.243780, -0.025936, 0.103311, 0.011655, -0.044412, -0.005040,
        0.019120, 0.002172, -0.008233, -0.000938, 0.003546, 0.000410, -0.001528, 0.000334,
    ],
    dtype=cte.FLOAT_TYPE_NP,
)

P_COEFFS = np.array([0.25, 0.75, 0.75, 0.25], dtype=cte.FLOAT_TYPE_NP)

# Offsets of the first tap relative to the centred source sample
A_HALF_WIDTH = A_COEFFS.shape[0] // 2
P_FIRST_TAP = -1
