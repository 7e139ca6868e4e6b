"""
Seeded random source for pywavenoise.

Wraps numpy's legacy RandomState (Mersenne Twister) so that a given integer
seed reproduces the same sequence across numpy releases, which the noise tile
and the per-field seed offsets rely on.

Author: B.G.
"""

import numpy as np

from .. import constants as cte


class RandomStream:
    """
    Deterministic stream of random samples.

    Args:
        seed: Integer seed, same seed gives the same sequence

    Example:
        rs = RandomStream(42)
        white = rs.get_rand_norm(0.0, 1.0, size=1000)
        direction = rs.get_vec3_norm()
    """

    def __init__(self, seed):
        self.seed = int(seed)
        self._state = np.random.RandomState(self.seed & 0xFFFFFFFF)

    def get_float(self, size=None):
        """Uniform sample(s) in [0, 1)."""
        return self._state.random_sample(size)

    def get_rand_norm(self, mean=0.0, std=1.0, size=None):
        """
        Normal sample(s).

        Args:
            mean: Distribution mean
            std: Standard deviation
            size: None for a scalar, otherwise output shape

        Returns:
            float or numpy.ndarray (float32 when size is given)
        """
        values = self._state.normal(mean, std, size)
        if size is None:
            return float(values)
        return values.astype(cte.FLOAT_TYPE_NP)

    def get_vec3(self):
        return self._state.random_sample(3)

    def get_vec3_norm(self):
        """Random unit vector with components in [0, 1]."""
        v = self.get_vec3()
        norm = np.sqrt(np.dot(v, v))
        # zero vector stays zero
        if norm > 0.0:
            v = v / norm
        return v
