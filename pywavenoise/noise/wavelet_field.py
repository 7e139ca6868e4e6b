"""
Wavelet noise field configuration for pywavenoise.

A WaveletNoiseField holds the parameters that map world positions into the
shared noise tile and tile values into a useful range. Creating a field makes
sure the process-wide tile exists (built or loaded at most once per process).

Author: B.G.
"""

import numpy as np

from .. import constants as cte
from .random_stream import RandomStream
from .tile import generate_tile


class WaveletNoiseField:
    """
    Noise field over the shared wavelet noise tile.

    Args:
        grid_size: Grid resolution (nx, ny, nz) of the owning simulation
        is_3d: Whether the owning simulation is 3D; for 2D the z resolution is ignored
        fixed_seed: Seed of the per-field random offset, -1 uses
                    random_seed + FIELD_SEED_OFFSET
        load_from_file: Load the tile from the binary cache if present, and
                        write the cache after generating it
        tile_seed: Seed of the tile white noise (default: DEFAULT_RANDOM_SEED),
                   only used by the first field that triggers the tile build
        tile_filename: Cache file override
        verbose: Print tile generation notices

    Attributes:
        pos_offset (numpy.ndarray): Position offset (Vec3)
        pos_scale (numpy.ndarray): Position scale (Vec3)
        val_offset (float): Value offset
        val_scale (float): Value scale
        clamp (bool): Whether values are clamped to [clamp_neg, clamp_pos]
        clamp_neg (float): Lower clamp bound
        clamp_pos (float): Upper clamp bound
        time_anim (float): Time animation speed
        gs_inv_x, gs_inv_y, gs_inv_z (float): Inverse grid resolution per axis
        seed_offset (numpy.ndarray): Normalized random Vec3 drawn from the seed

    Example:
        field = WaveletNoiseField((64, 64, 64), is_3d=True)
        field.pos_scale[:] = 20.0
        field.val_scale = 2.0
        tile = field.tile
    """

    random_seed = cte.DEFAULT_RANDOM_SEED

    def __init__(
        self,
        grid_size,
        is_3d=True,
        fixed_seed=-1,
        load_from_file=False,
        tile_seed=None,
        tile_filename=None,
        verbose=True,
    ):
        nx, ny, nz = (tuple(grid_size) + (1, 1, 1))[:3]
        self.is_3d = bool(is_3d)

        self.pos_offset = np.zeros(3)
        self.pos_scale = np.ones(3)
        self.val_offset = 0.0
        self.val_scale = 1.0
        self.clamp = False
        self.clamp_neg = 0.0
        self.clamp_pos = 1.0
        self.time_anim = 0.0

        self.gs_inv_x = 1.0 / nx
        self.gs_inv_y = 1.0 / ny
        self.gs_inv_z = 1.0 / nz if self.is_3d else 1.0

        # Use the global seed with an offset if none is given
        if fixed_seed == -1:
            fixed_seed = self.random_seed + cte.FIELD_SEED_OFFSET
        self.seed = fixed_seed
        self.seed_offset = RandomStream(fixed_seed).get_vec3_norm()

        if tile_seed is None:
            tile_seed = self.random_seed
        self._tile = generate_tile(
            load_from_file=load_from_file,
            seed=tile_seed,
            filename=tile_filename,
            verbose=verbose,
        )

    @property
    def tile(self):
        """The shared flat noise tile."""
        return self._tile

    @property
    def grid_size_inv(self):
        return np.array([self.gs_inv_x, self.gs_inv_y, self.gs_inv_z])

    def __str__(self):
        return (
            f"NoiseField: pos off={_fmt_vec(self.pos_offset)} scale={_fmt_vec(self.pos_scale)}"
            f"  val off={self.val_offset} scale={self.val_scale}"
            f"  clamp ={int(self.clamp)} val={self.clamp_neg} to {self.clamp_pos}"
            f"  timeAni ={self.time_anim}"
            f"  gridInv ={_fmt_vec(self.grid_size_inv)}"
        )

    def __repr__(self):
        return f"<WaveletNoiseField seed={self.seed} is_3d={self.is_3d}>"


def _fmt_vec(v):
    return "[" + ",".join(f"{float(c):g}" for c in v) + "]"
