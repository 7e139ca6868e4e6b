"""
Wavelet noise walkthrough: build the shared tile, inspect it and compute
turbulence weights for a 2D smoke-like density field.
"""

import matplotlib.pyplot as plt
import numpy as np
import taichi as ti

import pywavenoise as pwn

ti.init(arch=ti.cpu)

# Built once, cached next to the script for the next run
field = pwn.noise.WaveletNoiseField((128, 128, 1), is_3d=False, load_from_file=True)
print(field)

tile = pwn.noise.tile_volume(field.tile)

ny, nx = 128, 192
y, x = np.mgrid[0:ny, 0:nx]
plume = np.exp(-((x - nx / 2) ** 2) / (2 * 15.0 ** 2)) * (y / ny)
density = (plume * (1.0 + 0.2 * np.tile(tile[0], (1, 2))[:ny, :nx])).astype(np.float32)

weights = density.copy()
pwn.noise.compute_coefficients(weights, np.empty_like(weights), np.empty_like(weights))

fig, ax = plt.subplots(1, 3, figsize=(15, 5))
ax[0].imshow(tile[64], cmap="gray")
ax[0].set_title("tile slice z=64")
ax[1].imshow(density, cmap="magma", origin="lower")
ax[1].set_title("density")
ax[2].imshow(weights, cmap="viridis", origin="lower")
ax[2].set_title("wavelet turbulence weights")
plt.tight_layout()
plt.show()
