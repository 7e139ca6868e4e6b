"""
Wavelet Turbulence Coefficient CLI Commands for pywavenoise

Command line interface to compute wavelet turbulence energy coefficients of a
2D or 3D grid stored as a numpy array.

Author: B.G.
"""

import sys

import click
import numpy as np
import taichi as ti

import pywavenoise as pwn


@click.command()
@click.argument("input_npy", type=click.Path(exists=True))
@click.argument("output_npy", type=click.Path())
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def coefficients(input_npy, output_npy, verbose):
    """
    Compute wavelet turbulence coefficients of a grid.

    INPUT_NPY: 2D (ny, nx) or 3D (nz, ny, nx) numpy array
    OUTPUT_NPY: Path for the coefficient grid (.npy)

    Examples:

        pwn-coefficients density.npy density_coeffs.npy -v
    """
    try:
        ti.init(arch=ti.cpu)

        grid = np.ascontiguousarray(np.load(input_npy), dtype=pwn.constants.FLOAT_TYPE_NP)
        if verbose:
            click.echo(f"Loaded grid of shape {grid.shape} from '{input_npy}'")

        temp1 = np.empty_like(grid)
        temp2 = np.empty_like(grid)
        pwn.noise.compute_coefficients(grid, temp1, temp2)

        np.save(output_npy, grid)

        if verbose:
            click.echo(f"Coefficient range: [{grid.min():.4f}, {grid.max():.4f}]")
        click.echo(f"Saved coefficients '{input_npy}' -> '{output_npy}'")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    coefficients()
