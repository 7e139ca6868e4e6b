"""
Tile to PNG Conversion CLI Commands for pywavenoise

Command line interface to render one axis-aligned slice of a cached noise tile
as a PNG image.

Author: B.G.
"""

import sys

import click
import matplotlib
import numpy as np
from PIL import Image

import pywavenoise as pwn

_AXES = {"x": 2, "y": 1, "z": 0}


@click.command()
@click.argument("input_tile", type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    default=None,
    help="Output PNG filename (default: input name with .png extension)",
)
@click.option(
    "--axis",
    type=click.Choice(["x", "y", "z"]),
    default="z",
    show_default=True,
    help="Axis normal to the slice",
)
@click.option("--index", "-i", type=int, default=0, show_default=True, help="Slice index")
@click.option("--cmap", default="gray", show_default=True, help="Matplotlib colormap name")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def tile2png(input_tile, output, axis, index, cmap, verbose):
    """
    Render one slice of a noise tile blob to PNG.

    INPUT_TILE: Path to a raw tile blob written by pwn-tile

    Examples:

        # Middle z slice in grayscale
        pwn-tile2png waveletNoiseTile.bin -i 64

        # x slice with a colormap
        pwn-tile2png waveletNoiseTile.bin --axis x --cmap viridis -o slice.png
    """
    try:
        n = pwn.constants.NOISE_TILE_SIZE
        data = pwn.noise.load_tile(input_tile)
        if data is None:
            raise ValueError(f"'{input_tile}' does not hold a {n}^3 float32 tile")

        if not 0 <= index < n:
            raise ValueError(f"Slice index must be in [0, {n}), got {index}")

        if output is None:
            output = input_tile.rsplit(".", 1)[0] + ".png"

        volume = pwn.noise.tile_volume(data)
        slc = np.take(volume, index, axis=_AXES[axis])

        lo = float(slc.min())
        hi = float(slc.max())
        if lo == hi:
            click.echo("Warning: slice has constant values", err=True)
            normalized = np.zeros_like(slc)
        else:
            normalized = (slc - lo) / (hi - lo)

        rgba = matplotlib.colormaps[cmap](normalized)
        img = Image.fromarray((rgba * 255).astype(np.uint8), mode="RGBA")

        if verbose:
            click.echo(f"Saving {axis}={index} slice to '{output}' (range {lo:.3f} to {hi:.3f})")

        img.save(output)
        click.echo(f"Converted '{input_tile}' -> '{output}'")

    except KeyError:
        click.echo(f"Error: Unknown colormap '{cmap}'", err=True)
        sys.exit(1)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    tile2png()
