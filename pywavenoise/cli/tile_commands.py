"""
Noise Tile CLI Commands for pywavenoise

Command line interface to generate the wavelet noise tile and store it in the
binary cache format read by generate_tile(load_from_file=True).

Author: B.G.
"""

import sys

import click
import taichi as ti

import pywavenoise as pwn


@click.command()
@click.argument("output", type=click.Path(), default=pwn.constants.TILE_CACHE_FILENAME)
@click.option(
    "--seed",
    "-s",
    type=int,
    default=pwn.constants.DEFAULT_RANDOM_SEED,
    show_default=True,
    help="Seed of the white noise",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def tile(output, seed, verbose):
    """
    Generate the 128^3 wavelet noise tile and save it to OUTPUT.

    OUTPUT: Path of the raw float32 blob (default: waveletNoiseTile.bin)

    Examples:

        # Build the default tile in the working directory
        pwn-tile

        # Custom seed and location
        pwn-tile -s 42 cache/tile42.bin -v
    """
    try:
        ti.init(arch=ti.cpu)

        noise_tile = pwn.noise.build_noise_tile(seed=seed, verbose=verbose)

        if not pwn.noise.save_tile(noise_tile, output):
            raise OSError(f"Cannot write tile to '{output}'")

        if verbose:
            click.echo(
                f"Tile stats: mean={noise_tile.mean():.4f}, std={noise_tile.std():.4f}, "
                f"range=[{noise_tile.min():.3f}, {noise_tile.max():.3f}]"
            )
        click.echo(f"Saved noise tile -> '{output}'")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    tile()
