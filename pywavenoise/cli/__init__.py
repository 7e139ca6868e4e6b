"""
Command Line Interface for pywavenoise

Command line utilities to build, inspect and apply wavelet noise without
writing Python scripts.

Available Commands:
- tile: Generate the 128^3 noise tile and write it as a binary blob
- tile2png: Render one slice of a tile blob to PNG
- coefficients: Compute wavelet turbulence coefficients of a .npy grid

Author: B.G.
"""

_CLI_SUBMODULES = {
    "tile": (".tile_commands", "tile"),
    "tile2png": (".tile2png_commands", "tile2png"),
    "coefficients": (".coefficient_commands", "coefficients"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
