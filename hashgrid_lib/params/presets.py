"""Named grid configurations.

Units: world units of whatever scene the grid indexes.
"""

from ..core.types import Bounds2D
from .config import GridConfig


def demo_16x16() -> GridConfig:
    """
    16 x 16 world with one-unit cells.

    Matches the interactive cube demo: a 16-unit square floor with forty
    one-unit cubes moving around it.
    """
    return GridConfig(
        bounds=Bounds2D(0.0, 0.0, 16.0, 16.0),
        resolution=(16, 16),
    )


def arena_1000() -> GridConfig:
    """
    Large open world centred on the origin.

    2000 x 2000 units split into 100 x 100 cells of 20 units.
    """
    return GridConfig(
        bounds=Bounds2D(-1000.0, -1000.0, 1000.0, 1000.0),
        resolution=(100, 100),
        initial_capacity=4096,
    )


def coarse_debug() -> GridConfig:
    """
    Tiny 5 x 5 grid for debugging and plotting.

    Every cell is easy to see in ``plot_grid``.
    """
    return GridConfig(
        bounds=Bounds2D(0.0, 0.0, 100.0, 100.0),
        resolution=(5, 5),
    )


PRESETS = {
    "demo_16x16": demo_16x16,
    "arena_1000": arena_1000,
    "coarse_debug": coarse_debug,
}


def get_preset(name: str) -> GridConfig:
    """
    Get a grid preset by name.

    Parameters
    ----------
    name : str
        Preset name (e.g., "demo_16x16", "coarse_debug")

    Returns
    -------
    GridConfig
        Grid configuration

    Raises
    ------
    ValueError
        If preset name is not recognized
    """
    if name not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")

    return PRESETS[name]()


def list_presets() -> list:
    """List all available preset names."""
    return list(PRESETS.keys())
