"""Debug plots for spatial hash grids."""

from .grid_plots import grid_line_segments, plot_grid

__all__ = ["grid_line_segments", "plot_grid"]
