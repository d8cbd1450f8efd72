"""Grid visualization functions for debugging and inspection."""

from typing import Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Rectangle

from ..core.grid import SpatialHashGrid
from ..core.types import VectorLike, as_vector2


def grid_line_segments(grid: SpatialHashGrid) -> np.ndarray:
    """
    World-space cell boundary lines.

    Returns
    -------
    segments : ndarray of shape (cols + rows + 2, 2, 2)
        ``cols + 1`` vertical lines followed by ``rows + 1`` horizontal
        lines, each as ``[[x0, y0], [x1, y1]]``
    """
    b = grid.bounds
    cols, rows = grid.resolution

    xs = np.linspace(b.x_min, b.x_max, cols + 1)
    ys = np.linspace(b.y_min, b.y_max, rows + 1)

    vertical = np.stack([
        np.column_stack([xs, np.full_like(xs, b.y_min)]),
        np.column_stack([xs, np.full_like(xs, b.y_max)]),
    ], axis=1)
    horizontal = np.stack([
        np.column_stack([np.full_like(ys, b.x_min), ys]),
        np.column_stack([np.full_like(ys, b.x_max), ys]),
    ], axis=1)

    return np.concatenate([vertical, horizontal], axis=0)


def plot_grid(
    grid: SpatialHashGrid,
    ax: Optional[plt.Axes] = None,
    show: bool = True,
    show_clients: bool = True,
    query: Optional[Tuple[VectorLike, VectorLike]] = None,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Plot grid lines, client footprints and an optional query box.

    Parameters
    ----------
    grid : SpatialHashGrid
        Grid to plot
    ax : matplotlib Axes, optional
        Existing axes
    show : bool
        Whether to call plt.show()
    show_clients : bool
        Draw every inserted client's footprint
    query : (center, extent), optional
        Query box to draw; matching clients are drawn in red
    title : str, optional
        Plot title

    Returns
    -------
    ax : matplotlib Axes
        Axes object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    ax.add_collection(LineCollection(grid_line_segments(grid), colors="gray", linewidths=0.5))

    hits = set()
    if query is not None:
        center, extent = as_vector2(query[0]), as_vector2(query[1])
        hits = {id(c) for c in grid.query(center, extent)}
        ax.add_patch(Rectangle(
            (center.x - extent.x / 2, center.y - extent.y / 2),
            extent.x, extent.y,
            fill=False, edgecolor="blue", linestyle="--", linewidth=1.5,
        ))

    if show_clients:
        for client in grid.clients():
            p, e = client.position, client.extent
            color = "red" if id(client) in hits else "black"
            ax.add_patch(Rectangle(
                (p.x - e.x / 2, p.y - e.y / 2), e.x, e.y,
                fill=True, facecolor=color, edgecolor=color, alpha=0.4,
            ))

    b = grid.bounds
    ax.set_xlim(b.x_min, b.x_max)
    ax.set_ylim(b.y_min, b.y_max)
    ax.set_aspect("equal")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")

    if title:
        ax.set_title(title)

    if show:
        plt.show()

    return ax
