"""
World-to-cell index mapping.

Stateless functions shared by the grid and the inspection helpers.

The mapping saturates each normalised axis into [0, 1] and then scales by
``count - 1``, not ``count``. The partition is therefore not uniform: cells
``0 .. N-2`` each cover ``1 / (N - 1)`` of the axis and cell ``N-1`` is only
reached on the far edge or beyond it. Changing the divisor moves
boundary-adjacent clients to a different cell, so it must stay as is.
"""

from typing import Tuple
import math

from .types import Bounds2D, CellIndex, CellSpan, Vector2


def saturate(x: float) -> float:
    """Clamp ``x`` into [0, 1]."""
    return min(max(x, 0.0), 1.0)


def normalize(position: Vector2, bounds: Bounds2D) -> Tuple[float, float]:
    """Map a world position to saturated [0, 1] coordinates within bounds."""
    nx = saturate((position.x - bounds.x_min) / (bounds.x_max - bounds.x_min))
    ny = saturate((position.y - bounds.y_min) / (bounds.y_max - bounds.y_min))
    return nx, ny


def cell_index(position: Vector2, bounds: Bounds2D, resolution: Tuple[int, int]) -> CellIndex:
    """
    Get the cell a world position falls into.

    Positions outside ``bounds`` are filed into the nearest boundary cell.

    Parameters
    ----------
    position : Vector2
        World position
    bounds : Bounds2D
        Grid bounds
    resolution : tuple of int
        ``(cols, rows)``

    Returns
    -------
    index : tuple of int
        ``(x, y)`` in ``[0, cols-1] x [0, rows-1]``
    """
    nx, ny = normalize(position, bounds)
    return (
        int(math.floor(nx * (resolution[0] - 1))),
        int(math.floor(ny * (resolution[1] - 1))),
    )


def cell_span(
    position: Vector2,
    extent: Vector2,
    bounds: Bounds2D,
    resolution: Tuple[int, int],
) -> CellSpan:
    """
    Get the inclusive cell rectangle covered by a footprint.

    ``extent`` is the full width and height, centred on ``position``.
    Negative components must be clamped by the caller; a zero extent gives
    a single cell along that axis.
    """
    half_w = extent.x / 2
    half_h = extent.y / 2
    i1 = cell_index(Vector2(position.x - half_w, position.y - half_h), bounds, resolution)
    i2 = cell_index(Vector2(position.x + half_w, position.y + half_h), bounds, resolution)
    return CellSpan(i1, i2)
