"""
Occupancy statistics for load inspection.
"""

from typing import Any, Dict
import numpy as np

from ..core.grid import SpatialHashGrid


def compute_occupancy(grid: SpatialHashGrid) -> Dict[str, Any]:
    """
    Summarise how memberships are spread over the cells.

    Parameters
    ----------
    grid : SpatialHashGrid
        Grid to inspect

    Returns
    -------
    stats : dict
        ``total_memberships``, ``client_count``, ``occupied_cells``,
        ``empty_fraction``, ``max_per_cell``, ``mean_per_occupied_cell``
        and ``hotspot`` (cell index of the fullest cell, or None)
    """
    counts = grid.occupancy()
    total = int(counts.sum())
    occupied = int(np.count_nonzero(counts))

    if occupied:
        hotspot = np.unravel_index(int(np.argmax(counts)), counts.shape)
        hotspot = (int(hotspot[0]), int(hotspot[1]))
        mean_occupied = float(total / occupied)
    else:
        hotspot = None
        mean_occupied = 0.0

    return {
        "total_memberships": total,
        "client_count": grid.client_count,
        "occupied_cells": occupied,
        "empty_fraction": float(1.0 - occupied / counts.size),
        "max_per_cell": int(counts.max()),
        "mean_per_occupied_cell": mean_occupied,
        "hotspot": hotspot,
    }
