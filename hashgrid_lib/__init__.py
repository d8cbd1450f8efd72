"""
Spatial Hash Grid Library - 2D broad-phase proximity queries for moving entities

A fixed-resolution grid over a rectangular world. Entities ("clients") of
any size are filed into every cell their footprint covers; queries return
every client whose cells intersect a query box, each exactly once.

Key Features:
- O(1) insert/remove per covered cell (arena-backed linked-list buckets)
- Cheap per-frame updates when entities stay within their cells
- Multi-cell clients deduplicated in query results
- Scene tracking of 3D objects via trimesh footprints
- Proximity graphs via networkx, debug plots via matplotlib

Example Usage:
    from hashgrid_lib import create_grid

    grid = create_grid([[0, 0], [16, 16]], (16, 16))
    player = grid.insert(position=(8, 8), extent=(1, 1), payload="player")

    player.move_to((9.5, 8))
    grid.update(player)

    nearby = grid.query(center=(9, 8), extent=(3, 3))
"""

__version__ = "1.0.0"

from .core.types import Vector2, Bounds2D, CellSpan
from .core.client import Client
from .core.grid import SpatialHashGrid
from .core.errors import (
    HashGridError,
    InvalidStateError,
    DegenerateFootprintError,
    StaleMembershipError,
    MissingFootprintError,
)
from .core.result import OperationResult, OperationStatus, ErrorCode

from .params import GridConfig, get_preset, list_presets, validate_config

from .ops.build import create_grid, new_grid, insert_many
from .ops.tracking import ObjectTracker

from .analysis.occupancy import compute_occupancy

__all__ = [
    "Vector2",
    "Bounds2D",
    "CellSpan",
    "Client",
    "SpatialHashGrid",
    "HashGridError",
    "InvalidStateError",
    "DegenerateFootprintError",
    "StaleMembershipError",
    "MissingFootprintError",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
    "GridConfig",
    "get_preset",
    "list_presets",
    "validate_config",
    "create_grid",
    "new_grid",
    "insert_many",
    "ObjectTracker",
    "compute_occupancy",
]
