"""Core data structures for the spatial hash grid."""

from .types import Vector2, Bounds2D, CellSpan, CellIndex, as_vector2
from .mapping import saturate, normalize, cell_index, cell_span
from .arena import MembershipArena, NIL
from .client import Client
from .grid import SpatialHashGrid, DEGENERATE_POLICIES
from .errors import (
    HashGridError,
    InvalidStateError,
    DegenerateFootprintError,
    StaleMembershipError,
    MissingFootprintError,
)
from .result import OperationResult, OperationStatus, ErrorCode


__all__ = [
    "Vector2",
    "Bounds2D",
    "CellSpan",
    "CellIndex",
    "as_vector2",
    "saturate",
    "normalize",
    "cell_index",
    "cell_span",
    "MembershipArena",
    "NIL",
    "Client",
    "SpatialHashGrid",
    "DEGENERATE_POLICIES",
    "HashGridError",
    "InvalidStateError",
    "DegenerateFootprintError",
    "StaleMembershipError",
    "MissingFootprintError",
    "OperationResult",
    "OperationStatus",
    "ErrorCode",
]
