"""
Client records stored in the grid.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import numpy as np

from .types import CellIndex, CellSpan, Vector2, VectorLike, as_vector2


@dataclass(eq=False)
class Client:
    """
    An entity tracked by a ``SpatialHashGrid``.

    The caller owns the record and may move or resize it between updates;
    ``span``, ``memberships`` and ``last_query_id`` are grid bookkeeping and
    must not be written from outside.

    ``memberships`` is a ``(span.width, span.height)`` integer table of
    arena slots, addressed by the cell's offset from ``span.min_index``.

    Compared and hashed by identity.
    """

    id: int
    position: Vector2
    extent: Vector2
    payload: Any = None
    span: Optional[CellSpan] = None
    memberships: Optional[np.ndarray] = field(default=None, repr=False)
    last_query_id: int = -1

    @property
    def is_inserted(self) -> bool:
        return self.span is not None

    def move_to(self, position: VectorLike) -> None:
        """Set a new position. Takes effect on the next ``grid.update``."""
        self.position = as_vector2(position)

    def resize(self, extent: VectorLike) -> None:
        """Set a new extent. Takes effect on the next ``grid.update``."""
        self.extent = as_vector2(extent)

    def membership_slot(self, cell: CellIndex) -> int:
        """Arena slot of this client's membership in ``cell``."""
        if self.span is None or self.memberships is None:
            raise KeyError(f"Client {self.id} is not in the grid")
        if not self.span.contains(cell):
            raise KeyError(f"Client {self.id} does not occupy cell {cell}")
        xi, yi = self.span.local_offset(cell)
        return int(self.memberships[xi, yi])

    def to_dict(self) -> dict:
        """Convert to dictionary. The payload is not included."""
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "extent": self.extent.to_dict(),
            "span": self.span.to_dict() if self.span is not None else None,
        }
