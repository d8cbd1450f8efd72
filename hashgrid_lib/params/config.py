"""Grid configuration."""

from dataclasses import dataclass
from typing import Tuple

from ..core.types import Bounds2D


@dataclass
class GridConfig:
    """Parameters for building a ``SpatialHashGrid``."""

    bounds: Bounds2D
    resolution: Tuple[int, int] = (16, 16)  # (cols, rows)
    degenerate_policy: str = "clamp"  # "clamp" or "reject"
    initial_capacity: int = 0  # membership slots to pre-allocate

    @property
    def cell_size(self) -> Tuple[float, float]:
        """Nominal cell size in world units."""
        return (
            self.bounds.width / self.resolution[0],
            self.bounds.height / self.resolution[1],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "bounds": self.bounds.to_dict(),
            "resolution": list(self.resolution),
            "degenerate_policy": self.degenerate_policy,
            "initial_capacity": self.initial_capacity,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GridConfig":
        """Create from dictionary."""
        return cls(
            bounds=Bounds2D.from_dict(d["bounds"]),
            resolution=tuple(d.get("resolution", (16, 16))),
            degenerate_policy=d.get("degenerate_policy", "clamp"),
            initial_capacity=d.get("initial_capacity", 0),
        )
