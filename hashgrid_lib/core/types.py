"""
Geometric primitive types for the spatial hash grid.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union
import numpy as np


CellIndex = Tuple[int, int]


@dataclass
class Vector2:
    """2D vector in world units (a position or a width/height extent)."""

    x: float
    y: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Vector2":
        """Create from numpy array."""
        return cls(float(arr[0]), float(arr[1]))

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)

    def is_finite(self) -> bool:
        """True if both components are finite numbers."""
        return bool(np.isfinite(self.x) and np.isfinite(self.y))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: dict) -> "Vector2":
        """Create from dictionary."""
        return cls(d["x"], d["y"])


VectorLike = Union[Vector2, Sequence[float], np.ndarray]


def as_vector2(value: VectorLike) -> Vector2:
    """Coerce a Vector2, tuple, list or array into a Vector2."""
    if isinstance(value, Vector2):
        return value
    if len(value) != 2:
        raise ValueError(f"Expected 2 components, got {len(value)}")
    return Vector2(float(value[0]), float(value[1]))


@dataclass(frozen=True)
class Bounds2D:
    """Axis-aligned rectangle the grid operates on."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def __post_init__(self):
        """Validate rectangle."""
        for name in ("x_min", "y_min", "x_max", "y_max"):
            if not np.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if self.x_min >= self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be less than x_max ({self.x_max})")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must be less than y_max ({self.y_max})")

    @classmethod
    def from_min_max(cls, bounds: Sequence[Sequence[float]]) -> "Bounds2D":
        """Create from ``[[x_min, y_min], [x_max, y_max]]``."""
        (x_min, y_min), (x_max, y_max) = bounds
        return cls(float(x_min), float(y_min), float(x_max), float(y_max))

    @classmethod
    def from_center_and_size(cls, center: VectorLike, width: float, height: float) -> "Bounds2D":
        """Create from center point and total width/height."""
        c = as_vector2(center)
        return cls(
            x_min=c.x - width / 2,
            y_min=c.y - height / 2,
            x_max=c.x + width / 2,
            y_max=c.y + height / 2,
        )

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, point: VectorLike) -> bool:
        """Check if point is inside the rectangle (edges inclusive)."""
        p = as_vector2(point)
        return self.x_min <= p.x <= self.x_max and self.y_min <= p.y <= self.y_max

    def to_min_max(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return ((self.x_min, self.y_min), (self.x_max, self.y_max))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "x_min": self.x_min,
            "y_min": self.y_min,
            "x_max": self.x_max,
            "y_max": self.y_max,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Bounds2D":
        """Create from dictionary."""
        return cls(d["x_min"], d["y_min"], d["x_max"], d["y_max"])


@dataclass(frozen=True)
class CellSpan:
    """
    Inclusive rectangle of cell indices.

    Equality compares both corners index by index, which is what the
    update fast path relies on.
    """

    min_index: CellIndex
    max_index: CellIndex

    @property
    def width(self) -> int:
        """Number of cells along x."""
        return self.max_index[0] - self.min_index[0] + 1

    @property
    def height(self) -> int:
        """Number of cells along y."""
        return self.max_index[1] - self.min_index[1] + 1

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def cells(self) -> Iterator[CellIndex]:
        """Iterate cell indices, x outer and y inner."""
        for x in range(self.min_index[0], self.max_index[0] + 1):
            for y in range(self.min_index[1], self.max_index[1] + 1):
                yield (x, y)

    def contains(self, cell: CellIndex) -> bool:
        return (
            self.min_index[0] <= cell[0] <= self.max_index[0] and
            self.min_index[1] <= cell[1] <= self.max_index[1]
        )

    def intersects(self, other: "CellSpan") -> bool:
        """Check whether two cell rectangles share at least one cell."""
        return not (
            other.max_index[0] < self.min_index[0] or
            other.min_index[0] > self.max_index[0] or
            other.max_index[1] < self.min_index[1] or
            other.min_index[1] > self.max_index[1]
        )

    def local_offset(self, cell: CellIndex) -> CellIndex:
        """Offset of a cell relative to ``min_index``."""
        return (cell[0] - self.min_index[0], cell[1] - self.min_index[1])

    def to_dict(self) -> dict:
        return {"min_index": list(self.min_index), "max_index": list(self.max_index)}

    @classmethod
    def from_dict(cls, d: dict) -> "CellSpan":
        return cls(tuple(d["min_index"]), tuple(d["max_index"]))
