"""Grid construction and scene tracking operations."""

from .build import create_grid, new_grid, insert_many
from .tracking import ObjectTracker

__all__ = [
    "create_grid",
    "new_grid",
    "insert_many",
    "ObjectTracker",
]
