"""Grid load analysis."""

from .occupancy import compute_occupancy

__all__ = ["compute_occupancy"]
