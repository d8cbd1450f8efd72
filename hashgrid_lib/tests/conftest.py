import pytest
import numpy as np

from hashgrid_lib.core.grid import SpatialHashGrid


@pytest.fixture
def grid16():
    """16 x 16 world with 16 x 16 cells."""
    return SpatialHashGrid(bounds=[[0, 0], [16, 16]], resolution=(16, 16))


@pytest.fixture
def coarse_grid():
    """
    100 x 100 world with 5 x 5 cells.

    With the count - 1 stepping, cells 0..3 each cover 25 units and
    cell 4 is only reached at 100 or beyond.
    """
    return SpatialHashGrid(bounds=[[0, 0], [100, 100]], resolution=(5, 5))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


def bucket_snapshot(grid):
    """Client ids per non-empty cell, in bucket order."""
    return {cell: [c.id for c in bucket] for cell, bucket in grid.iter_cells()}


class SceneObject:
    """Minimal stand-in for a renderable scene object."""

    def __init__(self, position, extent=None, mesh=None):
        self.position = np.array(position, dtype=float)
        self.extent = extent
        self.mesh = mesh


@pytest.fixture
def snapshot():
    return bucket_snapshot


@pytest.fixture
def make_object():
    return SceneObject
