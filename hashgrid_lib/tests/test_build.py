"""
Tests for grid construction operations.
"""

import pytest
from hashgrid_lib import create_grid, new_grid, insert_many, GridConfig, Bounds2D
from hashgrid_lib.core.result import OperationStatus


def test_create_grid_from_bounds():
    grid = create_grid([[0, 0], [16, 16]], (16, 16))
    assert grid.bounds == Bounds2D(0, 0, 16, 16)
    assert grid.resolution == (16, 16)


def test_new_grid():
    grid = new_grid(Bounds2D(-1, -1, 1, 1), (2, 2))
    assert grid.resolution == (2, 2)


def test_create_grid_from_preset():
    grid = create_grid(preset="arena_1000")
    assert grid.resolution == (100, 100)
    assert grid.arena.capacity == 4096


def test_create_grid_from_config():
    config = GridConfig(bounds=Bounds2D(0, 0, 10, 10), resolution=(4, 4), degenerate_policy="reject")
    grid = create_grid(config=config)
    assert grid.degenerate_policy == "reject"


def test_create_grid_argument_errors():
    with pytest.raises(ValueError, match="exactly one"):
        create_grid()
    with pytest.raises(ValueError, match="exactly one"):
        create_grid([[0, 0], [1, 1]], (2, 2), preset="demo_16x16")
    with pytest.raises(ValueError, match="together"):
        create_grid(bounds=[[0, 0], [1, 1]])


def test_insert_many():
    grid = create_grid([[0, 0], [16, 16]], (16, 16))
    result = insert_many(grid, [((1, 1), (1, 1), "a"), ((8, 8), (2, 2), "b")])
    assert result.status == OperationStatus.SUCCESS
    assert result.metadata["inserted"] == 2
    assert [c.payload for c in result.metadata["clients"]] == ["a", "b"]
    assert len(grid) == 2


def test_insert_many_partial():
    config = GridConfig(bounds=Bounds2D(0, 0, 16, 16), resolution=(16, 16), degenerate_policy="reject")
    grid = create_grid(config=config)
    result = insert_many(grid, [
        ((1, 1), (1, 1), "ok"),
        ((2, 2), (0, 1), "flat"),
        ((float("nan"), 2), (1, 1), "nan"),
    ])
    assert result.status == OperationStatus.PARTIAL_SUCCESS
    assert result.is_success()
    assert result.metadata["inserted"] == 1
    assert result.metadata["skipped"] == 2
    assert result.metadata["clients"][1] is None
    assert result.error_codes == ["DEGENERATE_FOOTPRINT"]
    assert len(result.errors) == 2
    assert len(grid) == 1
    grid.check_invariants()


def test_insert_many_all_fail():
    grid = create_grid([[0, 0], [16, 16]], (16, 16))
    result = insert_many(grid, [((float("inf"), 0), (1, 1), None)])
    assert result.is_failure()
    assert result.to_dict()["status"] == "failure"
