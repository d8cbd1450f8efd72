"""
Tests for the scene object tracker.
"""

import pytest
import numpy as np
import trimesh

from hashgrid_lib.core.types import CellSpan, Vector2
from hashgrid_lib.core.errors import InvalidStateError, MissingFootprintError
from hashgrid_lib.core.result import ErrorCode, OperationStatus
from hashgrid_lib.ops.tracking import ObjectTracker


def test_add_with_explicit_extent(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    obj = make_object((10, 3, 10), extent=(2, 2))
    client = tracker.add(obj)

    assert client.position == Vector2(10, 10)
    assert client.payload == {"object": obj}
    assert obj in tracker
    assert len(tracker) == 1
    assert tracker.get_nearby_objects((10, 0, 10), (1, 1)) == [obj]


def test_add_with_mesh(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    box = trimesh.creation.box(extents=(10, 4, 10))
    obj = make_object((50, 0, 50), mesh=box)

    client = tracker.add(obj)
    assert client.extent.x == pytest.approx(10)
    assert client.extent.y == pytest.approx(10)
    assert client.span == CellSpan((1, 1), (2, 2))


def test_add_xy_plane(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid, plane="xy")
    obj = make_object((10, 90, 50), extent=(1, 1))
    client = tracker.add(obj)
    assert client.span == CellSpan((0, 3), (0, 3))


def test_add_twice_raises(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    obj = make_object((10, 0, 10), extent=(1, 1))
    tracker.add(obj)
    with pytest.raises(InvalidStateError, match="already tracked") as exc:
        tracker.add(obj)
    assert exc.value.code == ErrorCode.OBJECT_ALREADY_TRACKED


def test_add_without_footprint(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    with pytest.raises(MissingFootprintError, match="no 'extent' or 'mesh'") as exc:
        tracker.add(make_object((10, 0, 10)))
    assert exc.value.code == ErrorCode.MISSING_FOOTPRINT
    assert isinstance(exc.value, ValueError)
    assert len(coarse_grid) == 0


def test_custom_footprint_provider(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid, footprint_provider=lambda obj, plane: Vector2(60, 60))
    client = tracker.add(make_object((50, 0, 50)))
    assert client.span == CellSpan((0, 0), (3, 3))


def test_update_all(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    still = make_object((10, 0, 10), extent=(1, 1))
    mover = make_object((20, 0, 10), extent=(1, 1))
    tracker.add(still)
    tracker.add(mover)

    mover.position = np.array([60.0, 0.0, 10.0])
    result = tracker.update_all()

    assert result.status == OperationStatus.SUCCESS
    assert result.metadata == {"updated": 2, "relocated": 1, "failed": 0}
    assert tracker.get_nearby_objects((60, 0, 10), (1, 1)) == [mover]
    assert tracker.get_nearby_objects((10, 0, 10), (1, 1)) == [still]
    coarse_grid.check_invariants()


def test_update_all_refresh_extent(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    obj = make_object((50, 0, 50), extent=(1, 1))
    client = tracker.add(obj)

    obj.extent = (60, 60)
    assert tracker.update_all().metadata["relocated"] == 0
    assert tracker.update_all(refresh_extent=True).metadata["relocated"] == 1
    assert client.span == CellSpan((0, 0), (3, 3))


def test_update_all_skips_bad_object(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    good = make_object((10, 0, 10), extent=(1, 1))
    bad = make_object((90, 0, 90), extent=(1, 1))
    tracker.add(good)
    bad_client = tracker.add(bad)

    bad.position = np.array([np.nan, 0.0, 0.0])
    good.position = np.array([90.0, 0.0, 10.0])
    result = tracker.update_all()

    assert result.status == OperationStatus.PARTIAL_SUCCESS
    assert result.metadata["failed"] == 1
    assert result.error_codes == [ErrorCode.INVALID_PARAMETER.value]
    assert bad_client.position == Vector2(90, 90)
    assert tracker.get_nearby_objects((90, 0, 90), (1, 1)) == [bad]
    coarse_grid.check_invariants()


def test_remove(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    obj = make_object((10, 0, 10), extent=(1, 1))
    tracker.add(obj)
    tracker.remove(obj)

    assert obj not in tracker
    assert len(coarse_grid) == 0
    with pytest.raises(InvalidStateError, match="not tracked") as exc:
        tracker.remove(obj)
    assert exc.value.code == ErrorCode.OBJECT_NOT_TRACKED


def test_dispose(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    for i in range(5):
        tracker.add(make_object((10 + i * 15, 0, 50), extent=(3, 3)))

    result = tracker.dispose()
    assert result.is_success()
    assert result.metadata["removed"] == 5
    assert len(tracker) == 0
    assert len(coarse_grid) == 0
    assert coarse_grid.membership_count == 0


def test_invalid_plane(coarse_grid):
    with pytest.raises(ValueError, match="plane must be one of"):
        ObjectTracker(coarse_grid, plane="xw")


def test_dispose_skips_clients_removed_from_grid(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    kept = [tracker.add(make_object((10 + i * 20, 0, 50), extent=(3, 3))) for i in range(3)]
    coarse_grid.remove(kept[1])

    result = tracker.dispose()
    assert result.status == OperationStatus.SUCCESS
    assert result.metadata == {"removed": 2, "skipped": 1}
    assert result.warnings == [f"Client {kept[1].id} was already removed from the grid"]
    assert len(tracker) == 0
    assert len(coarse_grid) == 0
    coarse_grid.check_invariants()


def test_update_all_every_object_fails(coarse_grid, make_object):
    tracker = ObjectTracker(coarse_grid)
    obj = make_object((10, 0, 10), extent=(1, 1))
    tracker.add(obj)

    obj.position = np.array([np.inf, 0.0, 10.0])
    result = tracker.update_all()

    assert result.status == OperationStatus.FAILURE
    assert result.is_failure()
    assert result.metadata == {"updated": 0, "relocated": 0, "failed": 1}
