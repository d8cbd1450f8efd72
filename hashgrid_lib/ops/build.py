"""
Construction operations for building grids.
"""

from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from ..core.types import Bounds2D, VectorLike
from ..core.grid import SpatialHashGrid
from ..core.errors import HashGridError
from ..core.result import OperationResult
from ..params.config import GridConfig
from ..params.presets import get_preset


def create_grid(
    bounds: Optional[Union[Bounds2D, Sequence[Sequence[float]]]] = None,
    resolution: Optional[Sequence[int]] = None,
    config: Optional[GridConfig] = None,
    preset: Optional[str] = None,
) -> SpatialHashGrid:
    """
    Create a new empty grid.

    Exactly one of ``bounds``/``resolution``, ``config`` or ``preset``
    must be given.

    Parameters
    ----------
    bounds : Bounds2D or [[x_min, y_min], [x_max, y_max]], optional
        World rectangle
    resolution : (int, int), optional
        Cells along x and y
    config : GridConfig, optional
        Full configuration
    preset : str, optional
        Name of a preset from ``hashgrid_lib.params``

    Returns
    -------
    grid : SpatialHashGrid
        New empty grid

    Example
    -------
    >>> from hashgrid_lib import create_grid
    >>> grid = create_grid([[0, 0], [16, 16]], (16, 16))
    """
    given = sum(x is not None for x in (config, preset)) + (bounds is not None or resolution is not None)
    if given != 1:
        raise ValueError("Pass exactly one of bounds/resolution, config or preset")

    if preset is not None:
        config = get_preset(preset)

    if config is None:
        if bounds is None or resolution is None:
            raise ValueError("bounds and resolution must be given together")
        if not isinstance(bounds, Bounds2D):
            bounds = Bounds2D.from_min_max(bounds)
        config = GridConfig(bounds=bounds, resolution=tuple(resolution))

    return SpatialHashGrid(
        bounds=config.bounds,
        resolution=config.resolution,
        degenerate_policy=config.degenerate_policy,
        initial_capacity=config.initial_capacity,
    )


def new_grid(
    bounds: Union[Bounds2D, Sequence[Sequence[float]]],
    resolution: Sequence[int],
) -> SpatialHashGrid:
    """Create a grid from bounds and resolution."""
    return create_grid(bounds=bounds, resolution=resolution)


def insert_many(
    grid: SpatialHashGrid,
    items: Iterable[Tuple[VectorLike, VectorLike, Any]],
) -> OperationResult:
    """
    Insert a batch of ``(position, extent, payload)`` footprints.

    Items that fail validation are skipped and reported; the rest are
    inserted.

    Returns
    -------
    result : OperationResult
        ``metadata['clients']`` holds the new clients in input order
        (``None`` for skipped items)
    """
    clients = []
    errors = []
    error_codes = []

    for i, (position, extent, payload) in enumerate(items):
        try:
            clients.append(grid.insert(position, extent, payload))
        except HashGridError as e:
            clients.append(None)
            errors.append(f"Item {i}: {e}")
            error_codes.append(e.code.value)
        except ValueError as e:
            clients.append(None)
            errors.append(f"Item {i}: {e}")

    inserted = sum(c is not None for c in clients)
    metadata = {"clients": clients, "inserted": inserted, "skipped": len(clients) - inserted}

    if not errors:
        return OperationResult.success(f"Inserted {inserted} clients", metadata=metadata)

    factory = OperationResult.partial_success if inserted else OperationResult.failure
    return factory(
        f"Inserted {inserted} of {len(clients)} clients",
        errors=errors,
        error_codes=error_codes,
        metadata=metadata,
    )
