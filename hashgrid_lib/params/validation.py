"""Grid configuration validation.

Hard errors (bad bounds, non-integer resolution) are raised when the grid
is built; this module flags configurations that are legal but likely to
perform badly or behave surprisingly.
"""

import logging
from typing import List, Tuple

from ..core.grid import DEGENERATE_POLICIES
from .config import GridConfig

logger = logging.getLogger(__name__)


PARAM_BOUNDS = {
    "cols": (1, 4096, "cells"),
    "rows": (1, 4096, "cells"),
    "initial_capacity": (0, 10_000_000, "slots"),
}

MAX_TOTAL_CELLS = 4_000_000
MAX_CELL_ASPECT = 8.0


def validate_config(config: GridConfig) -> Tuple[bool, List[str]]:
    """
    Validate a GridConfig against recommended ranges.

    Parameters
    ----------
    config : GridConfig
        Configuration to validate

    Returns
    -------
    is_valid : bool
        True if no warnings were produced
    warnings : list of str
        List of validation warnings
    """
    warnings = []

    cols, rows = config.resolution
    values = {"cols": cols, "rows": rows, "initial_capacity": config.initial_capacity}

    for param_name, (min_val, max_val, unit) in PARAM_BOUNDS.items():
        value = values[param_name]
        if value < min_val:
            warnings.append(f"{param_name} = {value} {unit} is below minimum {min_val} {unit}")
        elif value > max_val:
            warnings.append(f"{param_name} = {value} {unit} exceeds maximum {max_val} {unit}")

    if cols * rows > MAX_TOTAL_CELLS:
        warnings.append(
            f"{cols}x{rows} = {cols * rows} cells exceeds {MAX_TOTAL_CELLS}; "
            "bucket heads alone will use a lot of memory"
        )

    if cols == 1 or rows == 1:
        warnings.append(
            f"resolution {config.resolution} has a single cell along one axis; "
            "every client will share that column/row"
        )

    if cols > 1 and rows > 1:
        # The mapping steps by 1/(count-1), so that is the effective cell size.
        cell_w = config.bounds.width / (cols - 1)
        cell_h = config.bounds.height / (rows - 1)
        aspect = max(cell_w, cell_h) / min(cell_w, cell_h)
        if aspect > MAX_CELL_ASPECT:
            warnings.append(
                f"cell aspect ratio {aspect:.1f}:1 exceeds {MAX_CELL_ASPECT:.0f}:1; "
                "queries will touch many cells along the short axis"
            )

    if config.degenerate_policy not in DEGENERATE_POLICIES:
        warnings.append(
            f"degenerate_policy '{config.degenerate_policy}' is not one of {DEGENERATE_POLICIES}"
        )

    is_valid = len(warnings) == 0
    return is_valid, warnings


def validate_and_warn(config: GridConfig) -> GridConfig:
    """
    Validate a configuration and log warnings.

    Parameters
    ----------
    config : GridConfig
        Configuration to validate

    Returns
    -------
    config : GridConfig
        Same configuration (for chaining)
    """
    is_valid, warnings = validate_config(config)

    if not is_valid:
        logger.warning("Grid configuration warnings (%d):", len(warnings))
        for warning in warnings:
            logger.warning("  - %s", warning)

    return config
