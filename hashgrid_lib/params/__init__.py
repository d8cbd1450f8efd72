"""Grid configuration, presets and validation."""

from .config import GridConfig

from .presets import (
    demo_16x16,
    arena_1000,
    coarse_debug,
    get_preset,
    list_presets,
    PRESETS,
)

from .validation import (
    validate_config,
    validate_and_warn,
    PARAM_BOUNDS,
)

__all__ = [
    "GridConfig",
    # Presets
    "demo_16x16",
    "arena_1000",
    "coarse_debug",
    "get_preset",
    "list_presets",
    "PRESETS",
    # Validation
    "validate_config",
    "validate_and_warn",
    "PARAM_BOUNDS",
]
