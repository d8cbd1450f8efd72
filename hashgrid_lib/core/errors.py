"""
Exceptions raised by the spatial hash grid.
"""

from typing import Optional
from .result import ErrorCode


class HashGridError(Exception):
    """Base class for grid errors. Carries an ``ErrorCode``."""

    code: ErrorCode = ErrorCode.INVALID_PARAMETER

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class InvalidStateError(HashGridError):
    """
    A client's presence precondition was violated.

    Raised by ``insert`` on a client that is already in the grid, and by
    ``remove``/``update`` on a client that is not.
    """

    code = ErrorCode.INVALID_STATE


class DegenerateFootprintError(HashGridError, ValueError):
    """Zero or negative extent under the ``"reject"`` footprint policy."""

    code = ErrorCode.DEGENERATE_FOOTPRINT


class StaleMembershipError(HashGridError):
    """A freed or recycled membership slot was dereferenced."""

    code = ErrorCode.STALE_MEMBERSHIP


class MissingFootprintError(HashGridError, ValueError):
    """A scene object carries neither an extent nor a mesh."""

    code = ErrorCode.MISSING_FOOTPRINT
