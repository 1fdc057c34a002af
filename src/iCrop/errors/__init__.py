"""Custom exception hierarchy for iCrop.

The geometry engine itself never raises while processing gestures: every
boundary condition resolves by clamping.  These errors are reserved for the
edges of the package, where external data enters.
"""

from __future__ import annotations


class ICropError(Exception):
    """Base class for all custom errors raised by iCrop."""


class InvalidHandleError(ICropError, ValueError):
    """Raised when a side or corner name cannot be parsed."""


class EditRecordInvalidError(ICropError):
    """Raised when a persisted edit record fails schema validation."""


class GestureScriptError(ICropError):
    """Raised when a replay script is malformed or names an unknown event."""


__all__ = [
    "EditRecordInvalidError",
    "GestureScriptError",
    "ICropError",
    "InvalidHandleError",
]
