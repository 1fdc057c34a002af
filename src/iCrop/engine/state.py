"""Per-gesture action state cached by the crop engine.

The state is a tagged union of frozen dataclasses.  Translate and tilt
gestures snapshot what they need on their first event and reuse it for the
rest of the gesture; recomputing the fence or the pivot from the rect emitted
by the previous event would let rounding drift accumulate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..geometry import Point, Rect, Size


@dataclass(frozen=True)
class IdleState:
    """No gesture in progress."""


@dataclass(frozen=True)
class DraggingState:
    """Translate gesture: crop rect at gesture start and its cached fence."""

    start_rect: Rect
    fence_polygon: tuple[Point, ...]


@dataclass(frozen=True)
class TiltingState:
    """Tilt gesture: pivot in texture space and the crop size to fit around it."""

    center_in_texture_space: Point
    max_size: Size


ActionState = Union[IdleState, DraggingState, TiltingState]

IDLE = IdleState()


__all__ = ["ActionState", "DraggingState", "IDLE", "IdleState", "TiltingState"]
