"""Gesture events delivered to the crop engine, one per call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..geometry import Corner, Point, Side


@dataclass(frozen=True)
class TranslateEvent:
    """Drag of the whole crop rect by a view-space delta since gesture start."""

    delta_x: float
    delta_y: float
    is_finished: bool = False


@dataclass(frozen=True)
class ResizeSideEvent:
    """Drag of one edge to a pointer position in view space."""

    side: Side
    pointer: Point
    is_finished: bool = False


@dataclass(frozen=True)
class ResizeCornerEvent:
    """Drag of one corner to a pointer position in view space."""

    corner: Corner
    pointer: Point
    is_finished: bool = False


@dataclass(frozen=True)
class TiltEvent:
    """New tilt angle in degrees."""

    tilt: float


GestureEvent = Union[TranslateEvent, ResizeSideEvent, ResizeCornerEvent, TiltEvent]


__all__ = [
    "GestureEvent",
    "ResizeCornerEvent",
    "ResizeSideEvent",
    "TiltEvent",
    "TranslateEvent",
]
