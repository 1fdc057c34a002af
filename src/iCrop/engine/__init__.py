"""
Crop constraint engine.

The pure operations in :mod:`.operations` compute a valid crop rect for one
gesture event; :class:`CropEngine` keeps the per-gesture state between events.
"""

from .constraints import (
    create_texture_polygon,
    fit_factor_around_center,
    limit_rect_resize_to_texture,
    max_cut_factor,
    project_texture_outline,
    rect_inside_polygon,
    snap_point_into_polygon,
)
from .engine import CropEngine
from .events import GestureEvent, ResizeCornerEvent, ResizeSideEvent, TiltEvent, TranslateEvent
from .operations import CropResult, apply_event, resize_corner, resize_side, set_tilt, translate
from .state import IDLE, ActionState, DraggingState, IdleState, TiltingState

__all__ = [
    "ActionState",
    "CropEngine",
    "CropResult",
    "DraggingState",
    "GestureEvent",
    "IDLE",
    "IdleState",
    "ResizeCornerEvent",
    "ResizeSideEvent",
    "TiltEvent",
    "TiltingState",
    "TranslateEvent",
    "apply_event",
    "create_texture_polygon",
    "fit_factor_around_center",
    "limit_rect_resize_to_texture",
    "max_cut_factor",
    "project_texture_outline",
    "rect_inside_polygon",
    "resize_corner",
    "resize_side",
    "set_tilt",
    "snap_point_into_polygon",
    "translate",
]
