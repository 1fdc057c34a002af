"""Crop gesture operations as pure functions.

Every operation takes the current :data:`ActionState`, one gesture event, the
camera metrics and the current :class:`EditRecord`, and returns the next state
together with the updated record.  Nothing here mutates its inputs; the
:class:`~iCrop.engine.engine.CropEngine` threads the returned state into the
next call.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from ..camera import CameraMetrics, ProjectionFactory, create_projection_matrix
from ..config import MIN_CROP_RECT_SIZE, ROUNDING_EPSILON
from ..geometry import (
    OPPOSITE_CORNER,
    Corner,
    Point,
    Polygon,
    Rect,
    Side,
    Size,
    build_fence_polygon,
    center_of_rect,
    corner_point_of_rect,
    nearest_point_on_polygon,
    point_in_polygon,
    rect_from_center_and_size,
    rect_from_corner_point_and_size,
    rect_from_points,
    round_rect,
    round_rect_inward,
    scale_size,
    transform_point,
)
from ..model import EditRecord
from .constraints import (
    create_texture_polygon,
    fit_factor_around_center,
    limit_rect_resize_to_texture,
    max_cut_factor,
    project_texture_outline,
    rect_inside_polygon,
    snap_point_into_polygon,
)
from .events import GestureEvent, ResizeCornerEvent, ResizeSideEvent, TiltEvent, TranslateEvent
from .state import IDLE, ActionState, DraggingState, TiltingState

_LOGGER = logging.getLogger(__name__)


class CropResult(NamedTuple):
    """Next action state and the edit record to emit."""

    state: ActionState
    edit: EditRecord


def _emit(edit: EditRecord, crop_rect: Rect, metrics: CameraMetrics) -> EditRecord:
    return edit.with_crop_rect(crop_rect, metrics.neutral_crop_rect)


def translate(
    state: ActionState,
    event: TranslateEvent,
    metrics: CameraMetrics,
    edit: EditRecord,
) -> CropResult:
    """Move the whole crop rect by the view-space delta accumulated this gesture."""
    if isinstance(state, DraggingState):
        start_rect = state.start_rect
        fence_polygon: Polygon = state.fence_polygon
        next_state: ActionState = state
    else:
        start_rect = metrics.crop_rect
        fence_polygon = tuple(build_fence_polygon(start_rect, create_texture_polygon(metrics)))
        next_state = DraggingState(start_rect=start_rect, fence_polygon=fence_polygon)
        _LOGGER.debug("Drag started at %s with %d fence points", start_rect, len(fence_polygon))

    zoom = metrics.zoom
    left_top: Point = (start_rect.x + event.delta_x / zoom, start_rect.y + event.delta_y / zoom)
    if not point_in_polygon(left_top, fence_polygon):
        left_top = nearest_point_on_polygon(left_top, fence_polygon)
    snapped = snap_point_into_polygon(left_top, fence_polygon)
    if snapped is None:
        # No whole-pixel position near the pointer fits; the start corner always does.
        _LOGGER.debug("No integer fence point near %s; holding drag at start", left_top)
        snapped = (start_rect.x, start_rect.y)
    crop_rect = rect_from_corner_point_and_size(snapped, start_rect.size)

    if event.is_finished:
        _LOGGER.debug("Drag finished at %s", crop_rect)
        next_state = IDLE
    return CropResult(next_state, _emit(edit, crop_rect, metrics))


def resize_side(
    state: ActionState,
    event: ResizeSideEvent,
    metrics: CameraMetrics,
    edit: EditRecord,
) -> CropResult:
    """Move one edge of the current crop rect towards the pointer."""
    prev_rect = metrics.crop_rect
    px, py = transform_point(event.pointer, metrics.inverted_camera_matrix)

    nw_x, nw_y = corner_point_of_rect(prev_rect, Corner.NW)
    se_x, se_y = corner_point_of_rect(prev_rect, Corner.SE)
    side = Side.parse(event.side)
    if side is Side.W:
        nw_x = min(se_x - MIN_CROP_RECT_SIZE, px)
    elif side is Side.N:
        nw_y = min(se_y - MIN_CROP_RECT_SIZE, py)
    elif side is Side.E:
        se_x = max(nw_x + MIN_CROP_RECT_SIZE, px)
    else:
        se_y = max(nw_y + MIN_CROP_RECT_SIZE, py)

    wanted_rect = rect_from_points((nw_x, nw_y), (se_x, se_y))
    crop_rect = limit_rect_resize_to_texture(
        prev_rect, wanted_rect, create_texture_polygon(metrics)
    )
    return CropResult(IDLE, _emit(edit, crop_rect, metrics))


def resize_corner(
    state: ActionState,
    event: ResizeCornerEvent,
    metrics: CameraMetrics,
    edit: EditRecord,
) -> CropResult:
    """Drag one corner towards the pointer while the opposite corner stays put."""
    prev_rect = metrics.crop_rect
    corner = Corner.parse(event.corner)
    projected_point = transform_point(event.pointer, metrics.inverted_camera_matrix)
    opposite_point = corner_point_of_rect(prev_rect, OPPOSITE_CORNER[corner])

    texture_polygon = create_texture_polygon(metrics)
    if point_in_polygon(projected_point, texture_polygon):
        wanted_point = projected_point
    else:
        wanted_point = nearest_point_on_polygon(projected_point, texture_polygon)
    width = wanted_point[0] - opposite_point[0]
    height = wanted_point[1] - opposite_point[1]

    # Each axis may be cut on its own, so a diagonal drag against a slanted
    # texture edge shrinks the rect non-uniformly.
    x_cut_factor = max_cut_factor(opposite_point, (width, 0.0), texture_polygon)
    if x_cut_factor is not None and x_cut_factor < 1:
        width *= max(0.0, x_cut_factor)
    y_cut_factor = max_cut_factor(opposite_point, (0.0, height), texture_polygon)
    if y_cut_factor is not None and y_cut_factor < 1:
        height *= max(0.0, y_cut_factor)

    dir_x, dir_y = corner.direction
    width = dir_x * max(MIN_CROP_RECT_SIZE, math.floor(dir_x * width + ROUNDING_EPSILON))
    height = dir_y * max(MIN_CROP_RECT_SIZE, math.floor(dir_y * height + ROUNDING_EPSILON))

    # The floor can push the dragged corner into a row or column the cuts
    # above never checked; cut the two far edges again from their new ends.
    opposite_x, opposite_y = opposite_point
    y_cut_factor = max_cut_factor((opposite_x + width, opposite_y), (0.0, height), texture_polygon)
    if y_cut_factor is not None and y_cut_factor < 1:
        height = dir_y * math.floor(dir_y * height * max(0.0, y_cut_factor) + ROUNDING_EPSILON)
    x_cut_factor = max_cut_factor((opposite_x, opposite_y + height), (width, 0.0), texture_polygon)
    if x_cut_factor is not None and x_cut_factor < 1:
        width = dir_x * math.floor(dir_x * width * max(0.0, x_cut_factor) + ROUNDING_EPSILON)

    crop_rect = rect_from_corner_point_and_size(opposite_point, Size(float(width), float(height)))
    if (
        abs(width) < MIN_CROP_RECT_SIZE
        or abs(height) < MIN_CROP_RECT_SIZE
        or not rect_inside_polygon(crop_rect, texture_polygon)
    ):
        _LOGGER.debug(
            "No room for a %s corner drag to %s; keeping %s", corner.value, wanted_point, prev_rect
        )
        crop_rect = prev_rect
    return CropResult(IDLE, _emit(edit, crop_rect, metrics))


def _slide_into_texture(center: Point, size: Size, texture_polygon: Polygon) -> Rect | None:
    """Place a *size* rect as close to *center* as its fence allows, on whole pixels."""
    rect = rect_from_center_and_size(center, size)
    fence_polygon = build_fence_polygon(rect, texture_polygon)
    if len(fence_polygon) < 3:
        return None
    left_top: Point = (rect.x, rect.y)
    if not point_in_polygon(left_top, fence_polygon):
        left_top = nearest_point_on_polygon(left_top, fence_polygon)
    snapped = snap_point_into_polygon(left_top, fence_polygon)
    if snapped is None:
        return None
    return rect_from_corner_point_and_size(snapped, size)


def _fit_min_size_rect(center: Point, max_size: Size, texture_polygon: Polygon) -> Rect:
    """Return the smallest allowed rect of *max_size*'s aspect, slid inside the texture.

    When no such rect fits, each axis is clamped on its own and, failing that,
    the rect falls back to the bare minimum square.
    """
    floor_factor = max(MIN_CROP_RECT_SIZE / max_size.width, MIN_CROP_RECT_SIZE / max_size.height)
    floor_factor = min(1.0, floor_factor)
    size = Size(
        float(max(MIN_CROP_RECT_SIZE, math.ceil(max_size.width * floor_factor - ROUNDING_EPSILON))),
        float(max(MIN_CROP_RECT_SIZE, math.ceil(max_size.height * floor_factor - ROUNDING_EPSILON))),
    )
    rect = _slide_into_texture(center, size, texture_polygon)
    if rect is not None:
        _LOGGER.debug("Tilted crop hit the size floor; slid to %s", rect)
        return rect

    width_factor = fit_factor_around_center(center, Size(size.width, MIN_CROP_RECT_SIZE), texture_polygon)
    height_factor = fit_factor_around_center(center, Size(MIN_CROP_RECT_SIZE, size.height), texture_polygon)
    square = Size(float(MIN_CROP_RECT_SIZE), float(MIN_CROP_RECT_SIZE))
    for clamped in (
        Size(
            float(max(MIN_CROP_RECT_SIZE, math.floor(size.width * width_factor + ROUNDING_EPSILON))),
            float(max(MIN_CROP_RECT_SIZE, math.floor(size.height * height_factor + ROUNDING_EPSILON))),
        ),
        square,
    ):
        rect = _slide_into_texture(center, clamped, texture_polygon)
        if rect is not None:
            _LOGGER.debug("No %s rect fits the tilted texture; aspect ratio given up for %s", size, rect)
            return rect

    _LOGGER.warning("Texture cannot hold a %s crop; keeping it centred at %s", square, center)
    return round_rect(rect_from_center_and_size(center, square))


def set_tilt(
    state: ActionState,
    event: TiltEvent,
    metrics: CameraMetrics,
    edit: EditRecord,
    projection_factory: ProjectionFactory = create_projection_matrix,
) -> CropResult:
    """Rotate the image and refit the crop rect around a pivot held for the gesture."""
    edit = edit.with_tilt(event.tilt)

    if isinstance(state, TiltingState):
        center_in_texture = state.center_in_texture_space
        max_size = state.max_size
        next_state: ActionState = state
    else:
        prev_rect = metrics.crop_rect
        center_in_texture = transform_point(
            center_of_rect(prev_rect), metrics.inverted_projection_matrix
        )
        max_size = prev_rect.size
        next_state = TiltingState(center_in_texture_space=center_in_texture, max_size=max_size)
        _LOGGER.debug("Tilt started around texture point %s", center_in_texture)

    next_projection = projection_factory(metrics.texture_size, metrics.exif_orientation, edit)
    next_center = transform_point(center_in_texture, next_projection)
    texture_polygon = project_texture_outline(metrics.texture_size, next_projection)

    factor = fit_factor_around_center(next_center, max_size, texture_polygon)
    crop_rect = round_rect_inward(
        rect_from_center_and_size(next_center, scale_size(max_size, factor))
    )
    if crop_rect.width < MIN_CROP_RECT_SIZE or crop_rect.height < MIN_CROP_RECT_SIZE:
        crop_rect = _fit_min_size_rect(next_center, max_size, texture_polygon)
    return CropResult(next_state, _emit(edit, crop_rect, metrics))


def apply_event(
    state: ActionState,
    event: GestureEvent,
    metrics: CameraMetrics,
    edit: EditRecord,
    projection_factory: ProjectionFactory = create_projection_matrix,
) -> CropResult:
    """Dispatch *event* to the matching operation."""
    if isinstance(event, TranslateEvent):
        return translate(state, event, metrics, edit)
    if isinstance(event, ResizeSideEvent):
        return resize_side(state, event, metrics, edit)
    if isinstance(event, ResizeCornerEvent):
        return resize_corner(state, event, metrics, edit)
    if isinstance(event, TiltEvent):
        return set_tilt(state, event, metrics, edit, projection_factory)
    raise TypeError(f"Unsupported gesture event: {event!r}")


__all__ = [
    "CropResult",
    "apply_event",
    "resize_corner",
    "resize_side",
    "set_tilt",
    "translate",
]
