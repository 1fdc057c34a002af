"""Constraint helpers keeping crop rects inside the projected texture."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..camera import CameraMetrics
from ..config import MIN_CROP_RECT_SIZE, SNAP_SEARCH_RADIUS
from ..geometry import (
    CORNERS,
    Corner,
    Point,
    Polygon,
    Rect,
    Size,
    ceil_point,
    corner_point_of_rect,
    direction_of_points,
    floor_point,
    intersect_line_with_polygon,
    move_point,
    point_in_polygon,
    rect_from_points,
    round_point,
    transform_point,
)

_LOGGER = logging.getLogger(__name__)


def project_texture_outline(texture_size: Size, projection_matrix: np.ndarray) -> list[Point]:
    """Return the outline of a texture of *texture_size* mapped by *projection_matrix*."""
    width = texture_size.width
    height = texture_size.height
    corners = [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]
    return [transform_point(corner, projection_matrix) for corner in corners]


def create_texture_polygon(metrics: CameraMetrics) -> list[Point]:
    """Return the outline of the texture in projected coordinates."""
    return project_texture_outline(metrics.texture_size, metrics.projection_matrix)


def max_cut_factor(start: Point, direction: Point, polygon: Polygon) -> float | None:
    """Return the largest crossing factor of the line through *start*, or ``None``."""
    factors = intersect_line_with_polygon(start, direction, polygon)
    if factors:
        return factors[-1]
    return None


def limit_rect_resize_to_texture(
    prev_rect: Rect,
    wanted_rect: Rect,
    texture_polygon: Polygon,
    min_size: float = MIN_CROP_RECT_SIZE,
) -> Rect:
    """Shrink the move from *prev_rect* to *wanted_rect* so the result stays valid.

    Every corner travels along the straight line from its previous to its
    wanted position.  All corners share one factor: the smallest one at which
    any corner would leave *texture_polygon* or either side would drop below
    *min_size*.  The ``nw`` corner is rounded up and the ``se`` corner down so
    integer snapping can only pull the rect further inside.
    """
    min_factor = 1.0

    if wanted_rect.width < min_size and prev_rect.width != wanted_rect.width:
        factor_x = (prev_rect.width - min_size) / (prev_rect.width - wanted_rect.width)
        min_factor = min(min_factor, factor_x)
    if wanted_rect.height < min_size and prev_rect.height != wanted_rect.height:
        factor_y = (prev_rect.height - min_size) / (prev_rect.height - wanted_rect.height)
        min_factor = min(min_factor, factor_y)

    nw_start: Point = corner_point_of_rect(prev_rect, Corner.NW)
    nw_direction: Point | None = None
    se_start: Point = corner_point_of_rect(prev_rect, Corner.SE)
    se_direction: Point | None = None
    for corner in CORNERS:
        start = corner_point_of_rect(prev_rect, corner)
        end = corner_point_of_rect(wanted_rect, corner)
        direction = direction_of_points(start, end)

        cut_factor = max_cut_factor(start, direction, texture_polygon)
        if cut_factor is not None and cut_factor < min_factor:
            min_factor = cut_factor

        if corner is Corner.NW:
            nw_direction = direction if cut_factor is not None else None
        elif corner is Corner.SE:
            se_direction = direction if cut_factor is not None else None

    min_factor = max(0.0, min_factor)
    if min_factor < 1.0:
        _LOGGER.debug("Resize limited to factor %.4f", min_factor)

    next_nw = ceil_point(move_point(nw_start, nw_direction, min_factor) if nw_direction else nw_start)
    next_se = floor_point(move_point(se_start, se_direction, min_factor) if se_direction else se_start)
    return rect_from_points(next_nw, next_se)


def fit_factor_around_center(center: Point, size: Size, polygon: Polygon) -> float:
    """Return the largest uniform factor ``<= 1`` fitting *size* around *center*.

    Probing the two half diagonals covers all four corners, since the
    crossings behind *center* come back as negative factors.
    """
    half_w = size.width * 0.5
    half_h = size.height * 0.5
    min_factor = 1.0
    for probe in ((half_w, half_h), (half_w, -half_h)):
        for factor in intersect_line_with_polygon(center, probe, polygon):
            min_factor = min(min_factor, abs(factor))
    return min_factor


def rect_inside_polygon(rect: Rect, polygon: Polygon) -> bool:
    """Return ``True`` if all four corners of *rect* lie in the convex *polygon*."""
    return all(point_in_polygon(corner_point_of_rect(rect, corner), polygon) for corner in CORNERS)


def snap_point_into_polygon(
    point: Point, polygon: Polygon, radius: int = SNAP_SEARCH_RADIUS
) -> Point | None:
    """Return the integer point closest to *point* that lies inside *polygon*.

    Rounding to nearest may step just outside a slanted fence edge, so the
    integer grid within *radius* pixels of *point* is searched nearest first.
    Returns ``None`` when no candidate is inside, e.g. for a fence thinner
    than a pixel or a degenerate one.
    """
    rounded = round_point(point)
    if point_in_polygon(rounded, polygon):
        return rounded

    floor_x = math.floor(point[0])
    floor_y = math.floor(point[1])
    offsets = range(-radius, radius + 2)
    candidates = [(float(floor_x + dx), float(floor_y + dy)) for dx in offsets for dy in offsets]
    candidates.sort(key=lambda c: math.hypot(c[0] - point[0], c[1] - point[1]))
    for candidate in candidates:
        if point_in_polygon(candidate, polygon):
            return candidate
    return None


__all__ = [
    "create_texture_polygon",
    "fit_factor_around_center",
    "limit_rect_resize_to_texture",
    "max_cut_factor",
    "project_texture_outline",
    "rect_inside_polygon",
    "snap_point_into_polygon",
]
