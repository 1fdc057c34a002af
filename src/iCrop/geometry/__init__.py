"""Geometry primitives and fence construction for crop constraints."""

from .fence import build_fence_polygon, clip_convex_polygon
from .types import CORNERS, OPPOSITE_CORNER, Corner, Point, Polygon, Rect, Side, Size
from .util import (
    ceil_point,
    center_of_rect,
    corner_point_of_rect,
    direction_of_points,
    floor_point,
    intersect_line_with_polygon,
    is_rect_equal,
    move_point,
    nearest_point_on_polygon,
    point_in_polygon,
    polygon_from_points,
    polygon_signed_area,
    rect_from_center_and_size,
    rect_from_corner_point_and_size,
    rect_from_points,
    round_point,
    round_rect,
    round_rect_inward,
    round_value,
    scale_size,
    transform_point,
    transform_rect,
)

__all__ = [
    "CORNERS",
    "Corner",
    "OPPOSITE_CORNER",
    "Point",
    "Polygon",
    "Rect",
    "Side",
    "Size",
    "build_fence_polygon",
    "ceil_point",
    "center_of_rect",
    "clip_convex_polygon",
    "corner_point_of_rect",
    "direction_of_points",
    "floor_point",
    "intersect_line_with_polygon",
    "is_rect_equal",
    "move_point",
    "nearest_point_on_polygon",
    "point_in_polygon",
    "polygon_from_points",
    "polygon_signed_area",
    "rect_from_center_and_size",
    "rect_from_corner_point_and_size",
    "rect_from_points",
    "round_point",
    "round_rect",
    "round_rect_inward",
    "round_value",
    "scale_size",
    "transform_point",
    "transform_rect",
]
