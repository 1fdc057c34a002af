"""Pure 2D geometry helpers used by the crop constraint engine.

Points are plain ``(x, y)`` tuples and polygons are sequences of points whose
last vertex connects back to the first.  Matrices are 3x3 homogeneous
``numpy`` arrays mapping column vectors ``(x, y, 1)``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from ..config import GEOMETRY_EPSILON, PARALLEL_EPSILON, ROUNDING_EPSILON
from .types import Corner, Point, Polygon, Rect, Size


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


# ---------------------------------------------------------------------------
# Rect construction
# ---------------------------------------------------------------------------


def rect_from_points(a: Point, b: Point) -> Rect:
    """Return the normalised rect spanned by two opposite corner points."""
    x = min(a[0], b[0])
    y = min(a[1], b[1])
    return Rect(x, y, abs(b[0] - a[0]), abs(b[1] - a[1]))


def rect_from_corner_point_and_size(point: Point, size: Size) -> Rect:
    """Return the rect with one corner at *point* extending by the signed *size*.

    A negative width extends the rect to the left of *point*, a negative height
    extends it upwards.  The result always has a positive size.
    """
    return rect_from_points(point, (point[0] + size.width, point[1] + size.height))


def rect_from_center_and_size(center: Point, size: Size) -> Rect:
    return Rect(
        center[0] - size.width * 0.5,
        center[1] - size.height * 0.5,
        size.width,
        size.height,
    )


def corner_point_of_rect(rect: Rect, corner: Corner) -> Point:
    if corner is Corner.NW:
        return (rect.x, rect.y)
    if corner is Corner.NE:
        return (rect.x + rect.width, rect.y)
    if corner is Corner.SE:
        return (rect.x + rect.width, rect.y + rect.height)
    return (rect.x, rect.y + rect.height)


def center_of_rect(rect: Rect) -> Point:
    return (rect.x + rect.width * 0.5, rect.y + rect.height * 0.5)


def scale_size(size: Size, factor: float) -> Size:
    return Size(size.width * factor, size.height * factor)


def is_rect_equal(a: Rect | None, b: Rect | None) -> bool:
    """Compare two rects field by field (no tolerance)."""
    if a is None or b is None:
        return a is b
    return a.x == b.x and a.y == b.y and a.width == b.width and a.height == b.height


# ---------------------------------------------------------------------------
# Vector helpers
# ---------------------------------------------------------------------------


def direction_of_points(start: Point, end: Point) -> Point:
    return (end[0] - start[0], end[1] - start[1])


def move_point(point: Point, direction: Point, factor: float) -> Point:
    return (point[0] + direction[0] * factor, point[1] + direction[1] * factor)


def round_value(value: float) -> float:
    """Round half-up, the way pixel snapping behaves on screen."""
    return float(math.floor(value + 0.5))


def round_point(point: Point) -> Point:
    return (round_value(point[0]), round_value(point[1]))


def ceil_point(point: Point) -> Point:
    return (
        float(math.ceil(point[0] - ROUNDING_EPSILON)),
        float(math.ceil(point[1] - ROUNDING_EPSILON)),
    )


def floor_point(point: Point) -> Point:
    return (
        float(math.floor(point[0] + ROUNDING_EPSILON)),
        float(math.floor(point[1] + ROUNDING_EPSILON)),
    )


def round_rect(rect: Rect) -> Rect:
    return Rect(
        round_value(rect.x),
        round_value(rect.y),
        round_value(rect.width),
        round_value(rect.height),
    )


def round_rect_inward(rect: Rect) -> Rect:
    """Snap *rect* to integers without letting any edge move outwards."""
    return rect_from_points(
        ceil_point((rect.x, rect.y)),
        floor_point((rect.x + rect.width, rect.y + rect.height)),
    )


# ---------------------------------------------------------------------------
# Matrix transforms
# ---------------------------------------------------------------------------


def transform_point(point: Point, matrix: np.ndarray) -> Point:
    """Apply the homogeneous 3x3 *matrix* to *point*."""
    vec = matrix @ np.array([point[0], point[1], 1.0], dtype=np.float64)
    w = float(vec[2])
    if w != 1.0 and abs(w) > PARALLEL_EPSILON:
        return (float(vec[0]) / w, float(vec[1]) / w)
    return (float(vec[0]), float(vec[1]))


def transform_rect(rect: Rect, matrix: np.ndarray) -> Rect:
    """Transform the rect's ``nw`` and ``se`` corners and span a new rect.

    Only meaningful for matrices that keep axes aligned (scale, translate and
    quarter turns), such as the camera matrix.
    """
    return rect_from_points(
        transform_point(corner_point_of_rect(rect, Corner.NW), matrix),
        transform_point(corner_point_of_rect(rect, Corner.SE), matrix),
    )


# ---------------------------------------------------------------------------
# Polygon queries
# ---------------------------------------------------------------------------


def polygon_signed_area(polygon: Polygon) -> float:
    """Return the shoelace area; positive for clockwise order in y-down space."""
    area = 0.0
    count = len(polygon)
    for i in range(count):
        ax, ay = polygon[i]
        bx, by = polygon[(i + 1) % count]
        area += _cross(ax, ay, bx, by)
    return area * 0.5


def _nearest_point_on_segment(point: Point, a: Point, b: Point) -> Point:
    rx = b[0] - a[0]
    ry = b[1] - a[1]
    length_sq = rx * rx + ry * ry
    if length_sq <= 0.0:
        return (float(a[0]), float(a[1]))
    t = ((point[0] - a[0]) * rx + (point[1] - a[1]) * ry) / length_sq
    t = max(0.0, min(1.0, t))
    return (a[0] + rx * t, a[1] + ry * t)


def nearest_point_on_polygon(point: Point, polygon: Polygon) -> Point:
    """Return the point on the outline of *polygon* closest to *point*."""
    if len(polygon) == 1:
        return (float(polygon[0][0]), float(polygon[0][1]))

    best: Point = (float(point[0]), float(point[1]))
    best_dist_sq = math.inf
    count = len(polygon)
    for i in range(count):
        candidate = _nearest_point_on_segment(point, polygon[i], polygon[(i + 1) % count])
        dx = candidate[0] - point[0]
        dy = candidate[1] - point[1]
        dist_sq = dx * dx + dy * dy
        if dist_sq < best_dist_sq:
            best_dist_sq = dist_sq
            best = candidate
    return best


def point_in_polygon(point: Point, polygon: Polygon) -> bool:
    """Return ``True`` if *point* lies inside *polygon* or on its outline."""
    count = len(polygon)
    if count < 3:
        return False

    px, py = point
    for i in range(count):
        nx, ny = _nearest_point_on_segment(point, polygon[i], polygon[(i + 1) % count])
        if math.hypot(nx - px, ny - py) <= GEOMETRY_EPSILON:
            return True

    inside = False
    j = count - 1
    for i in range(count):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > py) != (yj > py):
            x_cross = xi + (py - yi) * (xj - xi) / (yj - yi)
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def intersect_line_with_polygon(
    origin: Point, direction: Point, polygon: Polygon
) -> list[float]:
    """Return every factor ``t`` where ``origin + t * direction`` crosses an edge.

    The factors are sorted ascending and may be negative (crossings behind
    *origin*).  A zero *direction* or a polygon whose edges are all parallel to
    the line yields an empty list.
    """
    dx, dy = direction
    dir_length = math.hypot(dx, dy)
    if dir_length <= 0.0:
        return []

    factors: list[float] = []
    count = len(polygon)
    for i in range(count):
        ax, ay = polygon[i]
        bx, by = polygon[(i + 1) % count]
        rx = bx - ax
        ry = by - ay
        denom = _cross(dx, dy, rx, ry)
        if abs(denom) <= PARALLEL_EPSILON * dir_length * math.hypot(rx, ry):
            continue
        diff_x = ax - origin[0]
        diff_y = ay - origin[1]
        u = _cross(diff_x, diff_y, dx, dy) / denom
        if u < -GEOMETRY_EPSILON or u > 1.0 + GEOMETRY_EPSILON:
            continue
        factors.append(_cross(diff_x, diff_y, rx, ry) / denom)
    factors.sort()
    return factors


def polygon_from_points(points: Sequence[Sequence[float]]) -> list[Point]:
    """Coerce any sequence of pairs (lists, arrays) into a list of point tuples."""
    return [(float(p[0]), float(p[1])) for p in points]
