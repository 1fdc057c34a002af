"""Fence polygons bounding where a rectangle may be dragged.

The fence of a rect inside a convex bounding polygon is the region its
top-left corner may occupy while the whole rect stays inside the polygon.
Because both shapes are convex, the rect is inside exactly when its four
corners are, so the fence is the intersection of the bounding polygon shifted
back by each corner offset.
"""

from __future__ import annotations

import logging
import math

from ..config import GEOMETRY_EPSILON
from .types import Point, Polygon, Rect
from .util import polygon_from_points, polygon_signed_area

_LOGGER = logging.getLogger(__name__)


def _side_value(a: Point, b: Point, p: Point) -> float:
    return (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])


def _clip_against_edge(
    subject: list[Point], a: Point, b: Point, orientation: float
) -> list[Point]:
    """Keep the part of *subject* lying on the inner side of edge ``a -> b``."""
    if not subject:
        return []
    tolerance = GEOMETRY_EPSILON * max(1.0, math.hypot(b[0] - a[0], b[1] - a[1]))
    result: list[Point] = []
    count = len(subject)
    for i in range(count):
        start = subject[i - 1] if count > 1 else subject[i]
        end = subject[i]
        start_value = orientation * _side_value(a, b, start)
        end_value = orientation * _side_value(a, b, end)
        start_inside = start_value >= -tolerance
        end_inside = end_value >= -tolerance
        if end_inside:
            if not start_inside:
                result.append(_edge_crossing(start, end, start_value, end_value))
            result.append(end)
        elif start_inside:
            result.append(_edge_crossing(start, end, start_value, end_value))
    return result


def _edge_crossing(start: Point, end: Point, start_value: float, end_value: float) -> Point:
    denom = start_value - end_value
    if denom == 0.0:
        return start
    t = start_value / denom
    return (start[0] + (end[0] - start[0]) * t, start[1] + (end[1] - start[1]) * t)


def _dedupe(points: list[Point]) -> list[Point]:
    unique: list[Point] = []
    for point in points:
        if unique and math.hypot(point[0] - unique[-1][0], point[1] - unique[-1][1]) <= GEOMETRY_EPSILON:
            continue
        unique.append(point)
    while (
        len(unique) > 1
        and math.hypot(unique[0][0] - unique[-1][0], unique[0][1] - unique[-1][1]) <= GEOMETRY_EPSILON
    ):
        unique.pop()
    return unique


def clip_convex_polygon(subject: Polygon, clip: Polygon) -> list[Point]:
    """Return the intersection of *subject* with the convex *clip* polygon."""
    orientation = 1.0 if polygon_signed_area(clip) >= 0.0 else -1.0
    result = polygon_from_points(subject)
    count = len(clip)
    for i in range(count):
        result = _clip_against_edge(result, clip[i], clip[(i + 1) % count], orientation)
        if not result:
            break
    return _dedupe(result)


def build_fence_polygon(rect: Rect, texture_polygon: Polygon) -> list[Point]:
    """Return the region where *rect*'s top-left corner keeps it inside the polygon.

    Parameters
    ----------
    rect:
        The rectangle being dragged.  Only its size matters for the shape of
        the fence; its position is the fallback when nothing fits.
    texture_polygon:
        Convex bounding polygon in the same coordinate space as *rect*.

    Returns
    -------
    list[tuple[float, float]]
        The fence outline.  When the rect is as large as the polygon allows in
        some direction the fence collapses to a segment or a single point; when
        the rect cannot fit at all it is the rect's own top-left corner, which
        pins the rect in place.
    """
    base = polygon_from_points(texture_polygon)
    fence = base
    for offset_x, offset_y in (
        (rect.width, 0.0),
        (rect.width, rect.height),
        (0.0, rect.height),
    ):
        shifted = [(x - offset_x, y - offset_y) for x, y in base]
        fence = clip_convex_polygon(fence, shifted)
        if not fence:
            break

    if not fence:
        _LOGGER.debug("Rect %s does not fit the texture; pinning fence to its corner", rect)
        return [(float(rect.x), float(rect.y))]
    return fence


__all__ = ["build_fence_polygon", "clip_convex_polygon"]
