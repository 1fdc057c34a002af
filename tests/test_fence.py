"""Tests for the fence polygon builder."""

import numpy as np
import pytest

from iCrop.engine import create_texture_polygon
from iCrop.geometry import (
    CORNERS,
    Rect,
    build_fence_polygon,
    clip_convex_polygon,
    corner_point_of_rect,
    point_in_polygon,
    polygon_signed_area,
)
from iCrop.model import EditRecord

TEXTURE = [(0.0, 0.0), (1000.0, 0.0), (1000.0, 800.0), (0.0, 800.0)]


def test_clip_convex_polygon_overlap():
    a = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    b = [(5.0, 5.0), (15.0, 5.0), (15.0, 15.0), (5.0, 15.0)]
    clipped = clip_convex_polygon(a, b)
    assert abs(polygon_signed_area(clipped)) == pytest.approx(25.0)
    for point in clipped:
        assert 5.0 - 1e-9 <= point[0] <= 10.0 + 1e-9
        assert 5.0 - 1e-9 <= point[1] <= 10.0 + 1e-9


def test_clip_convex_polygon_disjoint_is_empty():
    a = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    b = [(5.0, 5.0), (6.0, 5.0), (6.0, 6.0), (5.0, 6.0)]
    assert clip_convex_polygon(a, b) == []


def test_fence_of_axis_aligned_texture():
    """The top-left corner of a 400x300 rect may roam over [0, 600] x [0, 500]."""
    fence = build_fence_polygon(Rect(100.0, 100.0, 400.0, 300.0), TEXTURE)

    assert abs(polygon_signed_area(fence)) == pytest.approx(600.0 * 500.0)
    for point in [(0.0, 0.0), (600.0, 0.0), (600.0, 500.0), (0.0, 500.0), (300.0, 250.0)]:
        assert point_in_polygon(point, fence)
    for point in [(601.0, 0.0), (0.0, 501.0), (-1.0, 10.0)]:
        assert not point_in_polygon(point, fence)


def test_fence_accepts_array_outlines():
    outline = np.array([[0, 0], [1000, 0], [1000, 800], [0, 800]])

    fence = build_fence_polygon(Rect(100.0, 100.0, 400.0, 300.0), outline)

    assert all(isinstance(value, float) for point in fence for value in point)
    assert abs(polygon_signed_area(fence)) == pytest.approx(600.0 * 500.0)


def test_fence_of_full_size_rect_collapses_to_origin():
    fence = build_fence_polygon(Rect(0.0, 0.0, 1000.0, 800.0), TEXTURE)
    assert fence
    for x, y in fence:
        assert x == pytest.approx(0.0, abs=1e-6)
        assert y == pytest.approx(0.0, abs=1e-6)


def test_fence_of_oversized_rect_pins_current_corner():
    fence = build_fence_polygon(Rect(12.0, 34.0, 1200.0, 300.0), TEXTURE)
    assert fence == [(12.0, 34.0)]


def test_fence_of_tilted_texture_keeps_rect_inside(make_metrics):
    metrics = make_metrics(EditRecord(tilt=12.0))
    texture_polygon = create_texture_polygon(metrics)
    rect = Rect(300.0, 250.0, 300.0, 200.0)

    fence = build_fence_polygon(rect, texture_polygon)

    assert len(fence) >= 3
    for x, y in fence:
        placed = Rect(x, y, rect.width, rect.height)
        for corner in CORNERS:
            assert point_in_polygon(corner_point_of_rect(placed, corner), texture_polygon)
