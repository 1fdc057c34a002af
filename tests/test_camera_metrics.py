"""Tests for the reference camera metrics builders."""

import numpy as np
import pytest

from iCrop.camera import (
    ExifOrientation,
    compute_fit_zoom,
    create_camera_metrics,
    create_projection_matrix,
    neutral_crop_rect,
    oriented_texture_size,
)
from iCrop.engine import CropEngine, create_texture_polygon
from iCrop.geometry import Rect, Size, transform_point
from iCrop.model import EditRecord


def test_quarter_turns_follow_exif_tags():
    assert ExifOrientation.UP.quarter_turns == 0
    assert ExifOrientation.RIGHT.quarter_turns == 1
    assert ExifOrientation.DOWN.quarter_turns == 2
    assert ExifOrientation.LEFT.quarter_turns == 3


def test_oriented_size_swaps_for_sideways_images(texture_size):
    assert oriented_texture_size(texture_size, ExifOrientation.RIGHT) == Size(800.0, 1000.0)
    assert oriented_texture_size(texture_size, ExifOrientation.DOWN) == texture_size
    assert neutral_crop_rect(texture_size, ExifOrientation.LEFT) == Rect(0.0, 0.0, 800.0, 1000.0)


def test_untilted_projection_is_identity(texture_size):
    matrix = create_projection_matrix(texture_size, ExifOrientation.UP, EditRecord())
    assert np.allclose(matrix, np.eye(3))


def test_right_orientation_turns_clockwise(texture_size):
    matrix = create_projection_matrix(texture_size, ExifOrientation.RIGHT, EditRecord())
    assert transform_point((0.0, 0.0), matrix) == pytest.approx((800.0, 0.0))
    assert transform_point((1000.0, 800.0), matrix) == pytest.approx((0.0, 1000.0))


def test_tilt_rotates_about_the_image_centre(texture_size):
    matrix = create_projection_matrix(texture_size, ExifOrientation.UP, EditRecord(tilt=25.0))
    assert transform_point((500.0, 400.0), matrix) == pytest.approx((500.0, 400.0))
    polygon = [transform_point(p, matrix) for p in [(0.0, 0.0), (1000.0, 0.0)]]
    assert polygon[0] != pytest.approx((0.0, 0.0))


def test_metrics_default_to_neutral_crop_and_fit_zoom(texture_size):
    metrics = create_camera_metrics(texture_size)

    assert metrics.crop_rect == Rect(0.0, 0.0, 1000.0, 800.0)
    assert metrics.neutral_crop_rect == metrics.crop_rect
    assert metrics.zoom == pytest.approx(1.0)
    assert np.allclose(metrics.projection_matrix @ metrics.inverted_projection_matrix, np.eye(3))
    assert np.allclose(metrics.camera_matrix @ metrics.inverted_camera_matrix, np.eye(3))


def test_camera_centres_crop_on_canvas(texture_size, cropped_edit):
    metrics = create_camera_metrics(texture_size, cropped_edit, zoom=2.0)

    view_rect = CropEngine.crop_rect_in_view_space(metrics)

    assert view_rect.width == pytest.approx(800.0)
    assert view_rect.height == pytest.approx(600.0)
    assert view_rect.x + view_rect.width / 2 == pytest.approx(640.0)
    assert view_rect.y + view_rect.height / 2 == pytest.approx(400.0)


def test_compute_fit_zoom():
    assert compute_fit_zoom(Size(1280.0, 800.0), Rect(0.0, 0.0, 2000.0, 1000.0)) == pytest.approx(0.64)
    assert compute_fit_zoom(Size(1280.0, 800.0), Rect(0.0, 0.0, 0.0, 10.0)) == 1.0


def test_custom_projection_factory_is_used(texture_size):
    calls = []

    def factory(size, orientation, edit):
        calls.append((size, orientation, edit))
        return np.eye(3)

    metrics = create_camera_metrics(
        texture_size, EditRecord(tilt=5.0), projection_factory=factory
    )

    assert len(calls) == 1
    assert create_texture_polygon(metrics) == [
        (0.0, 0.0),
        (1000.0, 0.0),
        (1000.0, 800.0),
        (0.0, 800.0),
    ]
