import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iCrop.camera import create_camera_metrics  # noqa: E402
from iCrop.engine import CropEngine, create_texture_polygon  # noqa: E402
from iCrop.geometry import (  # noqa: E402
    CORNERS,
    Rect,
    Size,
    corner_point_of_rect,
    point_in_polygon,
    transform_point,
)
from iCrop.model import EditRecord  # noqa: E402


@pytest.fixture
def texture_size():
    """The 1000x800 texture used across the engine tests."""
    return Size(1000.0, 800.0)


@pytest.fixture
def make_metrics(texture_size):
    """Build reference metrics for an edit of the shared texture at zoom 1."""

    def _make(edit=None, *, zoom=1.0, **kwargs):
        return create_camera_metrics(texture_size, edit or EditRecord(), zoom=zoom, **kwargs)

    return _make


@pytest.fixture
def cropped_edit():
    """Edit with a crop well inside the texture."""
    return EditRecord(crop_rect=Rect(100.0, 100.0, 400.0, 300.0))


@pytest.fixture
def engine():
    return CropEngine()


@pytest.fixture
def to_view():
    """Map a projected-space point to canvas pixels, as a pointer event would arrive."""

    def _to_view(point, metrics):
        return transform_point(point, metrics.camera_matrix)

    return _to_view


@pytest.fixture
def assert_inside_texture():
    """Check every corner of a rect against the metrics' texture polygon."""

    def _check(rect, metrics):
        polygon = create_texture_polygon(metrics)
        for corner in CORNERS:
            point = corner_point_of_rect(rect, corner)
            assert point_in_polygon(point, polygon), f"{corner.value} corner {point} outside"

    return _check
