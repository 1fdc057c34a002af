"""Tests for side and corner resizing."""

import pytest

from iCrop.config import MIN_CROP_RECT_SIZE
from iCrop.engine import (
    IDLE,
    DraggingState,
    ResizeCornerEvent,
    ResizeSideEvent,
    limit_rect_resize_to_texture,
    max_cut_factor,
    resize_corner,
    resize_side,
)
from iCrop.geometry import Corner, Rect, Side, Size
from iCrop.model import EditRecord

TEXTURE = [(0.0, 0.0), (1000.0, 0.0), (1000.0, 800.0), (0.0, 800.0)]


@pytest.fixture
def side_drag(make_metrics, to_view):
    """Drag *side* of *edit* to a projected-space point."""

    def _drag(edit, side, point, state=IDLE):
        metrics = make_metrics(edit)
        event = ResizeSideEvent(side, to_view(point, metrics))
        return resize_side(state, event, metrics, edit)

    return _drag


@pytest.fixture
def corner_drag(make_metrics, to_view):
    """Drag *corner* of *edit* to a projected-space point."""

    def _drag(edit, corner, point, state=IDLE):
        metrics = make_metrics(edit)
        event = ResizeCornerEvent(corner, to_view(point, metrics))
        return resize_corner(state, event, metrics, edit)

    return _drag


# ---------------------------------------------------------------------------
# limit_rect_resize_to_texture
# ---------------------------------------------------------------------------


def test_max_cut_factor():
    assert max_cut_factor((500.0, 100.0), (1500.0, 0.0), TEXTURE) == pytest.approx(1.0 / 3.0)
    assert max_cut_factor((500.0, 100.0), (0.0, 0.0), TEXTURE) is None


def test_limit_keeps_resize_inside_texture():
    prev = Rect(100.0, 100.0, 400.0, 300.0)
    wanted = Rect(100.0, 100.0, 1900.0, 300.0)

    assert limit_rect_resize_to_texture(prev, wanted, TEXTURE) == Rect(100.0, 100.0, 900.0, 300.0)


def test_limit_applies_size_floor():
    prev = Rect(0.0, 0.0, 100.0, 100.0)
    wanted = Rect(0.0, 0.0, 10.0, 100.0)

    result = limit_rect_resize_to_texture(prev, wanted, TEXTURE)

    assert result == Rect(0.0, 0.0, 32.0, 100.0)


def test_limit_treats_zero_cut_factor_as_blocked():
    """A corner already on the texture edge cannot move any further out."""
    prev = Rect(0.0, 0.0, 1000.0, 800.0)
    wanted = Rect(0.0, 0.0, 1200.0, 800.0)

    assert limit_rect_resize_to_texture(prev, wanted, TEXTURE) == prev


def test_limit_allows_moves_inside():
    prev = Rect(100.0, 100.0, 400.0, 300.0)
    wanted = Rect(150.0, 120.0, 300.0, 200.0)

    assert limit_rect_resize_to_texture(prev, wanted, TEXTURE) == wanted


# ---------------------------------------------------------------------------
# resize_side
# ---------------------------------------------------------------------------


def test_side_drag_moves_only_that_edge(side_drag, cropped_edit):
    result = side_drag(cropped_edit, Side.S, (0.0, 500.0))

    assert result.state is IDLE
    assert result.edit.crop_rect == Rect(100.0, 100.0, 400.0, 400.0)


def test_side_drag_stops_at_texture_edge(side_drag, cropped_edit):
    assert side_drag(cropped_edit, Side.E, (2000.0, 0.0)).edit.crop_rect == Rect(
        100.0, 100.0, 900.0, 300.0
    )
    assert side_drag(cropped_edit, Side.N, (0.0, -200.0)).edit.crop_rect == Rect(
        100.0, 0.0, 400.0, 400.0
    )


def test_side_drag_past_opposite_edge_keeps_minimum(side_drag, cropped_edit):
    result = side_drag(cropped_edit, Side.W, (600.0, 0.0))

    assert result.edit.crop_rect == Rect(468.0, 100.0, 32.0, 300.0)


def test_side_drag_accepts_handle_names(side_drag, cropped_edit):
    result = side_drag(cropped_edit, "e", (700.0, 0.0))
    assert result.edit.crop_rect == Rect(100.0, 100.0, 600.0, 300.0)


def test_side_drag_of_full_crop_outwards_stays_neutral(side_drag):
    result = side_drag(EditRecord(), Side.E, (1200.0, 400.0))
    assert result.edit.crop_rect is None


def test_side_drag_ends_any_gesture(side_drag, cropped_edit):
    dragging = DraggingState(start_rect=cropped_edit.crop_rect, fence_polygon=((0.0, 0.0),))
    assert side_drag(cropped_edit, Side.E, (600.0, 0.0), state=dragging).state is IDLE


def test_side_drag_on_tilted_texture_stays_inside(
    make_metrics, side_drag, assert_inside_texture
):
    edit = EditRecord(crop_rect=Rect(300.0, 250.0, 400.0, 300.0), tilt=15.0)
    for side, point in [
        (Side.E, (2000.0, 0.0)),
        (Side.W, (-2000.0, 0.0)),
        (Side.N, (0.0, -2000.0)),
        (Side.S, (0.0, 2000.0)),
    ]:
        rect = side_drag(edit, side, point).edit.crop_rect
        assert rect.width >= MIN_CROP_RECT_SIZE and rect.height >= MIN_CROP_RECT_SIZE
        assert_inside_texture(rect, make_metrics(edit))


# ---------------------------------------------------------------------------
# resize_corner
# ---------------------------------------------------------------------------


def test_corner_drag_far_outside_clamps_to_texture(corner_drag, cropped_edit):
    result = corner_drag(cropped_edit, Corner.SE, (4660.0, 4850.0))

    rect = result.edit.crop_rect
    assert result.state is IDLE
    assert rect == Rect(100.0, 100.0, 900.0, 700.0)
    assert (rect.right, rect.bottom) == (1000.0, 800.0)


def test_corner_drag_inside_texture(corner_drag, cropped_edit):
    result = corner_drag(cropped_edit, Corner.NW, (50.0, 60.0))
    assert result.edit.crop_rect == Rect(50.0, 60.0, 450.0, 340.0)


def test_corner_drag_truncates_fractional_sizes(corner_drag, cropped_edit):
    result = corner_drag(cropped_edit, Corner.SE, (620.7, 480.2))
    assert result.edit.crop_rect == Rect(100.0, 100.0, 520.0, 380.0)


@pytest.mark.parametrize(
    "corner, point, expected",
    [
        (Corner.NW, (600.0, 500.0), Rect(468.0, 368.0, 32.0, 32.0)),
        (Corner.SE, (0.0, 0.0), Rect(100.0, 100.0, 32.0, 32.0)),
        (Corner.NE, (0.0, 500.0), Rect(100.0, 368.0, 32.0, 32.0)),
        (Corner.SW, (600.0, 0.0), Rect(468.0, 100.0, 32.0, 32.0)),
    ],
)
def test_corner_drag_past_opposite_corner_keeps_minimum(
    corner_drag, cropped_edit, corner, point, expected
):
    assert corner_drag(cropped_edit, corner, point).edit.crop_rect == expected


def test_corner_drag_back_to_neutral_clears_crop(corner_drag):
    edit = EditRecord(crop_rect=Rect(0.0, 0.0, 500.0, 400.0))
    assert corner_drag(edit, Corner.SE, (1000.0, 800.0)).edit.crop_rect is None


def test_corner_drag_keeps_opposite_corner_fixed(corner_drag, cropped_edit):
    rect = corner_drag(cropped_edit, Corner.NE, (800.0, 20.0)).edit.crop_rect
    assert (rect.x, rect.bottom) == (100.0, 400.0)
    assert rect.size == Size(700.0, 380.0)


def test_corner_drag_past_opposite_corner_on_tilted_texture_stays_inside(
    make_metrics, corner_drag, assert_inside_texture
):
    """Flipping to the minimum width moves the dragged corner to an unchecked column."""
    edit = EditRecord(crop_rect=Rect(989.0, 732.0, 32.0, 32.0), tilt=-3.81)
    assert_inside_texture(edit.crop_rect, make_metrics(edit))

    rect = corner_drag(edit, Corner.NE, (712.8, -490.2)).edit.crop_rect

    assert rect.width >= MIN_CROP_RECT_SIZE and rect.height >= MIN_CROP_RECT_SIZE
    assert (rect.x, rect.bottom) == (989.0, 764.0)
    assert_inside_texture(rect, make_metrics(edit))


def test_corner_drag_on_tilted_texture_stays_inside(make_metrics, corner_drag, assert_inside_texture):
    edit = EditRecord(crop_rect=Rect(450.0, 350.0, 100.0, 100.0), tilt=12.0)
    for corner in (Corner.NW, Corner.NE, Corner.SE, Corner.SW):
        for point in [(-800.0, -600.0), (1800.0, -600.0), (1800.0, 1400.0), (-800.0, 1400.0), (500.0, 400.0)]:
            rect = corner_drag(edit, corner, point).edit.crop_rect
            assert rect.width >= MIN_CROP_RECT_SIZE and rect.height >= MIN_CROP_RECT_SIZE
            assert_inside_texture(rect, make_metrics(edit))
