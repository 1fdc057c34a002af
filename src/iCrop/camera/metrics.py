"""Camera metrics consumed by the crop engine.

Three coordinate spaces are involved:

**Texture space**: pixels of the stored image, origin at its top-left corner.

**Projected space**: the image after EXIF orientation and tilt have been
applied, rotated about its centre.  With no tilt the oriented image covers
``(0, 0, width, height)``, which is the *neutral crop rect*.  Crop rects are
expressed in this space.

**View space**: canvas pixels.  The camera centres the crop rect on the canvas
and scales it by ``zoom``.

The engine only reads these metrics.  The builders below are the reference
way to produce them; a host with its own renderer may supply matrices built
any other way as long as they follow the same conventions.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from ..config import DEFAULT_CANVAS_SIZE
from ..geometry import Rect, Size, center_of_rect
from ..model import EditRecord


class ExifOrientation(enum.IntEnum):
    """EXIF orientation tags supported by the projection."""

    UP = 1
    DOWN = 3
    RIGHT = 6
    LEFT = 8

    @property
    def quarter_turns(self) -> int:
        """Number of clockwise quarter turns needed to display the image upright."""
        return {
            ExifOrientation.UP: 0,
            ExifOrientation.RIGHT: 1,
            ExifOrientation.DOWN: 2,
            ExifOrientation.LEFT: 3,
        }[self]


ProjectionFactory = Callable[[Size, ExifOrientation, EditRecord], np.ndarray]

# Exact (cos, sin) pairs for quarter turns; math.cos(math.pi / 2) is not zero.
_QUARTER_TURN_ROTATION: dict[int, tuple[float, float]] = {
    0: (1.0, 0.0),
    1: (0.0, 1.0),
    2: (-1.0, 0.0),
    3: (0.0, -1.0),
}


def _translation(tx: float, ty: float) -> np.ndarray:
    return np.array(
        [
            [1.0, 0.0, tx],
            [0.0, 1.0, ty],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def _rotation(cos_a: float, sin_a: float) -> np.ndarray:
    # Clockwise on screen, since the y axis points down.
    return np.array(
        [
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def _scale(factor: float) -> np.ndarray:
    return np.array(
        [
            [factor, 0.0, 0.0],
            [0.0, factor, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def oriented_texture_size(texture_size: Size, exif_orientation: ExifOrientation) -> Size:
    """Return the texture size after applying the EXIF orientation."""
    if exif_orientation.quarter_turns % 2:
        return Size(texture_size.height, texture_size.width)
    return Size(texture_size.width, texture_size.height)


def neutral_crop_rect(texture_size: Size, exif_orientation: ExifOrientation) -> Rect:
    """Return the crop rect covering the whole oriented, untilted image."""
    size = oriented_texture_size(texture_size, exif_orientation)
    return Rect(0.0, 0.0, size.width, size.height)


def create_projection_matrix(
    texture_size: Size, exif_orientation: ExifOrientation, edit: EditRecord
) -> np.ndarray:
    """Return the matrix mapping texture space to projected space.

    The texture is rotated about its centre by the orientation's quarter
    turns plus ``edit.tilt`` degrees, then moved so the untilted oriented image
    starts at the origin.
    """
    oriented = oriented_texture_size(texture_size, exif_orientation)
    quarter = _rotation(*_QUARTER_TURN_ROTATION[exif_orientation.quarter_turns])
    tilt_radians = math.radians(edit.tilt_degrees)
    tilt = _rotation(math.cos(tilt_radians), math.sin(tilt_radians))
    return (
        _translation(oriented.width * 0.5, oriented.height * 0.5)
        @ tilt
        @ quarter
        @ _translation(-texture_size.width * 0.5, -texture_size.height * 0.5)
    )


def create_camera_matrix(canvas_size: Size, crop_rect: Rect, zoom: float) -> np.ndarray:
    """Return the matrix mapping projected space to view space."""
    center_x, center_y = center_of_rect(crop_rect)
    return (
        _translation(canvas_size.width * 0.5, canvas_size.height * 0.5)
        @ _scale(zoom)
        @ _translation(-center_x, -center_y)
    )


def compute_fit_zoom(canvas_size: Size, crop_rect: Rect) -> float:
    """Return the zoom that fits *crop_rect* into the canvas."""
    if crop_rect.width <= 0 or crop_rect.height <= 0:
        return 1.0
    return min(canvas_size.width / crop_rect.width, canvas_size.height / crop_rect.height)


@dataclass(frozen=True, eq=False)
class CameraMetrics:
    """Read-only snapshot of the camera used while processing one gesture event."""

    texture_size: Size
    projection_matrix: np.ndarray
    camera_matrix: np.ndarray
    crop_rect: Rect
    neutral_crop_rect: Rect
    zoom: float
    canvas_size: Size
    exif_orientation: ExifOrientation = ExifOrientation.UP
    inverted_projection_matrix: np.ndarray = field(default=None)  # type: ignore[assignment]
    inverted_camera_matrix: np.ndarray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.inverted_projection_matrix is None:
            object.__setattr__(
                self, "inverted_projection_matrix", np.linalg.inv(self.projection_matrix)
            )
        if self.inverted_camera_matrix is None:
            object.__setattr__(self, "inverted_camera_matrix", np.linalg.inv(self.camera_matrix))


def create_camera_metrics(
    texture_size: Size,
    edit: EditRecord | None = None,
    *,
    exif_orientation: ExifOrientation = ExifOrientation.UP,
    canvas_size: Size | None = None,
    zoom: float | None = None,
    projection_factory: ProjectionFactory = create_projection_matrix,
) -> CameraMetrics:
    """Build reference camera metrics for *edit* of a texture.

    Parameters
    ----------
    texture_size:
        Size of the stored image in pixels.
    edit:
        Current edits; the crop rect defaults to the neutral rect.
    exif_orientation:
        Orientation tag of the image.
    canvas_size:
        Size of the drawing area, defaults to :data:`DEFAULT_CANVAS_SIZE`.
    zoom:
        View scale; ``None`` fits the crop rect into the canvas.
    projection_factory:
        Builder for the texture -> projected matrix.
    """
    edit = edit or EditRecord()
    if canvas_size is None:
        canvas_size = Size(*DEFAULT_CANVAS_SIZE)
    neutral = neutral_crop_rect(texture_size, exif_orientation)
    crop_rect = edit.crop_rect if edit.crop_rect is not None else neutral
    if zoom is None:
        zoom = compute_fit_zoom(canvas_size, crop_rect)
    return CameraMetrics(
        texture_size=texture_size,
        projection_matrix=projection_factory(texture_size, exif_orientation, edit),
        camera_matrix=create_camera_matrix(canvas_size, crop_rect, zoom),
        crop_rect=crop_rect,
        neutral_crop_rect=neutral,
        zoom=float(zoom),
        canvas_size=canvas_size,
        exif_orientation=exif_orientation,
    )
