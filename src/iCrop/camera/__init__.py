"""Camera metrics and the reference matrix builders."""

from .metrics import (
    CameraMetrics,
    ExifOrientation,
    ProjectionFactory,
    compute_fit_zoom,
    create_camera_matrix,
    create_camera_metrics,
    create_projection_matrix,
    neutral_crop_rect,
    oriented_texture_size,
)

__all__ = [
    "CameraMetrics",
    "ExifOrientation",
    "ProjectionFactory",
    "compute_fit_zoom",
    "create_camera_matrix",
    "create_camera_metrics",
    "create_projection_matrix",
    "neutral_crop_rect",
    "oriented_texture_size",
]
