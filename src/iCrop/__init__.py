"""Constrained crop-rectangle engine for interactive image cropping."""

from .camera import CameraMetrics, ExifOrientation, create_camera_metrics
from .engine import CropEngine
from .model import EditRecord

__all__ = [
    "CameraMetrics",
    "CropEngine",
    "EditRecord",
    "ExifOrientation",
    "create_camera_metrics",
]
