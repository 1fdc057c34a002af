"""Default configuration values for iCrop."""

from __future__ import annotations

from typing import Final

# Smallest edge length a crop rectangle may have, in projected pixels.  Every
# rect the engine emits keeps both sides at or above this value.
MIN_CROP_RECT_SIZE: Final[int] = 32

# Distance below which a point counts as lying on a polygon edge.
GEOMETRY_EPSILON: Final[float] = 1e-6

# Floating noise tolerated before ``ceil``/``floor`` snap to the next integer.
# Matrix round trips (texture -> projected -> texture) leave errors around
# 1e-12, which must not turn 100.0000000001 into 101.
ROUNDING_EPSILON: Final[float] = 1e-9

# Cross products smaller than this treat a line and an edge as parallel.
PARALLEL_EPSILON: Final[float] = 1e-12

# How many pixels around a fractional point are searched for an integer
# position that keeps a dragged rect inside its fence.
SNAP_SEARCH_RADIUS: Final[int] = 2

# ---------------------------------------------------------------------------
# Reference camera defaults (CLI replay and tests)
# ---------------------------------------------------------------------------

DEFAULT_CANVAS_SIZE: Final[tuple[int, int]] = (1280, 800)
