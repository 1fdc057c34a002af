"""
Crop engine (stateful coordinator).

This module owns the single action-state slot and routes gesture events to
the pure operations, publishing every resulting edit record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..camera import CameraMetrics, ProjectionFactory, create_projection_matrix
from ..geometry import Corner, Point, Rect, Side, transform_rect
from ..model import EditRecord
from ..utils import Signal
from .events import GestureEvent, ResizeCornerEvent, ResizeSideEvent, TiltEvent, TranslateEvent
from .operations import apply_event
from .state import IDLE, ActionState, IdleState

_LOGGER = logging.getLogger(__name__)


class CropEngine:
    """Long-lived crop constraint engine driven one gesture event at a time."""

    def __init__(
        self,
        *,
        projection_factory: ProjectionFactory = create_projection_matrix,
        on_edited: Callable[[EditRecord], None] | None = None,
    ) -> None:
        """Initialize the crop engine.

        Parameters
        ----------
        projection_factory:
            Builder for the texture -> projected matrix, used when a tilt event
            needs the projection of a candidate tilt.
        on_edited:
            Optional handler connected to :attr:`edited` right away.
        """
        self._projection_factory = projection_factory
        self._state: ActionState = IDLE
        self.edited: Signal[EditRecord] = Signal("edited")
        if on_edited is not None:
            self.edited.connect(on_edited)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def state(self) -> ActionState:
        """Return the cached action state of the gesture in progress."""
        return self._state

    def reset(self) -> None:
        """Drop any cached gesture state, e.g. when crop mode is left."""
        if not isinstance(self._state, IdleState):
            _LOGGER.debug("Resetting action state %s", type(self._state).__name__)
        self._state = IDLE

    def handle_event(
        self, event: GestureEvent, metrics: CameraMetrics, edit: EditRecord
    ) -> EditRecord:
        """Process *event* and emit the updated edit record."""
        result = apply_event(self._state, event, metrics, edit, self._projection_factory)
        if type(result.state) is not type(self._state):
            _LOGGER.debug(
                "Action state %s -> %s",
                type(self._state).__name__,
                type(result.state).__name__,
            )
        self._state = result.state
        self.edited.emit(result.edit)
        return result.edit

    def translate(
        self,
        delta_x: float,
        delta_y: float,
        is_finished: bool,
        metrics: CameraMetrics,
        edit: EditRecord,
    ) -> EditRecord:
        return self.handle_event(TranslateEvent(delta_x, delta_y, is_finished), metrics, edit)

    def resize_side(
        self,
        side: Side | str,
        pointer: Point,
        is_finished: bool,
        metrics: CameraMetrics,
        edit: EditRecord,
    ) -> EditRecord:
        event = ResizeSideEvent(Side.parse(side), pointer, is_finished)
        return self.handle_event(event, metrics, edit)

    def resize_corner(
        self,
        corner: Corner | str,
        pointer: Point,
        is_finished: bool,
        metrics: CameraMetrics,
        edit: EditRecord,
    ) -> EditRecord:
        event = ResizeCornerEvent(Corner.parse(corner), pointer, is_finished)
        return self.handle_event(event, metrics, edit)

    def set_tilt(self, tilt: float, metrics: CameraMetrics, edit: EditRecord) -> EditRecord:
        return self.handle_event(TiltEvent(tilt), metrics, edit)

    @staticmethod
    def crop_rect_in_view_space(metrics: CameraMetrics) -> Rect:
        """Return the current crop rect in canvas pixels, for overlay drawing."""
        return transform_rect(metrics.crop_rect, metrics.camera_matrix)
