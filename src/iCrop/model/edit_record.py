"""Immutable record of the crop-related edits applied to a photo."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from ..errors import EditRecordInvalidError
from ..geometry import Rect, is_rect_equal
from .schema import iter_edit_record_errors


@dataclass(frozen=True)
class EditRecord:
    """Crop rect and tilt of a photo.

    ``crop_rect`` is ``None`` when the photo is not cropped, i.e. the crop
    equals the neutral rect.  ``tilt`` is ``None`` when the photo is not
    rotated.  Neither field ever holds the redundant neutral value.
    """

    crop_rect: Rect | None = None
    tilt: float | None = None

    @property
    def tilt_degrees(self) -> float:
        """Return the tilt with absence mapped to zero."""
        return float(self.tilt) if self.tilt is not None else 0.0

    def with_crop_rect(self, crop_rect: Rect | None, neutral_crop_rect: Rect) -> EditRecord:
        """Return a copy storing *crop_rect*, dropping it when it equals the neutral rect."""
        if crop_rect is not None and is_rect_equal(crop_rect, neutral_crop_rect):
            crop_rect = None
        return replace(self, crop_rect=crop_rect)

    def with_tilt(self, tilt: float) -> EditRecord:
        """Return a copy storing *tilt*, dropping the field for zero."""
        return replace(self, tilt=None if tilt == 0 else tilt)

    def to_mapping(self) -> dict[str, Any]:
        """Export the record as a JSON-compatible mapping, omitting absent fields."""
        data: dict[str, Any] = {}
        if self.crop_rect is not None:
            rect = self.crop_rect
            data["cropRect"] = {
                "x": rect.x,
                "y": rect.y,
                "width": rect.width,
                "height": rect.height,
            }
        if self.tilt is not None:
            data["tilt"] = self.tilt
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> EditRecord:
        """Build a record from a persisted mapping.

        Raises
        ------
        EditRecordInvalidError
            If *data* does not match :data:`EDIT_RECORD_SCHEMA`.
        """
        if data is None:
            return cls()
        errors = iter_edit_record_errors(dict(data))
        if errors:
            raise EditRecordInvalidError("; ".join(errors))

        crop_rect = None
        raw_rect = data.get("cropRect")
        if raw_rect is not None:
            crop_rect = Rect(
                float(raw_rect["x"]),
                float(raw_rect["y"]),
                float(raw_rect["width"]),
                float(raw_rect["height"]),
            )
        tilt = data.get("tilt")
        return cls(crop_rect=crop_rect, tilt=float(tilt) if tilt is not None else None)
