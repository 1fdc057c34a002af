"""Schema helpers for persisted edit records."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator

from ..config import MIN_CROP_RECT_SIZE

EDIT_RECORD_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/edit-record.schema.json",
    "type": "object",
    "properties": {
        "cropRect": {
            "type": "object",
            "required": ["x", "y", "width", "height"],
            "properties": {
                "x": {"type": "number"},
                "y": {"type": "number"},
                "width": {"type": "number", "minimum": MIN_CROP_RECT_SIZE},
                "height": {"type": "number", "minimum": MIN_CROP_RECT_SIZE},
            },
            "additionalProperties": False,
        },
        "tilt": {"type": "number", "not": {"const": 0}},
    },
    # Hosts keep unrelated photo edits (flags, rotation turns, ...) in the
    # same record.  They are accepted here and ignored by EditRecord.from_mapping,
    # so hosts merge to_mapping() back into their own record.
    "additionalProperties": True,
}

_validator = Draft202012Validator(EDIT_RECORD_SCHEMA)


def iter_edit_record_errors(data: Any) -> list[str]:
    """Return human-readable validation messages for *data*."""

    messages = []
    for error in sorted(_validator.iter_errors(data), key=lambda e: list(e.path)):
        location = "/".join(str(part) for part in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


__all__ = ["EDIT_RECORD_SCHEMA", "iter_edit_record_errors"]
