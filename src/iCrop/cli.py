"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any

import typer
from jsonschema import Draft202012Validator
from rich import print

from .camera import ExifOrientation, create_camera_metrics
from .errors import GestureScriptError, ICropError
from .engine import (
    CropEngine,
    GestureEvent,
    ResizeCornerEvent,
    ResizeSideEvent,
    TiltEvent,
    TranslateEvent,
    create_texture_polygon,
)
from .geometry import Corner, Rect, Side, Size, build_fence_polygon
from .model import EditRecord
from .utils import ensure_console_logger

app = typer.Typer(help="Replay crop gestures through the constrained crop engine")

_SIZE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
    },
}

_POINT_EVENT_PROPERTIES: dict[str, Any] = {
    "x": {"type": "number"},
    "y": {"type": "number"},
    "finished": {"type": "boolean"},
}

SCRIPT_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/gesture-script.schema.json",
    "type": "object",
    "required": ["texture", "events"],
    "properties": {
        "texture": _SIZE_SCHEMA,
        "canvas": _SIZE_SCHEMA,
        "orientation": {"enum": [int(o) for o in ExifOrientation]},
        "zoom": {"type": "number", "exclusiveMinimum": 0},
        "edit": {"type": "object"},
        "events": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "oneOf": [
                    {
                        "properties": {
                            "type": {"const": "translate"},
                            "dx": {"type": "number"},
                            "dy": {"type": "number"},
                            "finished": {"type": "boolean"},
                        },
                        "required": ["dx", "dy"],
                    },
                    {
                        "properties": {
                            "type": {"const": "side"},
                            "side": {"enum": [s.value for s in Side]},
                            **_POINT_EVENT_PROPERTIES,
                        },
                        "required": ["side", "x", "y"],
                    },
                    {
                        "properties": {
                            "type": {"const": "corner"},
                            "corner": {"enum": [c.value for c in Corner]},
                            **_POINT_EVENT_PROPERTIES,
                        },
                        "required": ["corner", "x", "y"],
                    },
                    {
                        "properties": {
                            "type": {"const": "tilt"},
                            "tilt": {"type": "number"},
                        },
                        "required": ["tilt"],
                    },
                    {"properties": {"type": {"const": "reset"}}},
                ],
            },
        },
    },
}

_script_validator = Draft202012Validator(SCRIPT_SCHEMA)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ICropError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def load_script(path: Path) -> dict[str, Any]:
    """Read and validate a gesture script."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise GestureScriptError(f"Cannot read script {path}: {exc}") from exc
    errors = sorted(_script_validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        error = errors[0]
        location = "/".join(str(part) for part in error.path) or "<root>"
        raise GestureScriptError(f"{location}: {error.message}")
    return data


def parse_event(entry: dict[str, Any]) -> GestureEvent | None:
    """Turn one script entry into a gesture event; ``None`` means reset."""
    kind = entry["type"]
    finished = bool(entry.get("finished", False))
    if kind == "translate":
        return TranslateEvent(float(entry["dx"]), float(entry["dy"]), finished)
    if kind == "side":
        point = (float(entry["x"]), float(entry["y"]))
        return ResizeSideEvent(Side.parse(entry["side"]), point, finished)
    if kind == "corner":
        point = (float(entry["x"]), float(entry["y"]))
        return ResizeCornerEvent(Corner.parse(entry["corner"]), point, finished)
    if kind == "tilt":
        return TiltEvent(float(entry["tilt"]))
    if kind == "reset":
        return None
    raise GestureScriptError(f"Unknown event type: {kind!r}")


def replay_script(data: dict[str, Any]) -> list[EditRecord]:
    """Run every event of a validated script and return the emitted records."""
    texture_size = Size(float(data["texture"]["width"]), float(data["texture"]["height"]))
    orientation = ExifOrientation(data.get("orientation", int(ExifOrientation.UP)))
    canvas = data.get("canvas")
    canvas_size = Size(float(canvas["width"]), float(canvas["height"])) if canvas else None
    zoom = data.get("zoom")
    edit = EditRecord.from_mapping(data.get("edit"))

    engine = CropEngine()
    records: list[EditRecord] = []
    for entry in data["events"]:
        event = parse_event(entry)
        if event is None:
            engine.reset()
            continue
        metrics = create_camera_metrics(
            texture_size,
            edit,
            exif_orientation=orientation,
            canvas_size=canvas_size,
            zoom=zoom,
        )
        edit = engine.handle_event(event, metrics, edit)
        records.append(edit)
    return records


def _format_rect(rect: Rect | None) -> str:
    if rect is None:
        return "none"
    return f"x={rect.x:g} y={rect.y:g} w={rect.width:g} h={rect.height:g}"


@app.command()
@_handle_errors
def replay(
    script: Path = typer.Argument(..., exists=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON record per line"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions"),
) -> None:
    """Replay the gestures of SCRIPT and print every emitted edit record."""

    if verbose:
        ensure_console_logger(logging.getLogger("iCrop"), "icrop-cli", level=logging.DEBUG)
    data = load_script(script)
    for index, record in enumerate(replay_script(data)):
        if as_json:
            typer.echo(json.dumps(record.to_mapping(), sort_keys=True))
            continue
        tilt = f"{record.tilt:g}" if record.tilt is not None else "none"
        print(f"[cyan]{index:>3}[/cyan] crop: {_format_rect(record.crop_rect)}  tilt: {tilt}")


@app.command()
@_handle_errors
def fence(
    x: float = typer.Argument(...),
    y: float = typer.Argument(...),
    width: float = typer.Argument(...),
    height: float = typer.Argument(...),
    texture_width: float = typer.Option(1000.0, "--texture-width", help="Texture width in pixels"),
    texture_height: float = typer.Option(800.0, "--texture-height", help="Texture height in pixels"),
    tilt: float = typer.Option(0.0, help="Tilt in degrees"),
) -> None:
    """Print the fence polygon bounding where a rect's top-left corner may move."""

    edit = EditRecord().with_tilt(tilt)
    metrics = create_camera_metrics(Size(texture_width, texture_height), edit)
    polygon = build_fence_polygon(Rect(x, y, width, height), create_texture_polygon(metrics))
    for px, py in polygon:
        print(f"{px:.3f}, {py:.3f}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
