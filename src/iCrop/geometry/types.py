"""Value types shared by the crop geometry helpers."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import InvalidHandleError

Point = tuple[float, float]
Polygon = Sequence[Point]


@dataclass(frozen=True)
class Size:
    """Extent of a rectangle.  Components may be signed while computing."""

    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner ``(x, y)``."""

    x: float
    y: float
    width: float
    height: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


class Side(str, enum.Enum):
    """Edges of a crop rectangle, named by compass direction."""

    N = "n"
    E = "e"
    S = "s"
    W = "w"

    @classmethod
    def parse(cls, value: Side | str) -> Side:
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidHandleError(f"Unknown side: {value!r}") from exc


class Corner(str, enum.Enum):
    """Corners of a crop rectangle, named by compass direction."""

    NW = "nw"
    NE = "ne"
    SE = "se"
    SW = "sw"

    @classmethod
    def parse(cls, value: Corner | str) -> Corner:
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidHandleError(f"Unknown corner: {value!r}") from exc

    @property
    def direction(self) -> tuple[int, int]:
        """Return the sign a rect size must carry when this corner is dragged."""
        return (
            1 if self in (Corner.NE, Corner.SE) else -1,
            1 if self in (Corner.SW, Corner.SE) else -1,
        )


CORNERS: tuple[Corner, ...] = (Corner.NW, Corner.NE, Corner.SE, Corner.SW)

OPPOSITE_CORNER: dict[Corner, Corner] = {
    Corner.NW: Corner.SE,
    Corner.NE: Corner.SW,
    Corner.SE: Corner.NW,
    Corner.SW: Corner.NE,
}


__all__ = [
    "CORNERS",
    "Corner",
    "OPPOSITE_CORNER",
    "Point",
    "Polygon",
    "Rect",
    "Side",
    "Size",
]
