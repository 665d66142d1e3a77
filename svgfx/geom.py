"""Integer and floating point rectangles used by the filter pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _check_i32(value: int, name: str) -> None:
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"{name} {value} does not fit into a 32-bit integer")


@dataclass(frozen=True)
class IntRect:
    """A rectangle with integer coordinates and a strictly positive size."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"rectangle size must be positive, got {self.width}x{self.height}"
            )
        _check_i32(self.x, "x")
        _check_i32(self.y, "y")
        _check_i32(self.width, "width")
        _check_i32(self.height, "height")
        _check_i32(self.x + self.width, "right")
        _check_i32(self.y + self.height, "bottom")

    @classmethod
    def from_xywh(cls, x: int, y: int, width: int, height: int) -> IntRect:
        """Creates a rectangle from a position and a size."""
        return cls(int(x), int(y), int(width), int(height))

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> IntRect:
        """Creates a rectangle from its edges."""
        return cls(int(left), int(top), int(right) - int(left), int(bottom) - int(top))

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def translate(self, dx: int, dy: int) -> IntRect:
        """Returns the rectangle moved by the given offset."""
        return IntRect(self.x + dx, self.y + dy, self.width, self.height)

    def translate_to(self, x: int, y: int) -> IntRect:
        """Returns the rectangle moved to the given position."""
        return IntRect(x, y, self.width, self.height)

    def to_rect(self) -> Rect:
        """Converts to a floating point rectangle."""
        return Rect.from_xywh(
            float(self.x), float(self.y), float(self.width), float(self.height)
        )


@dataclass(frozen=True)
class Rect:
    """A rectangle with floating point coordinates and a non-negative size."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            raise ValueError("rectangle values must be finite")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"rectangle size must not be negative, got {self.width}x{self.height}"
            )
        if not (math.isfinite(self.x + self.width) and math.isfinite(self.y + self.height)):
            raise ValueError("rectangle edges must be finite")

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Rect:
        """Creates a rectangle from a position and a size."""
        return cls(float(x), float(y), float(width), float(height))

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        """Creates a rectangle from its edges."""
        return cls(float(left), float(top), float(right) - left, float(bottom) - top)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_non_zero(self) -> bool:
        """True when both sides are strictly positive."""
        return self.width > 0 and self.height > 0

    def bbox_transform(self, bbox: Rect) -> Rect:
        """Maps a rectangle in bounding-box units into the space of ``bbox``."""
        return Rect.from_xywh(
            self.x * bbox.width + bbox.x,
            self.y * bbox.height + bbox.y,
            self.width * bbox.width,
            self.height * bbox.height,
        )

    def expand(self, other: Rect) -> Rect:
        """Returns the smallest rectangle that holds both rectangles."""
        return Rect.from_ltrb(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def translate_to(self, x: float, y: float) -> Rect:
        """Returns the rectangle moved to the given position."""
        return Rect.from_xywh(x, y, self.width, self.height)

    def to_int_rect(self) -> IntRect:
        """Rounds the position down and the size up, keeping at least one pixel."""
        return IntRect.from_xywh(
            math.floor(self.x),
            math.floor(self.y),
            max(1, math.ceil(self.width)),
            max(1, math.ceil(self.height)),
        )


def fit_to_rect(rect: IntRect, bounds: IntRect) -> IntRect | None:
    """Clips ``rect`` to ``bounds``; returns None when nothing is left."""
    left = max(rect.left, bounds.left)
    top = max(rect.top, bounds.top)
    right = min(rect.right, bounds.right)
    bottom = min(rect.bottom, bounds.bottom)
    if right <= left or bottom <= top:
        return None
    return IntRect.from_ltrb(left, top, right, bottom)