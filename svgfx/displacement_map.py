"""The displacement map filter."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .image import ImageRef


class ColorChannel(enum.Enum):
    """The channel of the map image that drives a displacement axis."""

    R = "r"
    G = "g"
    B = "b"
    A = "a"


@dataclass(frozen=True)
class DisplacementMap:
    """Parameters of a displacement map primitive."""

    scale: float
    x_channel_selector: ColorChannel = ColorChannel.A
    y_channel_selector: ColorChannel = ColorChannel.A


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def apply(
    fe: DisplacementMap,
    sx: float,
    sy: float,
    src: ImageRef,
    map_image: ImageRef,
    dest: ImageRef,
) -> None:
    """Moves ``src`` pixels into ``dest`` by offsets read from ``map_image``.

    ``map_image`` should be unpremultiplied; ``sx`` and ``sy`` are the canvas
    scale. Destination pixels whose source falls outside the image are kept.
    """
    if not (src.width == map_image.width == dest.width):
        raise ValueError("images must have the same width")
    if not (src.height == map_image.height == dest.height):
        raise ValueError("images must have the same height")

    w, h = src.width, src.height
    for index, pixel in enumerate(map_image.data):
        x, y = index % w, index // w
        dx = getattr(pixel, fe.x_channel_selector.value) / 255.0 - 0.5
        dy = getattr(pixel, fe.y_channel_selector.value) / 255.0 - 0.5
        ox = _round_half_away(x + dx * sx * fe.scale)
        oy = _round_half_away(y + dy * sy * fe.scale)
        if 0 <= ox < w and 0 <= oy < h:
            dest.data[index] = src.data[oy * w + ox]