"""RGBA pixel buffers and the colour operations shared by the filters."""

from __future__ import annotations

import enum
import math
from collections.abc import MutableSequence
from dataclasses import dataclass, field
from typing import NamedTuple


class Rgba(NamedTuple):
    """A single 8-bit RGBA pixel."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


class ColorInterpolation(enum.Enum):
    """The colour space a filter primitive works in."""

    SRGB = "sRGB"
    LINEAR_RGB = "linearRGB"


@dataclass
class ImageRef:
    """A row-major RGBA image.

    Some filters expect premultiplied channels and some do not; each filter
    documents what it needs.
    """

    width: int
    height: int
    data: list[Rgba] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        if len(self.data) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} pixels, got {len(self.data)}"
            )

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.width * y + x

    def pixel_at(self, x: int, y: int) -> Rgba:
        """Returns the pixel at the given position."""
        return self.data[self._index(x, y)]

    def set_pixel(self, x: int, y: int, pixel: Rgba) -> None:
        """Replaces the pixel at the given position."""
        self.data[self._index(x, y)] = pixel

    def alpha_at(self, x: int, y: int) -> int:
        """Returns the alpha channel of the pixel at the given position."""
        return self.data[self._index(x, y)].a

    def copy(self) -> ImageRef:
        """Returns an independent copy of the image."""
        return ImageRef(self.width, self.height, list(self.data))


def blank_image(width: int, height: int) -> ImageRef:
    """Creates a fully transparent image."""
    return ImageRef(width, height, [Rgba()] * (width * height))


def bound(min_value: float, value: float, max_value: float) -> float:
    """Clamps ``value`` into ``[min_value, max_value]``."""
    if value > max_value:
        return max_value
    if value < min_value:
        return min_value
    return value


def _saturate_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= 255:
        return 255
    if value <= 0:
        return 0
    return int(value)


def multiply_alpha(pixels: MutableSequence[Rgba]) -> None:
    """Premultiplies the colour channels by alpha, in place."""
    for i, p in enumerate(pixels):
        a = p.a / 255.0
        pixels[i] = Rgba(
            _saturate_u8(p.r * a + 0.5),
            _saturate_u8(p.g * a + 0.5),
            _saturate_u8(p.b * a + 0.5),
            p.a,
        )


def _demultiply_channel(c: int, a: float) -> int:
    if a == 0.0:
        # 0/0 gives NaN (stored as 0), anything else overflows to 255.
        return 0 if c == 0 else 255
    return _saturate_u8(c / a + 0.5)


def demultiply_alpha(pixels: MutableSequence[Rgba]) -> None:
    """Divides the colour channels by alpha, in place."""
    for i, p in enumerate(pixels):
        a = p.a / 255.0
        pixels[i] = Rgba(
            _demultiply_channel(p.r, a),
            _demultiply_channel(p.g, a),
            _demultiply_channel(p.b, a),
            p.a,
        )


# C_lin = C_srgb / 12.92 below 0.04045, else ((C_srgb + 0.055) / 1.055) ** 2.4
SRGB_TO_LINEAR_RGB_TABLE: tuple[int, ...] = (
    0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 2, 2, 2, 2, 2, 2, 2, 2, 3, 3, 3, 3, 3, 3,
    4, 4, 4, 4, 4, 5, 5, 5, 5, 6, 6, 6, 6, 7, 7, 7,
    8, 8, 8, 8, 9, 9, 9, 10, 10, 10, 11, 11, 12, 12, 12, 13,
    13, 13, 14, 14, 15, 15, 16, 16, 17, 17, 17, 18, 18, 19, 19, 20,
    20, 21, 22, 22, 23, 23, 24, 24, 25, 25, 26, 27, 27, 28, 29, 29,
    30, 30, 31, 32, 32, 33, 34, 35, 35, 36, 37, 37, 38, 39, 40, 41,
    41, 42, 43, 44, 45, 45, 46, 47, 48, 49, 50, 51, 51, 52, 53, 54,
    55, 56, 57, 58, 59, 60, 61, 62, 63, 64, 65, 66, 67, 68, 69, 70,
    71, 72, 73, 74, 76, 77, 78, 79, 80, 81, 82, 84, 85, 86, 87, 88,
    90, 91, 92, 93, 95, 96, 97, 99, 100, 101, 103, 104, 105, 107, 108, 109,
    111, 112, 114, 115, 116, 118, 119, 121, 122, 124, 125, 127, 128, 130, 131, 133,
    134, 136, 138, 139, 141, 142, 144, 146, 147, 149, 151, 152, 154, 156, 157, 159,
    161, 163, 164, 166, 168, 170, 171, 173, 175, 177, 179, 181, 183, 184, 186, 188,
    190, 192, 194, 196, 198, 200, 202, 204, 206, 208, 210, 212, 214, 216, 218, 220,
    222, 224, 226, 229, 231, 233, 235, 237, 239, 242, 244, 246, 248, 250, 253, 255,
)

# C_srgb = C_lin * 12.92 below 0.0031308, else 1.055 * C_lin ** (1 / 2.4) - 0.055
LINEAR_RGB_TO_SRGB_TABLE: tuple[int, ...] = (
    0, 13, 22, 28, 34, 38, 42, 46, 50, 53, 56, 59, 61, 64, 66, 69,
    71, 73, 75, 77, 79, 81, 83, 85, 86, 88, 90, 92, 93, 95, 96, 98,
    99, 101, 102, 104, 105, 106, 108, 109, 110, 112, 113, 114, 115, 117, 118, 119,
    120, 121, 122, 124, 125, 126, 127, 128, 129, 130, 131, 132, 133, 134, 135, 136,
    137, 138, 139, 140, 141, 142, 143, 144, 145, 146, 147, 148, 148, 149, 150, 151,
    152, 153, 154, 155, 155, 156, 157, 158, 159, 159, 160, 161, 162, 163, 163, 164,
    165, 166, 167, 167, 168, 169, 170, 170, 171, 172, 173, 173, 174, 175, 175, 176,
    177, 178, 178, 179, 180, 180, 181, 182, 182, 183, 184, 185, 185, 186, 187, 187,
    188, 189, 189, 190, 190, 191, 192, 192, 193, 194, 194, 195, 196, 196, 197, 197,
    198, 199, 199, 200, 200, 201, 202, 202, 203, 203, 204, 205, 205, 206, 206, 207,
    208, 208, 209, 209, 210, 210, 211, 212, 212, 213, 213, 214, 214, 215, 215, 216,
    216, 217, 218, 218, 219, 219, 220, 220, 221, 221, 222, 222, 223, 223, 224, 224,
    225, 226, 226, 227, 227, 228, 228, 229, 229, 230, 230, 231, 231, 232, 232, 233,
    233, 234, 234, 235, 235, 236, 236, 237, 237, 238, 238, 238, 239, 239, 240, 240,
    241, 241, 242, 242, 243, 243, 244, 244, 245, 245, 246, 246, 246, 247, 247, 248,
    248, 249, 249, 250, 250, 251, 251, 251, 252, 252, 253, 253, 254, 254, 255, 255,
)


def _map_channels(pixels: MutableSequence[Rgba], table: tuple[int, ...]) -> None:
    for i, p in enumerate(pixels):
        pixels[i] = Rgba(table[p.r], table[p.g], table[p.b], p.a)


def into_linear_rgb(pixels: MutableSequence[Rgba]) -> None:
    """Converts unpremultiplied pixels from sRGB to linearRGB, in place."""
    _map_channels(pixels, SRGB_TO_LINEAR_RGB_TABLE)


def from_linear_rgb(pixels: MutableSequence[Rgba]) -> None:
    """Converts unpremultiplied pixels from linearRGB to sRGB, in place."""
    _map_channels(pixels, LINEAR_RGB_TO_SRGB_TABLE)


def convert_color_space(
    image: ImageRef, source: ColorInterpolation, target: ColorInterpolation
) -> ImageRef:
    """Returns a premultiplied image converted from ``source`` to ``target``.

    The image itself is returned when the colour spaces are equal.
    """
    if source == target:
        return image
    result = image.copy()
    demultiply_alpha(result.data)
    if target is ColorInterpolation.SRGB:
        from_linear_rgb(result.data)
    else:
        into_linear_rgb(result.data)
    multiply_alpha(result.data)
    return result


def source_alpha(image: ImageRef) -> ImageRef:
    """Returns a copy with black colour channels and the original alpha."""
    return ImageRef(image.width, image.height, [Rgba(0, 0, 0, p.a) for p in image.data])