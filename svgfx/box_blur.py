"""A Gaussian blur approximated by several passes of a box blur."""

from __future__ import annotations

import math
from itertools import accumulate

from .image import ImageRef, Rgba

STEPS = 5


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def create_box_gauss(sigma: float) -> tuple[int, ...]:
    """Returns the widths of the box filters that approximate ``sigma``.

    A zero or negative sigma gives boxes of width one, which do nothing.
    """
    if not sigma > 0.0:
        return (1,) * STEPS

    n = float(STEPS)
    # Ideal averaging filter width.
    w_ideal = math.sqrt(12.0 * sigma * sigma / n) + 1.0
    wl = math.floor(w_ideal)
    if wl % 2 == 0:
        wl -= 1
    wu = wl + 2

    m_ideal = (12.0 * sigma * sigma - n * wl * wl - 4.0 * n * wl - 3.0 * n) / (
        -4.0 * wl - 4.0
    )
    m = _round_half_away(m_ideal)
    return tuple(wl if i < m else wu for i in range(STEPS))


def _box_line(line: list[int], radius: int) -> list[int]:
    """Averages every value over a ``2 * radius + 1`` window padded with zeros."""
    n = len(line)
    iarr = 1.0 / (radius + radius + 1)
    prefix = list(accumulate(line, initial=0))
    return [
        min(255, round((prefix[min(n, t + radius + 1)] - prefix[max(0, t - radius)]) * iarr))
        for t in range(n)
    ]


def apply(sigma_x: float, sigma_y: float, image: ImageRef) -> None:
    """Blurs a premultiplied image in place.

    A zero or negative sigma disables the blur along that axis.
    """
    if not image.data:
        return

    width, height = image.width, image.height
    radii = [
        ((box_h - 1) // 2, (box_v - 1) // 2)
        for box_h, box_v in zip(create_box_gauss(sigma_x), create_box_gauss(sigma_y))
    ]

    channels = []
    for channel in range(4):
        buf = [p[channel] for p in image.data]
        for radius_h, radius_v in radii:
            if radius_v:
                for x in range(width):
                    buf[x::width] = _box_line(buf[x::width], radius_v)
            if radius_h:
                for y in range(height):
                    start = y * width
                    buf[start : start + width] = _box_line(
                        buf[start : start + width], radius_h
                    )
        channels.append(buf)

    image.data[:] = [Rgba(r, g, b, a) for r, g, b, a in zip(*channels)]