"""A Gaussian blur approximated by cascaded first-order IIR filters.

Implements the fast Gaussian convolution of Alvarez and Mazorra, where each
timestep of the heat equation is a recursive computation.
"""

from __future__ import annotations

import math

from .image import ImageRef, Rgba

_STEPS = 4


def gen_coefficients(sigma: float, steps: int) -> tuple[float, float]:
    """Returns the ``(lambda, dnu)`` coefficients for the given sigma."""
    lam = (sigma * sigma) / (2.0 * steps)
    dnu = (1.0 + 2.0 * lam - math.sqrt(1.0 + 4.0 * lam)) / (2.0 * lam)
    return lam, dnu


def _to_u8(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


def _gaussian_2d(
    buf: list[float], width: int, height: int, sigma_x: float, sigma_y: float
) -> None:
    steps = _STEPS
    size = len(buf)

    if sigma_x > 0.0:
        lambda_x, dnu_x = gen_coefficients(sigma_x, steps)
        for row in range(0, size, width):
            for _ in range(steps):
                for x in range(row + 1, row + width):
                    buf[x] += dnu_x * buf[x - 1]
                for x in range(row + width - 1, row, -1):
                    buf[x - 1] += dnu_x * buf[x]
    else:
        lambda_x, dnu_x = 1.0, 1.0

    if sigma_y > 0.0:
        lambda_y, dnu_y = gen_coefficients(sigma_y, steps)
        for col in range(width):
            for _ in range(steps):
                for i in range(col + width, size, width):
                    buf[i] += dnu_y * buf[i - width]
                for i in range(col + size - width, col, -width):
                    buf[i - width] += dnu_y * buf[i]
    else:
        lambda_y, dnu_y = 1.0, 1.0

    post_scale = (math.sqrt(dnu_x * dnu_y) / math.sqrt(lambda_x * lambda_y)) ** (
        2 * steps
    )
    buf[:] = [v * post_scale for v in buf]


def apply(sigma_x: float, sigma_y: float, image: ImageRef) -> None:
    """Blurs a premultiplied image in place.

    A zero or negative sigma disables the blur along that axis.
    """
    if not image.data:
        return

    channels = []
    for channel in range(4):
        buf = [p[channel] / 255.0 for p in image.data]
        _gaussian_2d(buf, image.width, image.height, sigma_x, sigma_y)
        channels.append([_to_u8(v * 255.0) for v in buf])

    image.data[:] = [Rgba(r, g, b, a) for r, g, b, a in zip(*channels)]