"""The convolve matrix filter."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .image import ImageRef, Rgba, bound


class EdgeMode(enum.Enum):
    """How pixels beyond the image edge are read."""

    NONE = "none"
    DUPLICATE = "duplicate"
    WRAP = "wrap"


@dataclass(frozen=True)
class KernelMatrix:
    """A convolution kernel stored row by row."""

    columns: int
    rows: int
    target_x: int
    target_y: int
    data: tuple[float, ...]

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError("kernel size must be positive")
        if len(self.data) != self.columns * self.rows:
            raise ValueError(
                f"expected {self.columns * self.rows} kernel values, got {len(self.data)}"
            )
        if not (0 <= self.target_x < self.columns and 0 <= self.target_y < self.rows):
            raise ValueError("kernel target is outside the kernel")

    def get(self, x: int, y: int) -> float:
        """Returns the kernel value at the given column and row."""
        return self.data[y * self.columns + x]


@dataclass(frozen=True)
class ConvolveMatrix:
    """Parameters of a convolve matrix primitive."""

    matrix: KernelMatrix
    divisor: float = 1.0
    bias: float = 0.0
    edge_mode: EdgeMode = EdgeMode.DUPLICATE
    preserve_alpha: bool = False

    def __post_init__(self) -> None:
        if self.divisor == 0.0:
            raise ValueError("divisor must not be zero")


def apply(matrix: ConvolveMatrix, image: ImageRef) -> None:
    """Convolves the image in place.

    Pixels should be premultiplied unless ``preserve_alpha`` is set.
    """
    kernel = matrix.matrix
    width, height = image.width, image.height
    width_max, height_max = width - 1, height - 1
    divisor = matrix.divisor
    bias = matrix.bias
    preserve = matrix.preserve_alpha
    src = image.data

    result: list[Rgba] = []
    for y in range(height):
        for x in range(width):
            new_r = new_g = new_b = new_a = 0.0
            for oy in range(kernel.rows):
                for ox in range(kernel.columns):
                    tx = x - kernel.target_x + ox
                    ty = y - kernel.target_y + oy

                    if matrix.edge_mode is EdgeMode.NONE:
                        if tx < 0 or tx > width_max or ty < 0 or ty > height_max:
                            continue
                    elif matrix.edge_mode is EdgeMode.DUPLICATE:
                        tx = int(bound(0, tx, width_max))
                        ty = int(bound(0, ty, height_max))
                    else:
                        tx %= width
                        ty %= height

                    k = kernel.get(kernel.columns - ox - 1, kernel.rows - oy - 1)
                    p = src[ty * width + tx]
                    new_r += p.r / 255.0 * k
                    new_g += p.g / 255.0 * k
                    new_b += p.b / 255.0 * k
                    if not preserve:
                        new_a += p.a / 255.0 * k

            if preserve:
                new_a = src[y * width + x].a / 255.0
            else:
                new_a = new_a / divisor + bias

            bounded_a = bound(0.0, new_a, 1.0)

            def calc(value: float) -> int:
                value = value / divisor + bias * new_a
                if preserve:
                    value = bound(0.0, value, 1.0) * bounded_a
                else:
                    value = bound(0.0, value, bounded_a)
                return int(value * 255.0 + 0.5)

            result.append(
                Rgba(calc(new_r), calc(new_g), calc(new_b), int(bounded_a * 255.0 + 0.5))
            )

    image.data[:] = result