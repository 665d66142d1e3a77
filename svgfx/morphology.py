"""The erode and dilate morphology filter."""

from __future__ import annotations

import enum
import math

from .image import ImageRef, Rgba


class MorphologyOperator(enum.Enum):
    """Whether the filter thins or fattens the image."""

    ERODE = "erode"
    DILATE = "dilate"


def apply(operator: MorphologyOperator, rx: float, ry: float, image: ImageRef) -> None:
    """Applies the morphology filter to a premultiplied image, in place."""
    width, height = image.width, image.height
    # No point in making the window larger than the image.
    columns = min(math.ceil(rx) * 2, width)
    rows = min(math.ceil(ry) * 2, height)
    target_x = columns // 2
    target_y = rows // 2

    erode = operator is MorphologyOperator.ERODE
    pick = min if erode else max
    default = 255 if erode else 0

    src = image.data
    result: list[Rgba] = []
    for y in range(height):
        y_range = range(max(0, y - target_y), min(height, y - target_y + rows))
        for x in range(width):
            x_range = range(max(0, x - target_x), min(width, x - target_x + columns))
            window = [src[ty * width + tx] for ty in y_range for tx in x_range]
            result.append(
                Rgba(
                    pick((p.r for p in window), default=default),
                    pick((p.g for p in window), default=default),
                    pick((p.b for p in window), default=default),
                    pick((p.a for p in window), default=default),
                )
            )

    image.data[:] = result