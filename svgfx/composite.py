"""The arithmetic compositing operator."""

from __future__ import annotations

from .image import ImageRef, Rgba, bound

# Four ULPs of the smallest positive single precision value.
_APPROX_ZERO = 4 * 2.0**-149


def arithmetic(
    k1: float,
    k2: float,
    k3: float,
    k4: float,
    src1: ImageRef,
    src2: ImageRef,
    dest: ImageRef,
) -> None:
    """Writes ``k1*i1*i2 + k2*i1 + k3*i2 + k4`` of two images into ``dest``.

    Inputs are premultiplied, and so is the result. Pixels whose resulting
    alpha is zero are left untouched in ``dest``.
    """
    if not (src1.width == src2.width == dest.width):
        raise ValueError("images must have the same width")
    if not (src1.height == src2.height == dest.height):
        raise ValueError("images must have the same height")

    def calc(c1: int, c2: int, max_value: float) -> float:
        i1 = c1 / 255.0
        i2 = c2 / 255.0
        return bound(0.0, k1 * i1 * i2 + k2 * i1 + k3 * i2 + k4, max_value)

    for i, (p1, p2) in enumerate(zip(src1.data, src2.data)):
        a = calc(p1.a, p2.a, 1.0)
        if abs(a) <= _APPROX_ZERO:
            continue
        dest.data[i] = Rgba(
            int(calc(p1.r, p2.r, a) * 255.0),
            int(calc(p1.g, p2.g, a) * 255.0),
            int(calc(p1.b, p2.b, a) * 255.0),
            int(a * 255.0),
        )