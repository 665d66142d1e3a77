"""Per-channel component transfer functions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from .image import ImageRef, Rgba, bound


@dataclass(frozen=True)
class Identity:
    """Leaves the channel unchanged."""


@dataclass(frozen=True)
class Table:
    """Linear interpolation between table values."""

    values: tuple[float, ...] = ()


@dataclass(frozen=True)
class Discrete:
    """Step function over table values."""

    values: tuple[float, ...] = ()


@dataclass(frozen=True)
class Linear:
    """``slope * c + intercept``."""

    slope: float = 1.0
    intercept: float = 0.0


@dataclass(frozen=True)
class Gamma:
    """``amplitude * c ** exponent + offset``."""

    amplitude: float = 1.0
    exponent: float = 1.0
    offset: float = 0.0


TransferFunction = Union[Identity, Table, Discrete, Linear, Gamma]


@dataclass(frozen=True)
class ComponentTransfer:
    """Transfer functions for each of the four channels."""

    func_r: TransferFunction = field(default_factory=Identity)
    func_g: TransferFunction = field(default_factory=Identity)
    func_b: TransferFunction = field(default_factory=Identity)
    func_a: TransferFunction = field(default_factory=Identity)


def is_dummy(func: TransferFunction) -> bool:
    """True when the function would leave the channel unchanged."""
    if isinstance(func, Identity):
        return True
    if isinstance(func, (Table, Discrete)):
        return len(func.values) == 0
    return False


def _power(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0:
        return math.inf
    return base**exponent


def transfer(func: TransferFunction, channel: int) -> int:
    """Applies a transfer function to one 8-bit channel value."""
    c = channel / 255.0
    if isinstance(func, Table):
        n = len(func.values) - 1
        k = min(math.floor(c * n), n)
        if k == n:
            c = func.values[k]
        else:
            vk, vk1 = func.values[k], func.values[k + 1]
            c = vk + (c - k / n) * n * (vk1 - vk)
    elif isinstance(func, Discrete):
        n = len(func.values)
        c = func.values[min(math.floor(c * n), n - 1)]
    elif isinstance(func, Linear):
        c = func.slope * c + func.intercept
    elif isinstance(func, Gamma):
        c = func.amplitude * _power(c, func.exponent) + func.offset
    return int(bound(0.0, c, 1.0) * 255.0)


def apply(fe: ComponentTransfer, image: ImageRef) -> None:
    """Applies the transfer functions to an unpremultiplied image, in place."""
    funcs = (fe.func_r, fe.func_g, fe.func_b, fe.func_a)
    active = [not is_dummy(func) for func in funcs]
    for i, pixel in enumerate(image.data):
        image.data[i] = Rgba(
            *(
                transfer(func, value) if use else value
                for func, value, use in zip(funcs, pixel, active)
            )
        )