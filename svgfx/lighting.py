"""Diffuse and specular lighting filters."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional, Union

from .image import ImageRef, Rgba, bound

# Four ULPs of the smallest positive single precision value.
_APPROX_ZERO = 4 * 2.0**-149
# Four ULPs around 1.0 in single precision.
_APPROX_ONE = 4 * 2.0**-23

FACTOR_1_2 = 1.0 / 2.0
FACTOR_1_3 = 1.0 / 3.0
FACTOR_1_4 = 1.0 / 4.0
FACTOR_2_3 = 2.0 / 3.0


@dataclass(frozen=True)
class Color:
    """An opaque 8-bit RGB colour."""

    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def black(cls) -> Color:
        """Returns black."""
        return cls(0, 0, 0)

    @classmethod
    def white(cls) -> Color:
        """Returns white."""
        return cls(255, 255, 255)


@dataclass(frozen=True)
class DistantLight:
    """A light infinitely far away; angles are in degrees."""

    azimuth: float = 0.0
    elevation: float = 0.0


@dataclass(frozen=True)
class PointLight:
    """A light at a point."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class SpotLight:
    """A light at a point, shining towards another point."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    points_at_x: float = 0.0
    points_at_y: float = 0.0
    points_at_z: float = 0.0
    specular_exponent: float = 1.0
    limiting_cone_angle: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.specular_exponent > 0:
            raise ValueError("spot light specular exponent must be positive")


LightSource = Union[DistantLight, PointLight, SpotLight]


@dataclass(frozen=True)
class DiffuseLighting:
    """Parameters of a diffuse lighting primitive."""

    surface_scale: float = 1.0
    diffuse_constant: float = 1.0
    lighting_color: Color = field(default_factory=Color.white)


@dataclass(frozen=True)
class SpecularLighting:
    """Parameters of a specular lighting primitive."""

    surface_scale: float = 1.0
    specular_constant: float = 1.0
    specular_exponent: float = 1.0
    lighting_color: Color = field(default_factory=Color.white)


class _Vector3(NamedTuple):
    x: float
    y: float
    z: float

    def dot(self, other: _Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def minus(self, other: _Vector3) -> _Vector3:
        return _Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def plus(self, other: _Vector3) -> _Vector3:
        return _Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def normalized_or_self(self) -> _Vector3:
        length = self.length()
        if _approx_zero(length):
            return self
        return _Vector3(self.x / length, self.y / length, self.z / length)


class _Normal(NamedTuple):
    factor_x: float
    factor_y: float
    nx: float
    ny: float

    @classmethod
    def of(cls, factor_x: float, factor_y: float, nx: int, ny: int) -> _Normal:
        return cls(factor_x, factor_y, float(-nx), float(-ny))

    def is_zero(self) -> bool:
        return _approx_zero(self.nx) and _approx_zero(self.ny)

    def surface(self, surface_scale: float) -> _Vector3:
        scale = surface_scale / 255.0
        return _Vector3(self.nx * scale * self.factor_x, self.ny * scale * self.factor_y, 1.0)


def _approx_zero(value: float) -> bool:
    return abs(value) <= _APPROX_ZERO


def _powf(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0.0:
            return math.inf
        return math.nan
    except OverflowError:
        return math.inf


def _to_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return min(255, max(0, int(value)))


def _scale_channel(channel: int, factor: float) -> int:
    return _to_u8(bound(0.0, channel * factor, 255.0) + 0.5)


def diffuse_lighting(
    fe: DiffuseLighting, light_source: LightSource, src: ImageRef, dest: ImageRef
) -> None:
    """Renders diffuse lighting from the alpha of ``src`` into ``dest``.

    ``dest`` gets unpremultiplied alpha. Nothing happens when ``src`` is
    smaller than 3x3.
    """
    _check_sizes(src, dest)

    def light_factor(normal: _Normal, light_vector: _Vector3) -> float:
        if normal.is_zero():
            k = light_vector.z
        else:
            n = normal.surface(fe.surface_scale)
            k = n.dot(light_vector) / n.length()
        return fe.diffuse_constant * k

    _apply(
        light_source,
        fe.surface_scale,
        fe.lighting_color,
        light_factor,
        lambda r, g, b: 255,
        src,
        dest,
    )


def specular_lighting(
    fe: SpecularLighting, light_source: LightSource, src: ImageRef, dest: ImageRef
) -> None:
    """Renders specular lighting from the alpha of ``src`` into ``dest``.

    ``dest`` gets premultiplied alpha. Nothing happens when ``src`` is
    smaller than 3x3.
    """
    _check_sizes(src, dest)
    plain_exponent = abs(fe.specular_exponent - 1.0) <= _APPROX_ONE

    def light_factor(normal: _Normal, light_vector: _Vector3) -> float:
        h = light_vector.plus(_Vector3(0.0, 0.0, 1.0))
        h_length = h.length()
        if _approx_zero(h_length):
            return 0.0

        if normal.is_zero():
            n_dot_h = h.z / h_length
        else:
            n = normal.surface(fe.surface_scale)
            n_dot_h = n.dot(h) / n.length() / h_length

        k = n_dot_h if plain_exponent else _powf(n_dot_h, fe.specular_exponent)
        return fe.specular_constant * k

    _apply(
        light_source,
        fe.surface_scale,
        fe.lighting_color,
        light_factor,
        lambda r, g, b: max(r, g, b),
        src,
        dest,
    )


def _check_sizes(src: ImageRef, dest: ImageRef) -> None:
    if src.width != dest.width or src.height != dest.height:
        raise ValueError("source and destination images must have the same size")


def _apply(
    light_source: LightSource,
    surface_scale: float,
    lighting_color: Color,
    light_factor: Callable[[_Normal, _Vector3], float],
    calc_alpha: Callable[[int, int, int], int],
    src: ImageRef,
    dest: ImageRef,
) -> None:
    if src.width < 3 or src.height < 3:
        return

    width, height = src.width, src.height

    # A distant light has a fixed vector, so it is computed once.
    fixed_vector: Optional[_Vector3] = None
    if isinstance(light_source, DistantLight):
        azimuth = math.radians(light_source.azimuth)
        elevation = math.radians(light_source.elevation)
        fixed_vector = _Vector3(
            math.cos(azimuth) * math.cos(elevation),
            math.sin(azimuth) * math.cos(elevation),
            math.sin(elevation),
        )

    def calc(x: int, y: int, normal: _Normal) -> None:
        if fixed_vector is not None:
            light_vector = fixed_vector
        else:
            nz = src.alpha_at(x, y) / 255.0 * surface_scale
            origin = _Vector3(light_source.x, light_source.y, light_source.z)
            light_vector = origin.minus(_Vector3(float(x), float(y), nz)).normalized_or_self()

        color = _light_color(light_source, lighting_color, light_vector)
        factor = light_factor(normal, light_vector)
        r = _scale_channel(color.red, factor)
        g = _scale_channel(color.green, factor)
        b = _scale_channel(color.blue, factor)
        dest.set_pixel(x, y, Rgba(r, g, b, calc_alpha(r, g, b)))

    calc(0, 0, _top_left_normal(src))
    calc(width - 1, 0, _top_right_normal(src))
    calc(0, height - 1, _bottom_left_normal(src))
    calc(width - 1, height - 1, _bottom_right_normal(src))

    for x in range(1, width - 1):
        calc(x, 0, _top_row_normal(src, x))
        calc(x, height - 1, _bottom_row_normal(src, x))

    for y in range(1, height - 1):
        calc(0, y, _left_column_normal(src, y))
        calc(width - 1, y, _right_column_normal(src, y))

    for y in range(1, height - 1):
        for x in range(1, width - 1):
            calc(x, y, _interior_normal(src, x, y))


def _light_color(light: LightSource, lighting_color: Color, light_vector: _Vector3) -> Color:
    if not isinstance(light, SpotLight):
        return lighting_color

    origin = _Vector3(light.x, light.y, light.z)
    direction = _Vector3(light.points_at_x, light.points_at_y, light.points_at_z)
    direction = direction.minus(origin).normalized_or_self()
    minus_l_dot_s = -light_vector.dot(direction)
    if minus_l_dot_s <= 0.0:
        return Color.black()

    if light.limiting_cone_angle is not None:
        if minus_l_dot_s < math.cos(math.radians(light.limiting_cone_angle)):
            return Color.black()

    factor = _powf(minus_l_dot_s, light.specular_exponent)
    return Color(
        _scale_channel(lighting_color.red, factor),
        _scale_channel(lighting_color.green, factor),
        _scale_channel(lighting_color.blue, factor),
    )


def _top_left_normal(img: ImageRef) -> _Normal:
    center = img.alpha_at(0, 0)
    right = img.alpha_at(1, 0)
    bottom = img.alpha_at(0, 1)
    bottom_right = img.alpha_at(1, 1)
    return _Normal.of(
        FACTOR_2_3,
        FACTOR_2_3,
        -2 * center + 2 * right - bottom + bottom_right,
        -2 * center - right + 2 * bottom + bottom_right,
    )


def _top_right_normal(img: ImageRef) -> _Normal:
    left = img.alpha_at(img.width - 2, 0)
    center = img.alpha_at(img.width - 1, 0)
    bottom_left = img.alpha_at(img.width - 2, 1)
    bottom = img.alpha_at(img.width - 1, 1)
    return _Normal.of(
        FACTOR_2_3,
        FACTOR_2_3,
        -2 * left + 2 * center - bottom_left + bottom,
        -left - 2 * center + bottom_left + 2 * bottom,
    )


def _bottom_left_normal(img: ImageRef) -> _Normal:
    top = img.alpha_at(0, img.height - 2)
    top_right = img.alpha_at(1, img.height - 2)
    center = img.alpha_at(0, img.height - 1)
    right = img.alpha_at(1, img.height - 1)
    return _Normal.of(
        FACTOR_2_3,
        FACTOR_2_3,
        -top + top_right - 2 * center + 2 * right,
        -2 * top - top_right + 2 * center + right,
    )


def _bottom_right_normal(img: ImageRef) -> _Normal:
    top_left = img.alpha_at(img.width - 2, img.height - 2)
    top = img.alpha_at(img.width - 1, img.height - 2)
    left = img.alpha_at(img.width - 2, img.height - 1)
    center = img.alpha_at(img.width - 1, img.height - 1)
    return _Normal.of(
        FACTOR_2_3,
        FACTOR_2_3,
        -top_left + top - 2 * left + 2 * center,
        -top_left - 2 * top + left + 2 * center,
    )


def _top_row_normal(img: ImageRef, x: int) -> _Normal:
    left = img.alpha_at(x - 1, 0)
    center = img.alpha_at(x, 0)
    right = img.alpha_at(x + 1, 0)
    bottom_left = img.alpha_at(x - 1, 1)
    bottom = img.alpha_at(x, 1)
    bottom_right = img.alpha_at(x + 1, 1)
    return _Normal.of(
        FACTOR_1_3,
        FACTOR_1_2,
        -2 * left + 2 * right - bottom_left + bottom_right,
        -left - 2 * center - right + bottom_left + 2 * bottom + bottom_right,
    )


def _bottom_row_normal(img: ImageRef, x: int) -> _Normal:
    top_left = img.alpha_at(x - 1, img.height - 2)
    top = img.alpha_at(x, img.height - 2)
    top_right = img.alpha_at(x + 1, img.height - 2)
    left = img.alpha_at(x - 1, img.height - 1)
    center = img.alpha_at(x, img.height - 1)
    right = img.alpha_at(x + 1, img.height - 1)
    return _Normal.of(
        FACTOR_1_3,
        FACTOR_1_2,
        -top_left + top_right - 2 * left + 2 * right,
        -top_left - 2 * top - top_right + left + 2 * center + right,
    )


def _left_column_normal(img: ImageRef, y: int) -> _Normal:
    top = img.alpha_at(0, y - 1)
    top_right = img.alpha_at(1, y - 1)
    center = img.alpha_at(0, y)
    right = img.alpha_at(1, y)
    bottom = img.alpha_at(0, y + 1)
    bottom_right = img.alpha_at(1, y + 1)
    return _Normal.of(
        FACTOR_1_2,
        FACTOR_1_3,
        -top + top_right - 2 * center + 2 * right - bottom + bottom_right,
        -2 * top - top_right + 2 * bottom + bottom_right,
    )


def _right_column_normal(img: ImageRef, y: int) -> _Normal:
    top_left = img.alpha_at(img.width - 2, y - 1)
    top = img.alpha_at(img.width - 1, y - 1)
    left = img.alpha_at(img.width - 2, y)
    center = img.alpha_at(img.width - 1, y)
    bottom_left = img.alpha_at(img.width - 2, y + 1)
    bottom = img.alpha_at(img.width - 1, y + 1)
    return _Normal.of(
        FACTOR_1_2,
        FACTOR_1_3,
        -top_left + top - 2 * left + 2 * center - bottom_left + bottom,
        -top_left - 2 * top + bottom_left + 2 * bottom,
    )


def _interior_normal(img: ImageRef, x: int, y: int) -> _Normal:
    top_left = img.alpha_at(x - 1, y - 1)
    top = img.alpha_at(x, y - 1)
    top_right = img.alpha_at(x + 1, y - 1)
    left = img.alpha_at(x - 1, y)
    right = img.alpha_at(x + 1, y)
    bottom_left = img.alpha_at(x - 1, y + 1)
    bottom = img.alpha_at(x, y + 1)
    bottom_right = img.alpha_at(x + 1, y + 1)
    return _Normal.of(
        FACTOR_1_4,
        FACTOR_1_4,
        -top_left + top_right - 2 * left + 2 * right - bottom_left + bottom_right,
        -top_left - 2 * top - top_right + bottom_left + 2 * bottom + bottom_right,
    )