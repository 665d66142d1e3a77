import pytest

from svgfx.image import ImageRef, Rgba, blank_image
from svgfx.lighting import (
    Color,
    DiffuseLighting,
    DistantLight,
    PointLight,
    SpecularLighting,
    SpotLight,
    diffuse_lighting,
    specular_lighting,
)


def flat(width, height, alpha=255):
    return ImageRef(width, height, [Rgba(0, 0, 0, alpha)] * (width * height))


def bump():
    data = [Rgba(0, 0, 0, 0)] * 9
    data[4] = Rgba(0, 0, 0, 255)
    return ImageRef(3, 3, data)


def test_flat_surface_lit_from_above_is_white():
    dest = blank_image(4, 4)
    diffuse_lighting(DiffuseLighting(), DistantLight(0.0, 90.0), flat(4, 4), dest)
    assert dest.data == [Rgba(255, 255, 255, 255)] * 16


def test_flat_surface_lit_from_horizon_is_black():
    dest = blank_image(3, 3)
    diffuse_lighting(DiffuseLighting(), DistantLight(0.0, 0.0), flat(3, 3), dest)
    assert dest.data == [Rgba(0, 0, 0, 255)] * 9


def test_diffuse_constant_scales_colour():
    dest = blank_image(3, 3)
    fe = DiffuseLighting(diffuse_constant=0.5)
    diffuse_lighting(fe, DistantLight(0.0, 90.0), flat(3, 3), dest)
    assert all(p == Rgba(128, 128, 128, 255) for p in dest.data)


def test_lighting_color_is_kept():
    dest = blank_image(3, 3)
    fe = DiffuseLighting(lighting_color=Color(255, 0, 0))
    diffuse_lighting(fe, DistantLight(0.0, 90.0), flat(3, 3), dest)
    assert all(p == Rgba(255, 0, 0, 255) for p in dest.data)


def test_diffuse_alpha_is_always_opaque():
    dest = blank_image(3, 3)
    diffuse_lighting(DiffuseLighting(), PointLight(1.0, 1.0, 5.0), bump(), dest)
    assert all(p.a == 255 for p in dest.data)


def test_bump_darkens_slopes_but_not_flat_centre():
    dest = blank_image(3, 3)
    diffuse_lighting(DiffuseLighting(), DistantLight(0.0, 90.0), bump(), dest)
    assert dest.pixel_at(1, 1).r == 255
    assert dest.pixel_at(0, 0).r < 255


def test_specular_alpha_is_max_of_colour():
    dest = blank_image(3, 3)
    fe = SpecularLighting(specular_exponent=2.0, lighting_color=Color(200, 50, 10))
    specular_lighting(fe, PointLight(1.0, 1.0, 3.0), bump(), dest)
    assert all(p.a == max(p.r, p.g, p.b) for p in dest.data)


def test_specular_flat_surface_from_above():
    dest = blank_image(3, 3)
    specular_lighting(SpecularLighting(), DistantLight(0.0, 90.0), flat(3, 3), dest)
    assert dest.data == [Rgba(255, 255, 255, 255)] * 9


def test_point_light_above_centre_is_symmetric():
    dest = blank_image(5, 5)
    diffuse_lighting(DiffuseLighting(), PointLight(2.0, 2.0, 3.0), flat(5, 5), dest)
    assert dest.pixel_at(0, 0) == dest.pixel_at(4, 4)
    assert dest.pixel_at(0, 2) == dest.pixel_at(4, 2)
    assert dest.pixel_at(2, 2).r >= dest.pixel_at(0, 0).r


def test_spot_light_pointing_away_gives_black():
    dest = blank_image(3, 3)
    light = SpotLight(1.0, 1.0, 10.0, 1.0, 1.0, 20.0)
    diffuse_lighting(DiffuseLighting(), light, flat(3, 3, alpha=0), dest)
    assert all(p == Rgba(0, 0, 0, 255) for p in dest.data)


def test_spot_light_outside_cone_gives_black():
    dest = blank_image(3, 3)
    light = SpotLight(100.0, 1.0, 10.0, 100.0, 1.0, 0.0, limiting_cone_angle=1.0)
    diffuse_lighting(DiffuseLighting(), light, flat(3, 3, alpha=0), dest)
    assert all(p == Rgba(0, 0, 0, 255) for p in dest.data)


def test_small_image_is_left_untouched():
    marker = Rgba(1, 2, 3, 4)
    dest = ImageRef(2, 2, [marker] * 4)
    diffuse_lighting(DiffuseLighting(), DistantLight(0.0, 90.0), flat(2, 2), dest)
    assert dest.data == [marker] * 4


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        specular_lighting(
            SpecularLighting(), DistantLight(), flat(3, 3), blank_image(4, 3)
        )


def test_spot_light_requires_positive_exponent():
    with pytest.raises(ValueError):
        SpotLight(specular_exponent=0.0)