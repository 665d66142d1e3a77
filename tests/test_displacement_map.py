import pytest

from svgfx.displacement_map import ColorChannel, DisplacementMap, apply
from svgfx.image import ImageRef, Rgba, blank_image

SRC = [Rgba(i, i, i, 255) for i in range(1, 5)]


def test_zero_scale_copies_source():
    src = ImageRef(2, 2, list(SRC))
    map_image = ImageRef(2, 2, [Rgba(255, 0, 255, 0)] * 4)
    dest = blank_image(2, 2)
    apply(DisplacementMap(0.0), 1.0, 1.0, src, map_image, dest)
    assert dest.data == src.data


def test_canvas_scale_multiplies_offset():
    src = ImageRef(4, 1, list(SRC))
    map_image = ImageRef(4, 1, [Rgba(255, 0, 0, 0)] * 4)
    dest = blank_image(4, 1)
    fe = DisplacementMap(2.0, ColorChannel.R, ColorChannel.R)
    apply(fe, 2.0, 0.0, src, map_image, dest)
    assert dest.data[:2] == SRC[2:]
    assert dest.data[2:] == [Rgba()] * 2


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        apply(
            DisplacementMap(1.0),
            1.0,
            1.0,
            blank_image(2, 2),
            blank_image(1, 2),
            blank_image(2, 2),
        )