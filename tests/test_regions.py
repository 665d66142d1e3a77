import pytest

from svgfx.geom import Rect
from svgfx.regions import (
    FilterSpec,
    PrimitiveSpec,
    Units,
    calc_filters_region,
    calc_region,
    calc_subregion,
    resolve_std_dev,
    scale_coordinates,
)

BBOX = Rect.from_xywh(10.0, 20.0, 40.0, 80.0)
UNIT = Rect.from_xywh(0.0, 0.0, 1.0, 1.0)


def test_resolve_std_dev_disabled_for_zero():
    assert resolve_std_dev(0.0, 0.0) is None


def test_resolve_std_dev_small_uses_iir():
    assert resolve_std_dev(1.0, 1.5) == (1.0, 1.5, False)


def test_resolve_std_dev_threshold_selects_box_blur():
    assert resolve_std_dev(2.0, 1.0) == (2.0, 1.0, True)


def test_resolve_std_dev_ignores_tiny_sigma():
    assert resolve_std_dev(0.04, 1.0) == (0.0, 1.0, False)


def test_scale_coordinates_user_space_is_identity():
    assert scale_coordinates(3.0, 4.0, Units.USER_SPACE_ON_USE, None) == (3.0, 4.0)


def test_scale_coordinates_bbox_requires_bbox():
    assert scale_coordinates(1.0, 1.0, Units.OBJECT_BOUNDING_BOX, None) is None


def test_scale_coordinates_unit_maps_to_bbox_size():
    assert scale_coordinates(1.0, 1.0, Units.OBJECT_BOUNDING_BOX, BBOX) == (
        BBOX.width,
        BBOX.height,
    )


def test_calc_region_unit_rect_equals_bbox():
    spec = FilterSpec(rect=UNIT, units=Units.OBJECT_BOUNDING_BOX)
    assert calc_region(spec, BBOX) == BBOX


def test_calc_region_user_space_keeps_rect():
    rect = Rect.from_xywh(1.0, 2.0, 3.0, 4.0)
    spec = FilterSpec(rect=rect, units=Units.USER_SPACE_ON_USE)
    assert calc_region(spec, None) == rect


def test_calc_region_bbox_units_without_bbox():
    assert calc_region(FilterSpec(rect=UNIT), None) is None


def test_calc_filters_region_union():
    r1 = Rect.from_xywh(0.0, 0.0, 10.0, 10.0)
    r2 = Rect.from_xywh(5.0, 5.0, 10.0, 10.0)
    specs = [
        FilterSpec(rect=r1, units=Units.USER_SPACE_ON_USE),
        FilterSpec(rect=r2, units=Units.USER_SPACE_ON_USE),
    ]
    assert calc_filters_region(specs, None) == r1.expand(r2)


def test_calc_filters_region_empty():
    assert calc_filters_region([], BBOX) is None


def test_calc_filters_region_skips_unresolvable():
    r1 = Rect.from_xywh(0.0, 0.0, 10.0, 10.0)
    specs = [FilterSpec(rect=UNIT), FilterSpec(rect=r1, units=Units.USER_SPACE_ON_USE)]
    assert calc_filters_region(specs, None) == r1


def test_calc_subregion_user_space_defaults_to_region():
    spec = FilterSpec(rect=BBOX, units=Units.USER_SPACE_ON_USE)
    assert calc_subregion(spec, PrimitiveSpec(), None, BBOX) == BBOX


def test_calc_subregion_user_space_partial_override():
    spec = FilterSpec(rect=BBOX, units=Units.USER_SPACE_ON_USE)
    result = calc_subregion(spec, PrimitiveSpec(x=15.0), None, BBOX)
    assert (result.x, result.y, result.width, result.height) == (
        15.0,
        BBOX.y,
        BBOX.width,
        BBOX.height,
    )


def test_calc_subregion_zero_width_is_invalid():
    spec = FilterSpec(rect=BBOX, units=Units.USER_SPACE_ON_USE)
    assert calc_subregion(spec, PrimitiveSpec(width=0.0), None, BBOX) is None


def test_calc_subregion_flood_needs_bbox():
    spec = FilterSpec(rect=UNIT, primitive_units=Units.OBJECT_BOUNDING_BOX)
    assert calc_subregion(spec, PrimitiveSpec(kind="flood"), None, BBOX) is None


@pytest.mark.parametrize("kind", ["flood", "image"])
def test_calc_subregion_flood_uses_object_bbox(kind):
    spec = FilterSpec(rect=UNIT, primitive_units=Units.OBJECT_BOUNDING_BOX)
    region = Rect.from_xywh(0.0, 0.0, 500.0, 500.0)
    assert calc_subregion(spec, PrimitiveSpec(kind=kind), BBOX, region) == BBOX


def test_calc_subregion_bbox_units_default_keeps_region():
    spec = FilterSpec(rect=UNIT, primitive_units=Units.OBJECT_BOUNDING_BOX)
    assert calc_subregion(spec, PrimitiveSpec(), BBOX, BBOX) == BBOX