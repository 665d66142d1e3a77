"""Filter regions, primitive subregions and unit conversions."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from functools import reduce

from .geom import Rect

# Four ULPs of the smallest positive single precision value.
_APPROX_ZERO = 4 * 2.0**-149

# Sigmas at or above this value are blurred with a box blur instead of IIR.
BLUR_SIGMA_THRESHOLD = 2.0

# Sigmas below this value are ignored.
_TINY_SIGMA = 0.05


class Units(enum.Enum):
    """The coordinate system of a filter or primitive region."""

    USER_SPACE_ON_USE = "userSpaceOnUse"
    OBJECT_BOUNDING_BOX = "objectBoundingBox"


@dataclass(frozen=True)
class FilterSpec:
    """The region settings of a filter element."""

    rect: Rect
    units: Units = Units.OBJECT_BOUNDING_BOX
    primitive_units: Units = Units.USER_SPACE_ON_USE


@dataclass(frozen=True)
class PrimitiveSpec:
    """The subregion settings of a filter primitive.

    ``kind`` is the primitive name; ``"flood"`` and ``"image"`` take their
    subregion from the object bounding box.
    """

    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    kind: str = ""


def _non_zero_rect(x: float, y: float, width: float, height: float) -> Rect | None:
    values = (x, y, width, height, x + width, y + height)
    if not all(math.isfinite(v) for v in values):
        return None
    if width <= 0 or height <= 0:
        return None
    return Rect.from_xywh(x, y, width, height)


def _as_non_zero(rect: Rect) -> Rect | None:
    return rect if rect.is_non_zero else None


def resolve_std_dev(std_dx: float, std_dy: float) -> tuple[float, float, bool] | None:
    """Resolves blur sigmas for the current transform.

    Returns None when the blur is disabled. The last item tells whether a
    box blur should be used instead of an IIR blur.
    """
    if abs(std_dx) <= _APPROX_ZERO and abs(std_dy) <= _APPROX_ZERO:
        return None

    # Tiny sigmas can turn an IIR blur result fully transparent.
    if std_dx < _TINY_SIGMA:
        std_dx = 0.0
    if std_dy < _TINY_SIGMA:
        std_dy = 0.0

    use_box_blur = std_dx >= BLUR_SIGMA_THRESHOLD or std_dy >= BLUR_SIGMA_THRESHOLD
    return float(std_dx), float(std_dy), use_box_blur


def scale_coordinates(
    x: float, y: float, units: Units, bbox: Rect | None
) -> tuple[float, float] | None:
    """Converts coordinates from bounding-box units into user space."""
    if units is Units.OBJECT_BOUNDING_BOX:
        if bbox is None:
            return None
        return x * bbox.width, y * bbox.height
    return x, y


def calc_region(filter_spec: FilterSpec, object_bbox: Rect | None) -> Rect | None:
    """Returns the region of a single filter in user space."""
    if filter_spec.units is Units.OBJECT_BOUNDING_BOX:
        if object_bbox is None:
            return None
        return _as_non_zero(filter_spec.rect.bbox_transform(object_bbox))
    return filter_spec.rect


def calc_filters_region(
    filter_specs: list[FilterSpec], object_bbox: Rect | None
) -> Rect | None:
    """Returns the union of all filter regions, or None when there is none."""
    regions = [
        region
        for region in (calc_region(spec, object_bbox) for spec in filter_specs)
        if region is not None
    ]
    if not regions:
        return None
    return _as_non_zero(reduce(Rect.expand, regions))


def calc_subregion(
    filter_spec: FilterSpec,
    primitive: PrimitiveSpec,
    bbox: Rect | None,
    region: Rect,
) -> Rect | None:
    """Returns the subregion of a primitive inside the filter ``region``."""
    obb = filter_spec.primitive_units is Units.OBJECT_BOUNDING_BOX

    def unit_rect() -> Rect | None:
        return _non_zero_rect(
            0.0 if primitive.x is None else primitive.x,
            0.0 if primitive.y is None else primitive.y,
            1.0 if primitive.width is None else primitive.width,
            1.0 if primitive.height is None else primitive.height,
        )

    if primitive.kind in ("flood", "image") and obb:
        if bbox is None:
            return None
        rect = unit_rect()
        if rect is None:
            return None
        return rect.bbox_transform(bbox)

    if obb:
        subregion_bbox = unit_rect()
        if subregion_bbox is None:
            return None
        return _as_non_zero(region.bbox_transform(subregion_bbox))

    return _non_zero_rect(
        region.x if primitive.x is None else primitive.x,
        region.y if primitive.y is None else primitive.y,
        region.width if primitive.width is None else primitive.width,
        region.height if primitive.height is None else primitive.height,
    )