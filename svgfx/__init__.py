"""SVG filter effect primitives and region geometry for in-memory RGBA images."""

__version__ = "0.1.0"

__all__ = [
    "box_blur",
    "component_transfer",
    "composite",
    "convolve_matrix",
    "displacement_map",
    "geom",
    "iir_blur",
    "image",
    "lighting",
    "morphology",
    "regions",
]