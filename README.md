# svgfx

Pure-Python implementations of SVG filter effect primitives, working on
simple in-memory RGBA images. No third-party dependencies.

## Modules

- `svgfx.geom`: `IntRect` (integer position, positive size) and `Rect`
  (float position, non-negative size), with `from_xywh`, `from_ltrb`,
  `translate`, `translate_to`, `bbox_transform`, `expand` and
  `to_int_rect`; `fit_to_rect(rect, bounds)` clips a rectangle to bounds
  and returns `None` when nothing is left.
- `svgfx.image`: the `ImageRef` row-major pixel buffer of `Rgba` pixels
  (`pixel_at`, `set_pixel`, `alpha_at`, `copy`), `blank_image`, `bound`,
  `multiply_alpha` / `demultiply_alpha`, `into_linear_rgb` /
  `from_linear_rgb`, `convert_color_space` between the two
  `ColorInterpolation` values, and `source_alpha`.
- `svgfx.regions`: `Units`, `FilterSpec`, `PrimitiveSpec` and the region
  helpers `calc_region`, `calc_filters_region`, `calc_subregion`,
  `scale_coordinates` and `resolve_std_dev` (which also chooses between a
  box blur and an IIR blur).
- `svgfx.box_blur` and `svgfx.iir_blur`: Gaussian blur approximations,
  `apply(sigma_x, sigma_y, image)`, in place, on premultiplied pixels.
- `svgfx.morphology`: `apply(MorphologyOperator.ERODE | DILATE, rx, ry, image)`.
- `svgfx.composite`: `arithmetic(k1, k2, k3, k4, src1, src2, dest)`.
- `svgfx.component_transfer`: `Identity`, `Table`, `Discrete`, `Linear`,
  `Gamma` per channel in a `ComponentTransfer`, applied by `apply`.
- `svgfx.convolve_matrix`: `KernelMatrix`, `ConvolveMatrix` with an
  `EdgeMode`, applied by `apply`.
- `svgfx.displacement_map`: `DisplacementMap` with `ColorChannel`
  selectors; `apply(fe, sx, sy, src, map_image, dest)`.
- `svgfx.lighting`: `diffuse_lighting` and `specular_lighting` with a
  `DistantLight`, `PointLight` or `SpotLight` source and a `Color`.

Each primitive either changes an `ImageRef` in place or writes into a
destination image. Its docstring says whether it expects premultiplied or
unpremultiplied alpha. Functions that take several images raise
`ValueError` when their sizes differ.

## Example

```python
from svgfx import box_blur, morphology
from svgfx.image import Rgba, blank_image

image = blank_image(16, 16)
image.set_pixel(8, 8, Rgba(255, 0, 0, 255))

box_blur.apply(3.0, 3.0, image)
morphology.apply(morphology.MorphologyOperator.DILATE, 1.0, 1.0, image)

print(image.pixel_at(8, 8))
```

## What it does not do

- It does not parse or render SVG documents, and it has no command-line
  tool.
- It does not run a whole filter chain: there is no code that resolves
  primitive inputs and results by name, clips results to subregions, or
  draws the filtered image back onto a canvas. You call each primitive
  yourself.
- There is no colour matrix primitive (matrix, saturate, hue-rotate,
  luminance-to-alpha) and no turbulence or fractal noise generator.
- There is no flood, offset, blend, merge, tile, image or drop shadow
  primitive.
- Images are not read from or written to files.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```