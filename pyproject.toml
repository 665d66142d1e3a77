[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "svgfx"
version = "0.1.0"
description = "Pure-Python SVG filter primitives: blurs, morphology, lighting, convolution, compositing, component transfer and region geometry."
requires-python = ">=3.10"
dependencies = []
keywords = ["svg", "filter", "blur", "morphology", "lighting", "convolution", "raster", "image"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["svgfx"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
