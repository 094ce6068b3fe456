[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "camperception"
version = "0.1.0"
description = "Camera perception building blocks: image buffers, colour conversion, undistortion maps, box geometry and calibration batch streams."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "camera",
    "perception",
    "undistortion",
    "image-processing",
    "bounding-box",
    "calibration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["camperception"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
