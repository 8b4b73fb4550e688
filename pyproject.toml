[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ritk"
version = "0.1.0"
description = "Spatial transforms for image registration and NIfTI image input/output"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "image registration",
    "medical imaging",
    "transforms",
    "b-spline",
    "nifti",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ritk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
