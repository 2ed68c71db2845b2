[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "pmvskit"
version = "0.1.0"
description = "Small vector and matrix types, least squares, and Harris and difference-of-Gaussians feature detectors for multi-view stereo"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["multi-view stereo", "feature detection", "harris", "dog", "linear algebra", "computer vision"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["pmvskit*"]

[tool.pytest.ini_options]
addopts = "-ra"
