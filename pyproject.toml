[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chesscal"
version = "0.1.0"
description = "Chessboard quad linking, labelling and checks, splines, quaternions, fisheye projection and geometry helpers for camera calibration"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "calibration",
    "chessboard",
    "camera",
    "fisheye",
    "spline",
    "quaternion",
    "utm",
]
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
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chesscal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
