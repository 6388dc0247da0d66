[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmvision"
version = "0.1.0"
description = "Aiming utilities for vision systems: Kalman and particle filters, trajectory and manual compensation, PnP and rotations"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["kalman-filter", "particle-filter", "pnp", "ballistics", "trajectory", "rotation", "computer-vision"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rmvision"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
