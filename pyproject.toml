[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raymarch"
version = "0.1.0"
description = "Bit-accurate fixed-point ray marching over distance-transform maps for particle-filter localisation"
requires-python = ">=3.10"
dependencies = []
keywords = ["ray marching", "particle filter", "localisation", "fixed point", "lidar", "distance transform"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raymarch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
