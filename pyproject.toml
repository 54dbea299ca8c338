[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vegsim"
version = "0.1.0"
description = "Tree growth simulation with shadow voxels, space-colonisation markers, resource distribution and pruning rules"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tree",
    "growth",
    "simulation",
    "botany",
    "pruning",
    "espalier",
    "space colonisation",
    "borchert-honda",
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
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vegsim"]

[tool.pytest.ini_options]
addopts = "-ra"
