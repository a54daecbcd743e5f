[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lowengine"
version = "0.1.0"
description = "Sprite-sheet animation clips, LDTk tile maps, grid pathfinding and an asset library for 2D games"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["game", "tilemap", "ldtk", "pathfinding", "a-star", "sprite-sheet", "animation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lowengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
