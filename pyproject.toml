[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridtactics"
version = "0.1.0"
description = "Tile grid, spell areas, pathfinding state, turn order and save data for tile-based tactical games"
requires-python = ">=3.10"
dependencies = []
keywords = ["grid", "tactics", "turn-based", "pathfinding", "tiles", "initiative", "save-game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gridtactics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
