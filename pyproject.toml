[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexusretro"
version = "0.1.0"
description = "Software rendering core for an 8-bit palette retro game engine: trig tables, palettes, INI config, sprite and tile layer drawing"
requires-python = ">=3.10"
dependencies = []
keywords = ["retro", "game-engine", "palette", "software-renderer", "sprites", "tilemap", "ini"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nexusretro"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
