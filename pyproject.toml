[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consoletris"
version = "0.1.0"
description = "A falling-block puzzle game for the terminal, with ghost pieces and line clears"
requires-python = ">=3.10"
keywords = ["tetris", "game", "terminal", "puzzle", "console"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
consoletris = "consoletris.game:main"

[tool.hatch.build.targets.wheel]
packages = ["consoletris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
