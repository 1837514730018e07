[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gemcascade"
version = "1.0.0"
description = "A match-three gem puzzle game with timetrial and endless modes"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "puzzle", "match-three", "gems", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gemcascade = "gemcascade.game:main"

[tool.hatch.build.targets.wheel]
packages = ["gemcascade"]

[tool.pytest.ini_options]
addopts = "-ra"
