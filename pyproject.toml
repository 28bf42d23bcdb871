[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pitchpaddle"
version = "0.1.0"
description = "A rhythm-paddle game modelled on an eight-digit seven-segment display, with an unattended simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "seven-segment", "music", "rhythm", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pitchpaddle = "pitchpaddle.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pitchpaddle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
