[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tarman"
version = "0.1.0"
description = "A portable, simple package manager for applications shipped as tar archives"
requires-python = ">=3.10"
dependencies = []
keywords = ["package manager", "tar", "archive", "installer", "repository"]
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
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tarman = "tarman.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tarman"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
