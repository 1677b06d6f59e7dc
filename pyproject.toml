[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphprinter"
version = "0.1.0"
description = "Plot time series from JSON and SQLite files as line, impulse or scatter charts and print them to PDF"
requires-python = ">=3.10"
keywords = ["chart", "plot", "time series", "sqlite", "json", "pdf", "matplotlib"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
graphprinter = "graphprinter.app:main"

[tool.hatch.build.targets.wheel]
packages = ["graphprinter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
