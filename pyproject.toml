[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "showercalib"
version = "0.1.0"
description = "Shower energy calibration providers and a detector material description for particle physics reconstruction"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "physics",
    "calibration",
    "shower",
    "particle-identification",
    "interpolation",
    "akima",
    "spline",
    "reconstruction",
]
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
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["showercalib"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
