[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hmatrix"
version = "0.1.0"
description = "Dense, low-rank and block-structured matrix types with randomized compression, timing and reporting utilities."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "hierarchical matrix",
    "h-matrix",
    "low-rank",
    "linear algebra",
    "randomized svd",
    "morton order",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hmatrix"]

[tool.hatch.build.targets.sdist]
include = ["hmatrix", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
