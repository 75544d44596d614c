[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simuverse"
version = "0.1.0"
description = "CPU-side data model for particle, fluid, noise and cloth simulations: lattices, meshes, constraints and GPU uniform layouts"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "lattice-boltzmann",
    "position-based-dynamics",
    "cloth",
    "fluid",
    "geometry",
    "noise",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simuverse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
