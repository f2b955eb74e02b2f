[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wavesim"
version = "0.1.20"
description = "Array engine, sources and analytical solutions for simulating wave propagation with the modified Born series"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "helmholtz",
    "wave propagation",
    "born series",
    "fft",
    "domain decomposition",
    "simulation",
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["wavesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
