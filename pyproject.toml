[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flightsched"
version = "0.1.0"
description = "Flight scheduling simulation for a single airport: runways, timings, crews, emergencies and delays"
requires-python = ">=3.10"
dependencies = []
keywords = ["airport", "flights", "scheduling", "simulation", "crew"]
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
flightsched = "flightsched.app:main"

[tool.hatch.build.targets.wheel]
packages = ["flightsched"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
