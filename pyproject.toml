[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kivos"
version = "0.1.0"
description = "Building blocks of a small simulated operating system: an in-memory file system, character pipes, streams and command programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "operating-system", "virtual-filesystem", "pipes", "streams"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kivos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
