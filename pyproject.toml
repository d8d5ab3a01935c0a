[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "embench"
version = "0.1.0"
description = "Building blocks of embedded benchmark kernels: a portable random generator, a bump allocator, block merge sort primitives and a window-lift statechart"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "embedded", "wikisort", "statechart", "allocator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["embench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
