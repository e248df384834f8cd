[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miniscript"
version = "0.1.0"
description = "Building blocks of a MiniScript runtime: keywords and token kinds, intrinsic functions, containers, date formatting and keyboard input."
requires-python = ">=3.10"
dependencies = []
keywords = ["miniscript", "interpreter", "scripting", "intrinsics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["miniscript"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
