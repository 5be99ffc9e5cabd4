[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minivcs"
version = "0.1.0"
description = "A small content-addressed version control system for a single working directory"
requires-python = ">=3.10"
dependencies = []
keywords = ["vcs", "version-control", "commit", "branch", "sha256"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vcs = "minivcs.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minivcs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
