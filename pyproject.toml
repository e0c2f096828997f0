[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "etals"
version = "0.0.1"
description = "A small directory lister with LS_COLORS support, column layout and a long format"
requires-python = ">=3.10"
dependencies = []
keywords = ["ls", "directory", "listing", "files", "terminal", "colors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
etals = "etals.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["etals"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
