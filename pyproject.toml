[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todokeeper"
version = "0.1.0"
description = "A small command-line to-do list kept in a local SQLite database"
requires-python = ">=3.10"
keywords = ["todo", "tasks", "cli", "sqlite", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
todo = "todokeeper.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["todokeeper"]

[tool.pytest.ini_options]
addopts = "-ra"
