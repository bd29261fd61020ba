[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskminder"
version = "0.1.0"
description = "A small command-line to-do list with deadlines, recurring tasks and background reminders"
requires-python = ">=3.10"
dependencies = []
keywords = ["todo", "tasks", "reminders", "scheduler", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
taskminder = "taskminder.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["taskminder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
