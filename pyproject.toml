[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reedkit"
version = "0.1.0"
description = "Line-editor building blocks: edit commands, events, command history with file and SQLite storage, history cursors and hints"
requires-python = ">=3.10"
dependencies = ["portalocker"]
keywords = ["readline", "line-editor", "history", "shell", "hints"]
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
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["reedkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
