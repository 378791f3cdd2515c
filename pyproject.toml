[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reckon"
version = "0.1.0"
description = "A terminal productivity tool combining a daily markdown journal with multi-day task tracking"
requires-python = ">=3.10"
keywords = ["journal", "tasks", "productivity", "markdown", "terminal", "tui", "curses"]
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
    "Topic :: Office/Business :: News/Diary",
]
dependencies = [
    "pyyaml>=6.0",
    "watchdog>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
rk = "reckon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["reckon"]

[tool.pytest.ini_options]
addopts = "-ra"
