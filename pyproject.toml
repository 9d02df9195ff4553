[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagedb"
version = "0.1.0"
description = "A tiny single-table database that stores fixed-size rows in pages of a file, with an interactive prompt"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "pager", "repl", "storage", "rows"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pagedb = "pagedb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pagedb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
