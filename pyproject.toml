[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stillstand"
version = "0.1.0"
description = "A small TCP database of machines, failures and machine downtimes, with an interactive menu client"
requires-python = ">=3.10"
dependencies = []
keywords = ["downtime", "maintenance", "machines", "tcp", "database"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Manufacturing",
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
stillstand-server = "stillstand.server:main"
stillstand-client = "stillstand.client:main"

[tool.hatch.build.targets.wheel]
packages = ["stillstand"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
