[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "critscore"
version = "0.1.0"
description = "Configurable criticality scoring of projects from numeric signals, with line/batch iteration, retry, output and logging helpers."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["criticality", "scoring", "metrics", "weighted-mean", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["critscore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
