[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "cukewire"
version = "0.1.0"
description = "Step definitions, tagged hooks and a Cucumber JSON wire protocol server"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cucumber",
    "bdd",
    "gherkin",
    "wire-protocol",
    "step-definitions",
    "hooks",
    "testing",
]
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
    "Topic :: Software Development :: Testing",
    "Topic :: Software Development :: Testing :: BDD",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["cukewire*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
