[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sobjectkit"
version = "3.0.0"
description = "Client for the Salesforce SObject REST resources and the composite SObject Tree API."
requires-python = ">=3.10"
dependencies = [
    "requests>=2.28",
]
keywords = ["salesforce", "sobject", "rest", "api", "crm", "composite-tree"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["sobjectkit"]

[tool.hatch.build.targets.sdist]
include = ["sobjectkit", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
