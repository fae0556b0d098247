[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsdecl"
version = "0.1.0"
description = "Generate TypeScript declarations from descriptions of Rust types with serde and tsify attributes"
requires-python = ">=3.10"
dependencies = []
keywords = ["typescript", "rust", "serde", "code generation", "declarations", "types"]
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tsdecl"]

[tool.hatch.build.targets.sdist]
include = ["tsdecl", "tests", "pyproject.toml"]

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
