[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scratchkit"
version = "1.0.0"
description = "Three-card poker game engine with small text, table-model and echo utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "poker",
    "three-card",
    "card-game",
    "game-engine",
    "asyncio",
    "text-utilities",
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
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
scratchkit-echo = "scratchkit.echo:main"

[tool.hatch.build.targets.wheel]
packages = ["scratchkit"]

[tool.hatch.build.targets.sdist]
include = [
    "scratchkit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
