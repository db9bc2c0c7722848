[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotf"
version = "0.1.0"
description = "Wire protocol, UDP state relay, unit logic and path finding for a robots-versus-demons strategy game"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game",
    "strategy",
    "pathfinding",
    "udp",
    "multiplayer",
    "game-server",
    "interpolation",
]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dotf-server = "dotf.server:main"

[tool.hatch.build.targets.wheel]
packages = ["dotf"]

[tool.pytest.ini_options]
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
