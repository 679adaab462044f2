[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mailboxchess"
version = "0.1.0"
description = "A chess engine core: board, move generation, Zobrist hashing, draw rules, FEN and SAN."
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "fen", "san", "zobrist", "polyglot", "move generation", "perft"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mailboxchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
