[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corelib"
version = "0.1.0"
description = "Bitmap integer sets, linked lists, hash tables, string helpers, binary streams and text I/O"
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "bitset", "hash map", "linked list", "streams", "text io", "utf-16"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corelib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
