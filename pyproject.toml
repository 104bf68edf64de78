[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cxkit"
version = "0.1.0"
description = "Building blocks: chained hash map, UTF-8 byte helpers, compact JSON writer, buffer queue and pool allocator"
requires-python = ">=3.10"
dependencies = []
keywords = ["hashmap", "fnv1a", "utf8", "json", "queue", "allocator", "pool"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
