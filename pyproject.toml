[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kitutil"
version = "0.1.0"
description = "Small systems utilities: sorted arrays, strict string-to-number parsing, bounded string copies, fd I/O to completion, monotonic clocks, UDP receive helpers and failure injection"
requires-python = ">=3.10"
dependencies = []
keywords = ["sorted array", "strtoul", "strlcpy", "udp", "monotonic clock", "fault injection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
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
packages = ["kitutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
