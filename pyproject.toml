[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tallymetrics"
version = "0.1.0"
description = "Building blocks for metrics reporting: histogram buckets, tag identity hashing, caches, byte-counting transports and M3 reporter options."
requires-python = ">=3.10"
dependencies = []
keywords = ["metrics", "histogram", "buckets", "m3", "monitoring", "murmur3"]
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
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tallymetrics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
