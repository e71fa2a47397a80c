[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lzhkit"
version = "0.4.0"
description = "Building blocks for reading LHA (.lzh) archives: CRC-16, extended header decoding and the -lh1- decompressor"
requires-python = ">=3.10"
dependencies = []
keywords = ["lha", "lzh", "lharc", "archive", "decompression", "crc16", "huffman"]
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
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["lzhkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
