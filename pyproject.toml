[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rbxdoc"
version = "0.1.0"
description = "Reader for binary Roblox model and place files (.rbxm, .rbxl)"
requires-python = ">=3.10"
keywords = ["roblox", "rbxm", "rbxl", "binary", "parser", "file-format"]
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
    "Topic :: File Formats",
]
dependencies = [
    "lz4",
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
    "lz4",
    "zstandard",
]

[tool.hatch.build.targets.wheel]
packages = ["rbxdoc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
