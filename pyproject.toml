[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbxforge"
version = "0.1.0"
description = "In-memory FBX 7.4+ data trees and a binary FBX writer"
requires-python = ">=3.10"
dependencies = []
keywords = ["fbx", "3d", "binary", "writer", "tree"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fbxforge"]

[tool.pytest.ini_options]
addopts = "-ra"
