[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fatshell"
version = "0.1.0"
description = "An interactive shell over a small FAT-style file system stored in a single disk image"
requires-python = ">=3.10"
dependencies = []
keywords = ["fat", "filesystem", "shell", "disk image", "allocation table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fatshell = "fatshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["fatshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
