[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "slbar"
version = "0.1.0"
description = "A small status line generator for X11 window managers and terminals"
requires-python = ">=3.10"
dependencies = []
keywords = ["status", "statusbar", "monitoring", "x11", "system-info"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
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

[project.scripts]
slbar = "slbar.cli:main"

[tool.setuptools.packages.find]
include = ["slbar*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
