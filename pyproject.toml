[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpiofeed"
version = "1.0.0"
description = "Replay recorded GPIO frames from a binary command file onto BeagleBone Black sysfs GPIO pins"
requires-python = ">=3.10"
dependencies = []
keywords = ["gpio", "beaglebone", "sysfs", "replay", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gpiofeed = "gpiofeed.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gpiofeed"]

[tool.pytest.ini_options]
addopts = "-ra"
