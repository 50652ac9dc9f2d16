[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "openhems"
version = "0.1.0"
description = "Home energy management: schedule switches on off-peak hours and surplus solar power"
requires-python = ">=3.10"
keywords = ["energy", "home-automation", "hems", "solar", "off-peak", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["openhems"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
