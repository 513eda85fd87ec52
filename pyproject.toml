[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rushhour"
version = "0.1.0"
description = "A grid-based city driving game: pick up passengers or deliver packages before time or fuel runs out."
requires-python = ">=3.10"
keywords = ["game", "taxi", "delivery", "pygame", "arcade", "grid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rushhour = "rushhour.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rushhour"]

[tool.pytest.ini_options]
addopts = "-ra"
