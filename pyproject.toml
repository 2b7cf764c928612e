[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hordeshooter"
version = "0.1.0"
description = "Game logic for a top-down horde shooter: monsters, status effects, blood and a simple pygame window"
requires-python = ">=3.10"
keywords = ["game", "shooter", "arcade", "pygame", "top-down"]
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
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hordeshooter = "hordeshooter.game:main"

[tool.hatch.build.targets.wheel]
packages = ["hordeshooter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
