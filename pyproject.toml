[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubrender"
version = "0.1.0"
description = "A small ray-casting maze renderer that reads .cub scene files"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["raycasting", "maze", "renderer", "game", "cub", "xpm", "bmp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubrender = "cubrender.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubrender"]

[tool.pytest.ini_options]
addopts = "-ra"
