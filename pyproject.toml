[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "recel"
version = "0.1.0"
description = "Pixel-art upscaling driven by per-colour distance maps, with small PNG/BMP/TGA/HDR writers"
requires-python = ">=3.10"
keywords = ["pixel-art", "upscaling", "distance-map", "png", "bmp", "tga", "hdr", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
recel = "recel.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["recel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
