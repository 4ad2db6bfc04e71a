[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softraster"
version = "0.1.0"
description = "A small CPU software rasterizer that renders Wavefront OBJ meshes in a window"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["rasterizer", "software rendering", "3d", "wavefront", "obj", "z-buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
softraster = "softraster.app:main"

[tool.hatch.build.targets.wheel]
packages = ["softraster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
