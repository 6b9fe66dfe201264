[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskkit"
version = "0.1.0"
description = "Desktop utilities: file listing and zip archives, text encoders, a weekly work-time log and a glTF writer for LDraw-style geometry"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "files",
    "zip",
    "base64",
    "url-encoding",
    "sha256",
    "uptime",
    "pmset",
    "gltf",
    "ldraw",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: File Managers",
    "Topic :: Utilities",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
deskkit-tool = "deskkit.encodings:main"
deskkit-uptime = "deskkit.uptime:main"

[tool.hatch.build.targets.wheel]
packages = ["deskkit"]

[tool.hatch.build.targets.sdist]
include = ["deskkit", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
