[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smgr"
version = "0.1.0"
description = "Manage Semantic Versioning compliant versions: filter, fetch and increment them."
requires-python = ">=3.10"
keywords = ["semver", "semantic-versioning", "versions", "tags", "release"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "semver>=3.0",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
smgr = "smgr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["smgr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
