[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "numdiff"
version = "1.0.0"
description = "Compare two numerical data files line by line within a relative tolerance"
requires-python = ">=3.10"
dependencies = []
keywords = ["diff", "numeric", "tolerance", "comparison", "data files"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
diff-numerics = "numdiff.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["numdiff"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
