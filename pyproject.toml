[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rwlocks"
version = "0.1.0"
description = "Reader-preference and writer-preference read/write locks for threads, with an ordering trial to check them"
requires-python = ">=3.10"
dependencies = []
keywords = ["lock", "rwlock", "readers-writers", "threading", "concurrency", "synchronization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rwlocks-trial = "rwlocks.trial:main"

[tool.hatch.build.targets.wheel]
packages = ["rwlocks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
