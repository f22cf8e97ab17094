[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corunner"
version = "0.1.0"
description = "Tasks, a worker-thread executor, result states and generators for thread-based concurrent programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["concurrency", "executor", "threads", "futures", "tasks", "semaphore"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corunner"]

[tool.pytest.ini_options]
addopts = "-ra"
