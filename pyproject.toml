[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "binks"
version = "0.1.0"
description = "An interactive bash-backed shell with built-in commands, git-aware prompts and AI command suggestions"
requires-python = ">=3.10"
keywords = ["shell", "repl", "bash", "terminal", "prompt", "git", "ai"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
binks = "binks.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["binks"]

[tool.pytest.ini_options]
addopts = "-ra"
