[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kochmorse"
version = "0.1.0"
description = "Morse code tutors, rule-based practice text generation and copy verification"
requires-python = ">=3.10"
keywords = ["morse", "cw", "koch", "wordsworth", "ham radio", "tutor", "training"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Education",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kochmorse-textgen = "kochmorse.textgen_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["kochmorse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
