[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wokkibot"
version = "0.1.0"
description = "Chat bot building blocks: trivia answer checking, minesweeper, music queues, video downloads, OAuth login and a name importer"
requires-python = ">=3.10"
keywords = ["chat", "bot", "trivia", "minesweeper", "yt-dlp", "ffmpeg", "oauth"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wokkibot-import = "wokkibot.importer:main"

[tool.hatch.build.targets.wheel]
packages = ["wokkibot"]

[tool.hatch.build.targets.sdist]
include = ["wokkibot", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
