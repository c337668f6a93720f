[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orydevkit"
version = "0.1.0"
description = "Developer tools for CI pipelines, monorepo change detection, file headers and Markdown rendering"
requires-python = ">=3.10"
keywords = ["ci", "monorepo", "circleci", "github-actions", "headers", "markdown", "developer-tools"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml>=6.0",
    "markdown-it-py>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
orydevkit = "orydevkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["orydevkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
