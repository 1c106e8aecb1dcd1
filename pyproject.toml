[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reviewer-karma"
version = "1.0.0"
description = "Track pull request reviewer engagement and generate a karma-based leaderboard"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["github", "code-review", "pull-requests", "leaderboard", "karma"]
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
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
reviewer-karma = "reviewer_karma.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["reviewer_karma"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
