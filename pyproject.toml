[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chirpline"
version = "1.0.0"
description = "A small microblogging HTTP API: post short messages, follow users and read a home timeline."
requires-python = ">=3.10"
keywords = ["microblog", "timeline", "tweets", "follow", "flask", "redis", "postgresql", "rest-api"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask>=2.2",
    "redis>=4.5",
    "sqlalchemy>=2.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
chirpline = "chirpline.app:main"

[tool.hatch.build.targets.wheel]
packages = ["chirpline"]

[tool.hatch.build.targets.sdist]
include = ["chirpline", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
