[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schwabmd"
version = "0.1.0"
description = "Typed HTTP client for the Schwab Market Data API: option chains, expiration chains, market hours, movers, instruments and price history."
requires-python = ">=3.11"
dependencies = [
    "httpx",
]
keywords = ["schwab", "market data", "options", "option chain", "finance", "api client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["schwabmd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
strict = true
packages = ["schwabmd"]
