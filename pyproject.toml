[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "twitchkit"
version = "0.1.0"
description = "Typed building blocks for Twitch: identifiers, a Helix Get Users client, EventSub replay protection and webhook verification."
requires-python = ">=3.11"
dependencies = [
    "httpx",
]
keywords = ["twitch", "helix", "eventsub", "webhook", "api-client", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["twitchkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
