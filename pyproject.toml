[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ringkit"
version = "0.1.0"
description = "Utility toolkit for web services: ids, hashing, strings, validation, files, HTTP client and request signature checking"
requires-python = ">=3.10"
keywords = ["toolkit", "web", "signature", "hmac", "id-generator", "http-client", "validation"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "httpx>=0.26",
    "redis>=4.5",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "respx>=0.20",
]

[tool.hatch.build.targets.wheel]
packages = ["ringkit"]

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
ignore_missing_imports = true
