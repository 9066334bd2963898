[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atpkit"
version = "0.1.0"
description = "Application helpers: base64 and JSON codecs, memory pools, Redis access, HTTP POST clients, RSA crypto and UUIDs"
requires-python = ">=3.10"
keywords = ["base64", "json", "memory-pool", "redis", "https", "rsa", "uuid"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "redis",
    "requests",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["atpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
