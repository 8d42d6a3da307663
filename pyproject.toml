[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "statusd"
version = "0.1.0"
description = "Status server for a chat system: assigns clients to the least loaded chat server and issues login tokens"
requires-python = ">=3.10"
keywords = ["chat", "status", "load-balancing", "redis", "grpc", "tokens"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "redis",
    "grpcio",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
statusd = "statusd.server:main"

[tool.hatch.build.targets.wheel]
packages = ["statusd"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
