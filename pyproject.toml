[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "grafanaop"
version = "4.0.1"
description = "Helpers for keeping Grafana notification channels, datasources and dashboards in step with declared resources"
requires-python = ">=3.10"
dependencies = [
    "requests",
    "pyyaml",
]
keywords = ["grafana", "kubernetes", "operator", "datasources", "notification-channels"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
grafanaop = "grafanaop.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["grafanaop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
