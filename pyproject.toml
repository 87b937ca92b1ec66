[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stackops"
version = "0.1.0"
description = "Helpers for OpenStack operators: an Identity API client, Ceph storage settings, extra volume propagation and config templating."
requires-python = ">=3.10"
keywords = ["openstack", "keystone", "ceph", "templates", "jinja2", "operators"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "requests",
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["stackops"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
