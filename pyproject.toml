[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vultrapi"
version = "0.1.0"
description = "Client library for the Vultr v1 cloud API: firewalls, IP addresses, reserved IPs, private networks, catalogs and server administration"
requires-python = ">=3.10"
dependencies = []
keywords = ["vultr", "cloud", "api", "vps", "firewall", "client"]
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

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vultrapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
