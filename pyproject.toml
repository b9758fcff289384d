[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libdns"
version = "1.0.0"
description = "Provider-neutral interfaces and record types for reading and changing DNS zones"
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "dns-provider", "resource-records", "zone", "svcb", "https-record"]
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
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["libdns"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
