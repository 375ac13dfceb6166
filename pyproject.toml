[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bmcwire"
version = "0.1.0"
description = "IPMI v2.0 and DCMI wire formats, RAKP session cryptography, AES-128-CBC confidentiality and a UDP transport for BMCs"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["ipmi", "dcmi", "bmc", "rmcp", "rakp", "out-of-band", "server-management"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: System :: Hardware",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bmcwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
