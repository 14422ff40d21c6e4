[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bpstd"
version = "0.12.0"
description = "PSBT key types, raw key-value maps and nSequence/RBF helpers for bitcoin wallets"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitcoin", "psbt", "wallet", "rbf", "bip174", "bip370", "bip371"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bpstd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
