[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "x86defs"
version = "0.1.0"
description = "Bit-exact models of x86 32-bit paging entries, EFLAGS, task state segments, APIC interrupt commands and the I/O APIC"
requires-python = ">=3.10"
dependencies = []
keywords = ["x86", "paging", "apic", "ioapic", "eflags", "tss", "osdev"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["x86defs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
