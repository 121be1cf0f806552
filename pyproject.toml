[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinguin"
version = "0.1.0"
description = "A small hobby operating system modelled in Python: second-stage bootloader, disk formats, buddy allocator, keyboard driver and kernel shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["operating-system", "bootloader", "fat16", "elf", "mbr", "buddy-allocator", "vga", "kernel"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pinguin-boot = "pinguin.bootloader:main"
pinguin-kernel = "pinguin.kernel:main"

[tool.hatch.build.targets.wheel]
packages = ["pinguin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
