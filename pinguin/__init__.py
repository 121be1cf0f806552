"""A small hobby operating system: disk formats, second-stage bootloader and kernel components."""

__version__ = "0.1.0"