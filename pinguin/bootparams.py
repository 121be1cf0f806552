"""Parameters handed from the bootloader to the kernel."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MEMORY_REGIONS_BUFFER_SIZE = 16


class RamType(IntEnum):
    USABLE = 1
    RESERVED = 2
    ACPI_RECLAIMABLE = 3
    ACPI_NVS = 4
    BAD_MEMORY = 5


@dataclass
class X86MemEntry:
    """A memory region as reported by the BIOS."""

    base: int
    length: int
    type: int
    acpi: int = 0


@dataclass
class MemEntry:
    """A free memory region."""

    base: int
    length: int


def _check_capacity(regions: list, what: str) -> None:
    if len(regions) > MEMORY_REGIONS_BUFFER_SIZE:
        raise ValueError(
            f"{what} holds {len(regions)} entries, at most "
            f"{MEMORY_REGIONS_BUFFER_SIZE} are allowed"
        )


@dataclass
class X86BootParams:
    memory_regions: list[X86MemEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_capacity(self.memory_regions, "memory_regions")


@dataclass
class BootParams:
    boot_drive: int = 0
    stack_begin: int = 0
    free_memory_regions: list[MemEntry] = field(default_factory=list)
    x86_boot_params: X86BootParams = field(default_factory=X86BootParams)

    def __post_init__(self) -> None:
        _check_capacity(self.free_memory_regions, "free_memory_regions")