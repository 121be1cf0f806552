"""Building the boot memory map from E820 BIOS results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pinguin.bootloader_errors import BootError, ErrorCode
from pinguin.bootparams import (
    MEMORY_REGIONS_BUFFER_SIZE,
    BootParams,
    MemEntry,
    RamType,
    X86MemEntry,
)


@dataclass
class E820Entry:
    """One answer of the E820 memory detection call."""

    base: int
    length: int
    type: int
    acpi: int = 1


def detect_memory(params: BootParams, entries: Iterable[E820Entry]) -> None:
    """Fill ``params`` from successive E820 answers; the last answer ends the list."""
    answers = list(entries)
    regions = params.x86_boot_params.memory_regions
    for call, index in enumerate(range(len(regions), MEMORY_REGIONS_BUFFER_SIZE)):
        if call >= len(answers):
            raise BootError(ErrorCode.BIOS_CALL_ERROR)
        entry = answers[call]
        regions.append(X86MemEntry(entry.base, entry.length, entry.type, entry.acpi))
        if entry.type == RamType.USABLE:
            params.free_memory_regions.append(MemEntry(entry.base, entry.length))
        if call == len(answers) - 1:
            # The region count is set to the index of the final answer.
            del regions[index:]
            return
    raise BootError(ErrorCode.BUFFER_OVERFLOW)