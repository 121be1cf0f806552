"""Second boot stage: find the partition, read the kernel ELF and hand over boot parameters."""

from __future__ import annotations

import argparse
from collections.abc import Iterable

from pinguin.bootloader_errors import BootError, describe
from pinguin.bootparams import BootParams, RamType
from pinguin.disk import Disk
from pinguin.elf_loader import load_elf
from pinguin.fat_reader import FatVolume
from pinguin.fmt import format_message
from pinguin.memory_map import E820Entry, detect_memory
from pinguin.partition import find_partition
from pinguin.terminal import Terminal

KERNEL_FILE_NAME = "KERNEL  ELF"
STACK_BEGIN = 0x8000
BOOT_DRIVE = 0
TERMINAL_WIDTH = 80
TERMINAL_HEIGHT = 25
DEFAULT_MEMORY_SIZE = 16 * 1024 * 1024


def boot(
    disk: Disk,
    e820_entries: Iterable[E820Entry],
    memory: bytearray,
) -> tuple[BootParams, int]:
    """Load the kernel into ``memory``; return the boot parameters and the entry point."""
    params = BootParams(boot_drive=BOOT_DRIVE, stack_begin=STACK_BEGIN)
    detect_memory(params, e820_entries)
    table, index = find_partition(disk)
    volume = FatVolume(disk, table.entries[index])
    entry = load_elf(volume, KERNEL_FILE_NAME, memory)
    return params, entry


def _default_memory_map(size: int) -> list[E820Entry]:
    return [
        E820Entry(0, 0x9FC00, RamType.USABLE),
        E820Entry(0x9FC00, 0x400, RamType.RESERVED),
        E820Entry(0x100000, size - 0x100000, RamType.USABLE),
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load a kernel from a disk image.")
    parser.add_argument("image", help="path of the disk image")
    args = parser.parse_args(argv)

    terminal = Terminal(TERMINAL_WIDTH, TERMINAL_HEIGHT)
    output: list[str] = []

    def emit(text: str) -> None:
        terminal.write(text)
        output.append(text)

    memory = bytearray(DEFAULT_MEMORY_SIZE)
    try:
        params, entry = boot(Disk.from_file(args.image), _default_memory_map(len(memory)), memory)
    except BootError as error:
        emit(f"STAGE2 error: {describe(error.code)}\n")
        print("".join(output), end="")
        return 1
    emit(format_message("Kernel entry: %x\n", entry))
    emit(format_message("Free memory regions: %d\n", len(params.free_memory_regions)))
    print("".join(output), end="")
    return 0