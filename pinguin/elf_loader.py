"""Loading a 32-bit ELF image from a FAT volume into memory."""

from __future__ import annotations

from pinguin.bootloader_errors import BootError, ErrorCode
from pinguin.elf import ElfHeader32, ProgramHeader32
from pinguin.fat_reader import FatVolume


def load_elf(volume: FatVolume, name: str | bytes, memory: bytearray) -> int:
    """Copy the ELF's loadable segments into ``memory`` at their physical addresses.

    Returns the entry point address.
    """
    handle = volume.open(name)
    raw = handle.read(ElfHeader32.SIZE)
    if len(raw) < ElfHeader32.SIZE or raw[0] != 0x7F:
        raise BootError(ErrorCode.SIGNATURE_VERIFICATION_FAILED)
    header = ElfHeader32.from_bytes(raw)

    def skip_to(offset: int) -> None:
        if offset < handle.pos:
            raise BootError(ErrorCode.INCOMPATIBLE_ELF)
        handle.seek(offset - handle.pos)

    table_size = header.program_header_entry_size * header.program_header_count
    skip_to(header.program_header_offset)
    table = handle.read(table_size)
    segments = [
        ProgramHeader32.from_bytes(table[start:start + ProgramHeader32.SIZE])
        for start in range(0, len(table) - ProgramHeader32.SIZE + 1, ProgramHeader32.SIZE)
    ][: header.program_header_count]

    for segment in segments:
        if not segment.file_size:
            continue
        skip_to(segment.offset)
        data = handle.read(segment.memory_size)
        end = segment.paddr + len(data)
        if end > len(memory):
            raise BootError(ErrorCode.BUFFER_OVERFLOW)
        memory[segment.paddr:end] = data

    return header.entry