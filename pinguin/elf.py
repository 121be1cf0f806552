"""ELF file and program header layouts."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar

ELF_MAGIC = b"\x7fELF"

_T = TypeVar("_T")


class ElfBitness(IntEnum):
    BITS_32 = 1
    BITS_64 = 2


class ElfEndianness(IntEnum):
    LITTLE = 1
    BIG = 2


class ElfType(IntEnum):
    RELOCATABLE = 1
    EXECUTABLE = 2
    SHARED = 3
    CORE = 3


class InstructionSet(IntEnum):
    NO_SPECIFIC = 0x0
    SPARC = 0x2
    X86 = 0x3
    MIPS = 0x8
    POWER_PC = 0x14
    ARM = 0x28
    SUPER_H = 0x2A
    IA64 = 0x32
    X86_64 = 0x3E
    AARCH64 = 0xB7
    RISC_V = 0xF3


def _unpack(cls: type[_T], layout: struct.Struct, data: bytes) -> _T:
    if len(data) < layout.size:
        raise ValueError(f"{cls.__name__} needs {layout.size} bytes, got {len(data)}")
    return cls(*layout.unpack_from(data))


@dataclass
class ElfHeader32:
    magic: bytes = ELF_MAGIC
    bitness: int = ElfBitness.BITS_32
    endianness: int = ElfEndianness.LITTLE
    header_version: int = 1
    os_abi: int = 0
    padding: int = 0
    type: int = ElfType.EXECUTABLE
    instruction_set: int = InstructionSet.X86
    version: int = 1
    entry: int = 0
    program_header_offset: int = 0
    section_header_offset: int = 0
    flags: int = 0
    header_size: int = 0
    program_header_entry_size: int = 0
    program_header_count: int = 0
    section_header_entry_size: int = 0
    section_header_count: int = 0
    section_names_index: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<4sBBBBQHHIIIIIHHHHHH")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "ElfHeader32":
        return _unpack(cls, cls._LAYOUT, data)

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


@dataclass
class ElfHeader64:
    magic: bytes = ELF_MAGIC
    bitness: int = ElfBitness.BITS_64
    endianness: int = ElfEndianness.LITTLE
    header_version: int = 1
    os_abi: int = 0
    padding: int = 0
    type: int = ElfType.EXECUTABLE
    instruction_set: int = InstructionSet.X86_64
    version: int = 1
    entry: int = 0
    program_header_offset: int = 0
    section_header_offset: int = 0
    flags: int = 0
    header_size: int = 0
    program_header_entry_size: int = 0
    program_header_count: int = 0
    section_header_entry_size: int = 0
    section_header_count: int = 0
    section_names_index: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<4sBBBBQHHIQQQIHHHHHH")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "ElfHeader64":
        return _unpack(cls, cls._LAYOUT, data)

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


@dataclass
class ProgramHeader32:
    segment_type: int = 0
    offset: int = 0
    vaddr: int = 0
    paddr: int = 0
    file_size: int = 0
    memory_size: int = 0
    flags: int = 0
    alignment: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<8I")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProgramHeader32":
        return _unpack(cls, cls._LAYOUT, data)

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


@dataclass
class ProgramHeader64:
    segment_type: int = 0
    flags: int = 0
    offset: int = 0
    vaddr: int = 0
    paddr: int = 0
    file_size: int = 0
    memory_size: int = 0
    alignment: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQQQ")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProgramHeader64":
        return _unpack(cls, cls._LAYOUT, data)

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))