"""Master boot record partition table layout."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import ClassVar

PARTITION_TABLE_OFFSET = 440
PINGUIN_OS_PARTITION_TYPE = 228
SIGNATURE_OFFSET = 510
SIGNATURE = 0xAA55

_SIGNATURE_LAYOUT = struct.Struct("<H")


@dataclass
class PartitionEntry:
    boot_indicator: int = 0
    starting_head: int = 0
    starting_sector: int = 0
    starting_cylinder: int = 0
    partition_type: int = 0
    ending_head: int = 0
    ending_sector: int = 0
    ending_cylinder: int = 0
    starting_lba: int = 0
    ending_lba: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<8BII")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "PartitionEntry":
        if len(data) < cls.SIZE:
            raise ValueError(f"partition entry needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._LAYOUT.unpack_from(data))

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


@dataclass
class PartitionTable:
    disk_id: int = 0
    reserved: int = 0
    entries: tuple[PartitionEntry, ...] = tuple(PartitionEntry() for _ in range(4))

    _HEAD: ClassVar[struct.Struct] = struct.Struct("<IH")
    ENTRY_COUNT: ClassVar[int] = 4
    SIZE: ClassVar[int] = _HEAD.size + ENTRY_COUNT * PartitionEntry.SIZE

    def __post_init__(self) -> None:
        self.entries = tuple(self.entries)
        if len(self.entries) != self.ENTRY_COUNT:
            raise ValueError(f"a partition table has exactly {self.ENTRY_COUNT} entries")

    @classmethod
    def from_bytes(cls, data: bytes) -> "PartitionTable":
        if len(data) < cls.SIZE:
            raise ValueError(f"partition table needs {cls.SIZE} bytes, got {len(data)}")
        disk_id, reserved = cls._HEAD.unpack_from(data)
        entries = tuple(
            PartitionEntry.from_bytes(data[start:start + PartitionEntry.SIZE])
            for start in range(cls._HEAD.size, cls.SIZE, PartitionEntry.SIZE)
        )
        return cls(disk_id, reserved, entries)

    def to_bytes(self) -> bytes:
        head = self._HEAD.pack(self.disk_id, self.reserved)
        return head + b"".join(entry.to_bytes() for entry in self.entries)


def has_signature(sector: bytes) -> bool:
    """True when the sector carries the 0xAA55 boot signature."""
    if len(sector) < SIGNATURE_OFFSET + _SIGNATURE_LAYOUT.size:
        return False
    return _SIGNATURE_LAYOUT.unpack_from(sector, SIGNATURE_OFFSET)[0] == SIGNATURE