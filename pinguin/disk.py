"""Sector-addressed access to a disk image."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import ClassVar

from pinguin.bootloader_errors import DEFAULT_SECTOR_SIZE, BootError, ErrorCode

_REAL_MODE_LIMIT = 0xFFFFF


@dataclass
class DiskAddressPacket:
    """BIOS extended-read disk address packet."""

    size: int
    zero_byte: int
    sectors_read: int
    buffer_offset: int
    buffer_segment: int
    lba_low: int
    lba_high: int

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBHHHII")

    @classmethod
    def for_buffer(cls, address: int, lba: int, sectors: int) -> "DiskAddressPacket":
        """Build a packet targeting ``address``; it must lie below 0xFFFFF."""
        if address >= _REAL_MODE_LIMIT:
            raise BootError(ErrorCode.DAPACK_INIT_ERROR)
        if address <= 0xFFFF:
            offset, segment = address, 0
        else:
            offset = address & 0xF
            segment = (address - offset) >> 4
        return cls(
            size=16,
            zero_byte=0,
            sectors_read=sectors & 0xFFFF,
            buffer_offset=offset,
            buffer_segment=segment,
            lba_low=lba & 0xFFFFFFFF,
            lba_high=(lba >> 32) & 0xFFFFFFFF,
        )

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


class Disk:
    """A disk image read whole sectors at a time."""

    def __init__(self, image: bytes, sector_size: int = DEFAULT_SECTOR_SIZE) -> None:
        if sector_size <= 0:
            raise ValueError("sector size must be positive")
        self.image = bytes(image)
        self.sector_size = sector_size

    @classmethod
    def from_file(cls, path: str | Path) -> "Disk":
        return cls(Path(path).read_bytes())

    @property
    def sector_count(self) -> int:
        return len(self.image) // self.sector_size

    def read(self, lba: int, sectors: int) -> bytes:
        """Return ``sectors`` sectors starting at ``lba``."""
        if lba < 0 or sectors < 0 or lba + sectors > self.sector_count:
            raise BootError(ErrorCode.BIOS_CALL_ERROR)
        start = lba * self.sector_size
        return self.image[start:start + sectors * self.sector_size]