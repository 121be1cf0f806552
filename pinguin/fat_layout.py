"""FAT16 and FAT32 on-disk structures and volume geometry."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import ClassVar

FAT16_FILENAME_LEN = 11
FAT16_FINAL_CLUSTER = 0xFFF8
DIR_ENTRY_SIZE = 32


@dataclass
class Fat16BootSector:
    """FAT16 BIOS parameter block, as it sits at the start of the volume boot record."""

    bootjmp: bytes = b"\x00\x00\x00"
    oem_identifier: bytes = b"\x00" * 8
    bytes_per_sector: int = 512
    sectors_per_cluster: int = 1
    reserved_sectors: int = 0
    fat_count: int = 0
    root_dir_entries: int = 0
    sectors_per_volume_u16: int = 0
    media_descriptor_type: int = 0
    sectors_per_fat: int = 0
    sectors_per_track: int = 0
    number_of_heads: int = 0
    part_begin_lba: int = 0
    sectors_per_volume_u32: int = 0
    drive_number: int = 0
    windows_nt_flags: int = 0
    signature: int = 0
    volume_id: int = 0
    volume_label: bytes = b" " * 11
    system_identifier: bytes = b" " * 8

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<3s8sHBHBHHBHHHIIBBBI11s8s")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fat16BootSector":
        if len(data) < cls.SIZE:
            raise ValueError(f"FAT16 boot sector needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._LAYOUT.unpack_from(data))

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))

    def sectors_per_volume(self) -> int:
        return self.sectors_per_volume_u16 or self.sectors_per_volume_u32

    def fat_lba(self) -> int:
        return self.part_begin_lba + self.reserved_sectors

    def root_dir_lba(self) -> int:
        return self.fat_lba() + self.fat_count * self.sectors_per_fat

    def root_dir_sectors(self) -> int:
        return (
            self.root_dir_entries * DIR_ENTRY_SIZE + self.bytes_per_sector - 1
        ) // self.bytes_per_sector

    def data_lba(self) -> int:
        return self.root_dir_lba() + self.root_dir_sectors()

    def data_sectors(self) -> int:
        return self.sectors_per_volume() - self.data_lba()

    def total_clusters(self) -> int:
        return self.data_sectors() // self.sectors_per_cluster

    def cluster_lba(self, cluster: int) -> int:
        return self.data_lba() + (cluster - 2) * self.sectors_per_cluster

    def bytes_per_cluster(self) -> int:
        return self.bytes_per_sector * self.sectors_per_cluster


@dataclass
class Fat16DirEntry:
    """A 32-byte FAT16 directory entry."""

    filename: bytes = b" " * FAT16_FILENAME_LEN
    attr: int = 0
    ntres: int = 0
    creation_time_tenth: int = 0
    creation_time: int = 0
    creation_date: int = 0
    last_access_date: int = 0
    first_cluster_high: int = 0
    write_time: int = 0
    write_date: int = 0
    first_cluster_low: int = 0
    file_size: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<11sBBBHHHHHHHI")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fat16DirEntry":
        if len(data) < cls.SIZE:
            raise ValueError(f"directory entry needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._LAYOUT.unpack_from(data))

    def to_bytes(self) -> bytes:
        return self._LAYOUT.pack(*astuple(self))


@dataclass
class Fat32BootSector:
    """FAT32 BIOS parameter block with its extended fields."""

    bootjmp: bytes = b"\x00\x00\x00"
    oem_identifier: bytes = b"\x00" * 8
    bytes_per_sector: int = 512
    sectors_per_cluster: int = 1
    reserved_sectors: int = 0
    fat_count: int = 0
    root_dir_entries: int = 0
    sectors_per_volume_u16: int = 0
    media_descriptor_type: int = 0
    sectors_per_fat_u16: int = 0
    sectors_per_track: int = 0
    number_of_heads: int = 0
    part_begin_lba: int = 0
    sectors_per_volume_u32: int = 0
    sectors_per_fat: int = 0
    flags: int = 0
    fat_version_number: int = 0
    root_cluster: int = 0
    fsinfo_sector: int = 0
    backup_boot_sector: int = 0
    reserved: bytes = b"\x00" * 12
    drive_number: int = 0
    windows_nt_flags: int = 0
    signature: int = 0
    volume_id: int = 0
    volume_label: bytes = b" " * 11
    system_identifier: bytes = b" " * 8

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<3s8sHBHBBHBHHHIIIHHIHH12sBBBI11s8s")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fat32BootSector":
        if len(data) < cls.SIZE:
            raise ValueError(f"FAT32 boot sector needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._LAYOUT.unpack_from(data))

    def sectors_per_volume(self) -> int:
        return self.sectors_per_volume_u16 or self.sectors_per_volume_u32

    def fat_lba(self) -> int:
        return self.part_begin_lba + self.reserved_sectors

    def root_dir_sectors(self) -> int:
        return 0

    def data_lba(self) -> int:
        return (
            self.fat_lba()
            + self.sectors_per_fat * self.fat_count
            + self.root_dir_sectors()
        )

    def data_sectors(self) -> int:
        return self.sectors_per_volume() - self.data_lba()

    def total_clusters(self) -> int:
        return self.data_sectors() // self.sectors_per_cluster

    def cluster_lba(self, cluster: int) -> int:
        return self.data_lba() + (cluster - 2) * self.sectors_per_cluster