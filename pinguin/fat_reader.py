"""Read-only access to files in the root directory of a FAT16 volume."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace

from pinguin.bootloader_errors import (
    FAT_BUFFER_SIZE,
    FAT_TRANSFER_BUFFER_SIZE,
    ROOT_DIR_BUFFER_SIZE,
    BootError,
    ErrorCode,
)
from pinguin.disk import Disk
from pinguin.fat_layout import (
    DIR_ENTRY_SIZE,
    FAT16_FILENAME_LEN,
    FAT16_FINAL_CLUSTER,
    Fat16BootSector,
    Fat16DirEntry,
)
from pinguin.fmt import bounded_equal
from pinguin.mbr import PartitionEntry, has_signature

_FAT_ENTRY = struct.Struct("<H")
_ENTRIES_PER_FAT_SEGMENT = FAT_BUFFER_SIZE // _FAT_ENTRY.size


class FatVolume:
    """A FAT16 volume located by a partition table entry."""

    def __init__(self, disk: Disk, entry: PartitionEntry) -> None:
        self.disk = disk
        vbr = disk.read(entry.starting_lba, 1)
        if not has_signature(vbr):
            raise BootError(ErrorCode.SIGNATURE_VERIFICATION_FAILED)
        self.bpb = Fat16BootSector.from_bytes(vbr)
        sector_size = self.bpb.bytes_per_sector
        if sector_size == 0 or FAT_BUFFER_SIZE % sector_size != 0:
            raise BootError(ErrorCode.INCOMPATIBLE_BUFFER_SIZE)
        if self.bpb.root_dir_entries > ROOT_DIR_BUFFER_SIZE:
            raise BootError(ErrorCode.INCOMPATIBLE_BUFFER_SIZE)

        raw = disk.read(self.bpb.root_dir_lba(), self.bpb.root_dir_sectors())
        needed = self.bpb.root_dir_entries * DIR_ENTRY_SIZE
        raw = raw[:needed].ljust(needed, b"\0")
        self.root_dir = [
            Fat16DirEntry.from_bytes(raw[start:start + DIR_ENTRY_SIZE])
            for start in range(0, needed, DIR_ENTRY_SIZE)
        ]
        self._fat_segment: int | None = None
        self._fat_entries: tuple[int, ...] = ()
        self._loaded_cluster: int | None = None
        self._loaded_data = b""

    @property
    def bytes_per_cluster(self) -> int:
        return self.bpb.bytes_per_cluster()

    def open(self, name: str | bytes) -> "FatFile":
        """Open a root-directory file by its 11-character 8.3 name."""
        if len(name) != FAT16_FILENAME_LEN:
            raise BootError(ErrorCode.INVALID_FILE_NAME)
        found = None
        for dirent in self.root_dir:
            if bounded_equal(dirent.filename, name, FAT16_FILENAME_LEN):
                found = dirent
        if found is None:
            raise BootError(ErrorCode.FILE_NOT_FOUND)
        return FatFile(self, cluster=found.first_cluster_low, bytes_left=found.file_size)

    def next_cluster(self, cluster: int) -> int:
        """Follow the FAT chain one step from ``cluster``."""
        segment = self.bpb.fat_lba() + cluster // _ENTRIES_PER_FAT_SEGMENT
        if segment != self._fat_segment:
            data = self.disk.read(segment, FAT_BUFFER_SIZE // self.bpb.bytes_per_sector)
            self._fat_entries = tuple(v for (v,) in _FAT_ENTRY.iter_unpack(data[:FAT_BUFFER_SIZE]))
            self._fat_segment = segment
        return self._fat_entries[cluster % _ENTRIES_PER_FAT_SEGMENT]

    def load_cluster(self, cluster: int) -> bytes:
        """Return the contents of one data cluster."""
        if cluster > FAT16_FINAL_CLUSTER:
            raise BootError(ErrorCode.TERMINAL_CLUSTER_READ_ATTEMPT)
        if cluster != self._loaded_cluster:
            self._loaded_data = self.disk.read(
                self.bpb.cluster_lba(cluster), self.bpb.sectors_per_cluster
            )[: self.bytes_per_cluster]
            self._loaded_cluster = cluster
        return self._loaded_data


@dataclass
class FatFile:
    """A read position inside a file on a :class:`FatVolume`."""

    volume: FatVolume
    cluster: int
    bytes_left: int
    pos_in_cluster: int = 0
    pos: int = 0

    def _advance_cluster(self) -> None:
        self.cluster = self.volume.next_cluster(self.cluster)
        self.pos_in_cluster = 0

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, never past the end of the file."""
        cluster_size = self.volume.bytes_per_cluster
        if cluster_size > FAT_TRANSFER_BUFFER_SIZE:
            raise BootError(ErrorCode.INCOMPATIBLE_BUFFER_SIZE)
        size = min(size, self.bytes_left)
        out = bytearray()

        if self.pos_in_cluster == cluster_size:
            self._advance_cluster()

        if self.pos_in_cluster != 0:
            data = self.volume.load_cluster(self.cluster)
            count = min(cluster_size - self.pos_in_cluster, size)
            out += data[self.pos_in_cluster:self.pos_in_cluster + count]
            self.bytes_left -= count
            size -= count
            self.pos_in_cluster += count
            self.pos += count
            if not size:
                return bytes(out)
            self._advance_cluster()

        while size // cluster_size and self.cluster < FAT16_FINAL_CLUSTER:
            out += self.volume.load_cluster(self.cluster)
            self.bytes_left -= cluster_size
            size -= cluster_size
            self.pos += cluster_size
            self.cluster = self.volume.next_cluster(self.cluster)

        if size:
            out += self.volume.load_cluster(self.cluster)[:size]
            self.bytes_left -= size
            self.pos_in_cluster += size
            self.pos += size

        return bytes(out)

    def peek(self, size: int) -> bytes:
        """Read without moving this file's position."""
        return replace(self).read(size)

    def seek(self, size: int) -> None:
        """Skip ``size`` bytes forward."""
        cluster_size = self.volume.bytes_per_cluster
        if self.pos_in_cluster == cluster_size:
            self._advance_cluster()

        if self.pos_in_cluster != 0:
            skip = min(size, cluster_size - self.pos_in_cluster)
            self.pos_in_cluster += skip
            self.pos += skip
            self.bytes_left -= skip
            size -= skip

        while size // cluster_size and self.cluster < FAT16_FINAL_CLUSTER:
            self.bytes_left -= cluster_size
            size -= cluster_size
            self.pos += cluster_size
            self.cluster = self.volume.next_cluster(self.cluster)

        if size:
            self.bytes_left -= size
            self.pos_in_cluster += size
            self.pos += size