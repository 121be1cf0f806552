"""Locating the Pinguin OS partition in the master boot record."""

from __future__ import annotations

from pinguin.bootloader_errors import BootError, ErrorCode
from pinguin.disk import Disk
from pinguin.mbr import (
    PARTITION_TABLE_OFFSET,
    PINGUIN_OS_PARTITION_TYPE,
    PartitionTable,
    has_signature,
)


def find_partition(disk: Disk) -> tuple[PartitionTable, int]:
    """Return the partition table and the index of the first Pinguin OS partition."""
    sector = disk.read(0, 1)
    if not has_signature(sector):
        raise BootError(ErrorCode.SIGNATURE_VERIFICATION_FAILED)
    table = PartitionTable.from_bytes(sector[PARTITION_TABLE_OFFSET:])
    for index, entry in enumerate(table.entries):
        if entry.partition_type == PINGUIN_OS_PARTITION_TYPE:
            return table, index
    raise BootError(ErrorCode.PARTITION_NOT_FOUND)