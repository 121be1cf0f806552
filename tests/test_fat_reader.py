import struct

import pytest

from pinguin.bootloader_errors import BootError, ErrorCode
from pinguin.disk import Disk
from pinguin.fat_layout import Fat16BootSector, Fat16DirEntry
from pinguin.fat_reader import FatVolume
from pinguin.mbr import PINGUIN_OS_PARTITION_TYPE, PartitionEntry


def build_image(files, vbr_signature=True):
    fat = {0: 0xFFF8, 1: 0xFFFF}
    placed = []
    cluster = 2
    for name, content in files.items():
        count = max(1, -(-len(content) // 512))
        placed.append((name, content, cluster))
        for k in range(count):
            fat[cluster + k] = cluster + k + 1 if k < count - 1 else 0xFFFF
        cluster += count
    total = 4 + cluster - 2
    img = bytearray(total * 512)
    bpb = Fat16BootSector(reserved_sectors=1, fat_count=1, root_dir_entries=16,
                          sectors_per_fat=1, part_begin_lba=1, sectors_per_volume_u16=total)
    img[512:512 + Fat16BootSector.SIZE] = bpb.to_bytes()
    if vbr_signature:
        img[1022:1024] = b"\x55\xaa"
    for index, value in fat.items():
        struct.pack_into("<H", img, 1024 + 2 * index, value)
    for slot, (name, content, first) in enumerate(placed):
        dirent = Fat16DirEntry(filename=name.encode(), first_cluster_low=first, file_size=len(content))
        img[1536 + 32 * slot:1536 + 32 * slot + 32] = dirent.to_bytes()
        start = (4 + first - 2) * 512
        img[start:start + len(content)] = content
    entry = PartitionEntry(partition_type=PINGUIN_OS_PARTITION_TYPE, starting_lba=1)
    return Disk(bytes(img)), entry


CONTENT = bytes((i * 7) % 251 for i in range(1300))


@pytest.fixture
def volume():
    disk, entry = build_image({"DATA    BIN": CONTENT, "OTHER   TXT": b"hello"})
    return FatVolume(disk, entry)


def test_read_whole_file(volume):
    assert volume.open("DATA    BIN").read(5000) == CONTENT


def test_read_in_pieces(volume):
    handle = volume.open("DATA    BIN")
    parts = [handle.read(100), handle.read(600), handle.read(1000)]
    assert b"".join(parts) == CONTENT
    assert handle.bytes_left == 0
    assert handle.pos == len(CONTENT)


def test_second_file(volume):
    assert volume.open(b"OTHER   TXT").read(100) == b"hello"


def test_seek_then_read(volume):
    handle = volume.open("DATA    BIN")
    handle.seek(700)
    assert handle.read(50) == CONTENT[700:750]


def test_peek_keeps_position(volume):
    handle = volume.open("DATA    BIN")
    handle.read(10)
    assert handle.peek(20) == CONTENT[10:30]
    assert handle.read(20) == CONTENT[10:30]


def test_next_cluster_follows_chain(volume):
    assert volume.next_cluster(2) == 3
    assert volume.next_cluster(4) == 0xFFFF


def test_missing_file(volume):
    with pytest.raises(BootError) as info:
        volume.open("MISSING BIN")
    assert info.value.code == ErrorCode.FILE_NOT_FOUND


def test_bad_name_length(volume):
    with pytest.raises(BootError) as info:
        volume.open("DATA.BIN")
    assert info.value.code == ErrorCode.INVALID_FILE_NAME


def test_terminal_cluster_read(volume):
    with pytest.raises(BootError) as info:
        volume.load_cluster(0xFFFF)
    assert info.value.code == ErrorCode.TERMINAL_CLUSTER_READ_ATTEMPT


def test_bad_vbr_signature():
    disk, entry = build_image({"DATA    BIN": b"x"}, vbr_signature=False)
    with pytest.raises(BootError) as info:
        FatVolume(disk, entry)
    assert info.value.code == ErrorCode.SIGNATURE_VERIFICATION_FAILED