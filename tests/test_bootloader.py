import struct

import pytest

from pinguin.bootloader import boot, main
from pinguin.bootloader_errors import BootError, ErrorCode
from pinguin.bootparams import RamType
from pinguin.elf import ElfHeader32, ProgramHeader32
from pinguin.fat_layout import Fat16BootSector, Fat16DirEntry
from pinguin.disk import Disk
from pinguin.mbr import PINGUIN_OS_PARTITION_TYPE, PartitionEntry, PartitionTable
from pinguin.memory_map import E820Entry

PAYLOAD = b"kernel code " * 30


def make_elf():
    data_offset = ElfHeader32.SIZE + ProgramHeader32.SIZE
    header = ElfHeader32(entry=0x2000, program_header_offset=ElfHeader32.SIZE,
                         program_header_entry_size=ProgramHeader32.SIZE, program_header_count=1)
    segment = ProgramHeader32(offset=data_offset, paddr=0x2000, file_size=len(PAYLOAD), memory_size=len(PAYLOAD))
    return header.to_bytes() + segment.to_bytes() + PAYLOAD


def build_image(content, part_type=PINGUIN_OS_PARTITION_TYPE):
    count = -(-len(content) // 512)
    total = 4 + count
    img = bytearray(total * 512)
    table = PartitionTable(entries=(PartitionEntry(partition_type=part_type, starting_lba=1),
                                    PartitionEntry(), PartitionEntry(), PartitionEntry()))
    img[440:440 + PartitionTable.SIZE] = table.to_bytes()
    img[510:512] = b"\x55\xaa"
    bpb = Fat16BootSector(reserved_sectors=1, fat_count=1, root_dir_entries=16,
                          sectors_per_fat=1, part_begin_lba=1, sectors_per_volume_u16=total)
    img[512:512 + Fat16BootSector.SIZE] = bpb.to_bytes()
    img[1022:1024] = b"\x55\xaa"
    for k in range(count):
        struct.pack_into("<H", img, 1024 + 2 * (2 + k), 3 + k if k < count - 1 else 0xFFFF)
    dirent = Fat16DirEntry(filename=b"KERNEL  ELF", first_cluster_low=2, file_size=len(content))
    img[1536:1568] = dirent.to_bytes()
    img[2048:2048 + len(content)] = content
    return bytes(img)


E820 = [E820Entry(0, 0x9FC00, RamType.USABLE), E820Entry(0x100000, 0x100000, RamType.USABLE)]


def test_boot_loads_kernel():
    memory = bytearray(0x10000)
    params, entry = boot(Disk(build_image(make_elf())), E820, memory)
    assert entry == 0x2000
    assert memory[0x2000:0x2000 + len(PAYLOAD)] == PAYLOAD
    assert params.stack_begin == 0x8000
    assert len(params.free_memory_regions) == 2


def test_boot_without_partition():
    with pytest.raises(BootError) as info:
        boot(Disk(build_image(make_elf(), part_type=6)), E820, bytearray(0x10000))
    assert info.value.code == ErrorCode.PARTITION_NOT_FOUND


def test_main_success(tmp_path, capsys):
    path = tmp_path / "disk.img"
    path.write_bytes(build_image(make_elf()))
    assert main([str(path)]) == 0
    assert "Kernel entry: 0x2000" in capsys.readouterr().out


def test_main_reports_error(tmp_path, capsys):
    path = tmp_path / "disk.img"
    path.write_bytes(build_image(make_elf(), part_type=6))
    assert main([str(path)]) == 1
    assert "STAGE2 error: Can't find valid pinguin OS partition." in capsys.readouterr().out