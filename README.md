# pinguin

A small hobby operating system modelled in pure Python. It covers the parts
of a boot chain and kernel that can run without real hardware: disk and
executable formats, a second-stage bootloader that works on disk images, a
page allocator, a keyboard driver and a tiny interactive shell.

## Modules

- `pinguin.fmt`: a minimal printf (`format_to`, `format_message`) that knows
  `%d`, `%i`, `%x`, `%c`, `%s` and `%%` (numbers are printed as unsigned
  32-bit values, `%x` as upper-case hex with a `0x` prefix), plus
  `put_string`, `int_to_str`, `hex_str`, `bounded_equal` and `between`.
- `pinguin.terminal`: `Terminal`, a scrolling text terminal over a flat list
  of 16-bit VGA cells, with `VgaColor`, `entry_color` and `vga_entry`.
- `pinguin.bootparams`: `BootParams`, `X86BootParams`, `MemEntry`,
  `X86MemEntry` and `RamType`; region lists hold at most 16 entries.
- `pinguin.elf`: `ElfHeader32`, `ElfHeader64`, `ProgramHeader32`,
  `ProgramHeader64` with `from_bytes` / `to_bytes`, and the ELF enums.
- `pinguin.mbr`: `PartitionEntry`, `PartitionTable` and `has_signature`.
- `pinguin.fat_layout`: `Fat16BootSector` (with volume geometry such as
  `fat_lba`, `root_dir_lba`, `data_lba`, `cluster_lba`), `Fat16DirEntry` and
  `Fat32BootSector`.
- `pinguin.bootloader_errors`: `ErrorCode`, `BootError` and `describe`.
  Every bootloader failure is raised as a `BootError` carrying its code.
- `pinguin.disk`: `Disk`, a sector-addressed disk image, and
  `DiskAddressPacket`.
- `pinguin.partition`: `find_partition(disk)` returns the partition table and
  the index of the first partition of type 228.
- `pinguin.fat_reader`: `FatVolume` opens root-directory files of a FAT16
  volume by their 11-character 8.3 name (for example `"KERNEL  ELF"`);
  `FatFile` offers `read`, `peek` and `seek`.
- `pinguin.elf_loader`: `load_elf(volume, name, memory)` copies a 32-bit
  ELF's segments into a `bytearray` at their physical addresses and returns
  the entry point.
- `pinguin.memory_map`: `E820Entry` and `detect_memory(params, entries)`.
- `pinguin.bootloader`: `boot(disk, e820_entries, memory)` runs the whole
  second stage and returns the boot parameters and the kernel entry point.
- `pinguin.klog`: `Console` (a user channel and a debug channel),
  `KernelLog` with `LogLevel` filtering, `kernel_panic` and `KernelPanic`.
- `pinguin.buddy`: `BuddyAllocator`, `block_size` and `best_fit_layer`.
- `pinguin.keyboard`: `PS2Keyboard` turns PS/2 set-1 scan codes into
  `Keycode`s, tracking shift and caps lock.
- `pinguin.shell`: `KernelShell`, a line-editing shell.
- `pinguin.kernel`: `Kernel` and `log_boot_params`.

## Installation

```
pip install .
```

## Commands

Run the second-stage bootloader over a disk image:

```
pinguin-boot disk.img
```

It uses a fixed memory map and 16 MiB of simulated memory, loads
`KERNEL  ELF` from the Pinguin OS partition, and prints the kernel entry
point and the number of free memory regions. On failure it prints
`STAGE2 error: ...` and exits with status 1.

Run the kernel, reading key presses from standard input:

```
pinguin-kernel
```

Log records and shell output both go to standard output. The shell knows
`help` and `neofetch`; any other non-empty line prints `Unknown command`.

## Library use

```python
from pinguin.bootparams import MemEntry
from pinguin.buddy import BuddyAllocator
from pinguin.fmt import format_message

# Regions are given in pages; addresses are byte addresses.
allocator = BuddyAllocator([MemEntry(base=2, length=100)])
address = allocator.alloc(10)      # 8192, or None when nothing fits
allocator.free(address)            # ValueError for an unknown address

print(format_message("base=%x, length=%d", 4096, 100))
# base=0x1000, length=100
```

```python
from pinguin.terminal import Terminal

term = Terminal(80, 25)
term.write("hello\n")
print(term.row_text(0).rstrip())   # hello
```

## What it does not do

- `pinguin-boot` only loads the kernel image into a `bytearray`; it does not
  execute it or pass control to `pinguin.kernel`.
- There is no processor or interrupt set-up: no descriptor tables, interrupt
  controller, port I/O or hardware cursor. `pinguin-kernel` delivers
  characters from standard input straight to the shell rather than through
  scan codes.
- Files are read only from the root directory of FAT16 volumes; FAT32 is
  limited to boot-sector parsing and geometry. Nothing is ever written to a
  disk image.

## Tests

```
pip install ".[test]"
pytest
```