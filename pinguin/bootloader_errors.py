"""Error codes raised by the second-stage bootloader, and the buffer sizes it works with."""

from __future__ import annotations

from enum import IntEnum

MBR_BUFFER_SIZE = 512
VBR_BUFFER_SIZE = 512
DEFAULT_SECTOR_SIZE = 512
READ_DISK_MEDIATOR_BUFFER_SIZE = DEFAULT_SECTOR_SIZE
FAT_TRANSFER_BUFFER_SIZE = 4 * DEFAULT_SECTOR_SIZE
FAT_BUFFER_SIZE = 512
ROOT_DIR_BUFFER_SIZE = 512


class ErrorCode(IntEnum):
    SUCCESS = 0
    DAPACK_INIT_ERROR = 1
    BIOS_CALL_ERROR = 2
    PARTITION_NOT_FOUND = 3
    SIGNATURE_VERIFICATION_FAILED = 4
    INVALID_FILE_NAME = 5
    FILE_NOT_FOUND = 6
    INCOMPATIBLE_BUFFER_SIZE = 7
    INCOMPATIBLE_ELF = 8
    UNIMPLEMENTED = 9
    KERNEL_EXITED = 10
    TERMINAL_CLUSTER_READ_ATTEMPT = 11
    BUFFER_OVERFLOW = 12


_DESCRIPTIONS = {
    ErrorCode.SUCCESS: "Success error shouldn't be logged.",
    ErrorCode.DAPACK_INIT_ERROR: "Failed to init disk address pack, refactore memory map.",
    ErrorCode.BIOS_CALL_ERROR: "Bios call error.",
    ErrorCode.PARTITION_NOT_FOUND: "Can't find valid pinguin OS partition.",
    ErrorCode.SIGNATURE_VERIFICATION_FAILED: "Signature verification error.",
    ErrorCode.INVALID_FILE_NAME: "Invalid filename error.",
    ErrorCode.FILE_NOT_FOUND: "File not found error.",
    ErrorCode.INCOMPATIBLE_BUFFER_SIZE: "Incompatible buffer size error.",
    ErrorCode.INCOMPATIBLE_ELF: "Incompatible elf file error.",
    ErrorCode.UNIMPLEMENTED: "Unimplemented hit.",
    ErrorCode.KERNEL_EXITED: "Error. Run kernel elf shall never return.",
    ErrorCode.TERMINAL_CLUSTER_READ_ATTEMPT: "Error. Attempt to read terminal FAT cluster.",
    ErrorCode.BUFFER_OVERFLOW: "Error. Buffer overflow.",
}


def describe(code: int) -> str:
    """Human readable text for an error code."""
    try:
        return _DESCRIPTIONS[ErrorCode(code)]
    except ValueError:
        return "Unknown error."


class BootError(Exception):
    """A bootloader failure carrying its :class:`ErrorCode`."""

    def __init__(self, code: int) -> None:
        try:
            self.code: int = ErrorCode(code)
        except ValueError:
            self.code = code
        super().__init__(describe(code))