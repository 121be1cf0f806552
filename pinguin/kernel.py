"""Kernel start-up: driver setup, boot parameter logging and the interactive shell."""

from __future__ import annotations

import argparse
import inspect
import sys
from pathlib import Path
from typing import Any

from pinguin.bootparams import BootParams, RamType
from pinguin.keyboard import Keycode, PS2Keyboard
from pinguin.klog import Console, KernelLog, LogLevel
from pinguin.shell import KernelShell

_FILE = Path(__file__).name

_RAM_TYPE_NAMES = {
    RamType.USABLE: "usable",
    RamType.RESERVED: "reserved",
    RamType.ACPI_RECLAIMABLE: "acpi reclaimable",
    RamType.ACPI_NVS: "acpi nvs",
    RamType.BAD_MEMORY: "bad memory",
}


def _log_info(log: KernelLog, fmt: str, *args: Any) -> None:
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    func = caller.f_code.co_name if caller is not None else "?"
    line = caller.f_lineno if caller is not None else 0
    log.log(LogLevel.INFO, _FILE, func, line, fmt, *args)


def _ram_type_name(value: int) -> str:
    try:
        return _RAM_TYPE_NAMES[RamType(value)]
    except ValueError:
        return ""


def log_boot_params(log: KernelLog, params: BootParams) -> None:
    """Write the boot parameters to the kernel log."""
    _log_info(log, "boot_params.boot_drive = %x\n", params.boot_drive)
    log.append(LogLevel.INFO, "boot_params.stack_begin = %x\n", params.stack_begin)
    log.append(
        LogLevel.INFO,
        "boot_params.free_memory_regions_count = %d\n",
        len(params.free_memory_regions),
    )
    log.append(LogLevel.INFO, "boot_params.free_memory_regions = [\n")
    for region in params.free_memory_regions:
        log.append(
            LogLevel.INFO,
            "  Memory region: base=%x, length=%x\n",
            region.base,
            region.length,
        )
    log.append(LogLevel.INFO, "]\n")

    regions = params.x86_boot_params.memory_regions
    log.append(
        LogLevel.INFO,
        "boot_params.x86_boot_params.memory_regions_count = %d\n",
        len(regions),
    )
    log.append(LogLevel.INFO, "boot_params.x86_boot_params.memory_regions = [\n")
    for region in regions:
        log.append(
            LogLevel.INFO,
            "  Memory region: base=%x, length=%x, type=",
            region.base,
            region.length,
        )
        log.append(LogLevel.INFO, "%s", _ram_type_name(region.type))
        log.append(LogLevel.INFO, ", ACPI=%d\n", region.acpi)
    log.append(LogLevel.INFO, "]\n")


class Kernel:
    """Ties the console, log, keyboard driver and shell together."""

    def __init__(self, console: Console | None = None, log: KernelLog | None = None) -> None:
        self.console = console or Console()
        self.log = log or KernelLog(self.console)
        self.shell = KernelShell(self.console)
        self.keyboard = PS2Keyboard(self._keyboard_hook, self.log)

    def _keyboard_hook(self, keycode: Keycode) -> None:
        self.shell.process_char(keycode)

    def _init_drivers(self) -> None:
        _log_info(self.log, "Initializing PS/2 keyboard driver...\n")
        self.keyboard.reset()
        _log_info(self.log, "PS/2 keyboard driver initialized\n")

    def start(self, params: BootParams) -> None:
        """Initialise drivers, log the boot parameters and show the shell prompt."""
        self._init_drivers()
        _log_info(self.log, "Pinguin OS kernel initialized\n")
        log_boot_params(self.log, params)
        _log_info(self.log, "Initializing shell...\n")
        self.shell.reset()
        _log_info(self.log, "Shell initialized\n")

    def feed(self, text: str) -> None:
        """Deliver typed characters to the shell as key presses."""
        for char in text:
            self._keyboard_hook(Keycode(char))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the kernel shell, reading key presses from standard input."
    )
    parser.parse_args(argv)

    kernel = Kernel()
    kernel.start(BootParams())
    for char in iter(lambda: sys.stdin.read(1), ""):
        kernel.feed(char)
    return 0