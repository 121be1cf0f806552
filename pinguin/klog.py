"""Kernel console output, levelled kernel logging and kernel panic."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from pinguin.fmt import format_to, put_string

Emit = Callable[[str], None]


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)


class Console:
    """Two output channels: one for the user and one for kernel logs."""

    def __init__(self, user_out: Emit | None = None, debug_out: Emit | None = None) -> None:
        self.user_out = user_out or _write_stdout
        self.debug_out = debug_out or _write_stdout

    def put(self, text: str) -> None:
        put_string(self.user_out, text)

    def print(self, fmt: str, *args: Any) -> None:
        format_to(self.user_out, fmt, *args)

    def debug_put(self, text: str) -> None:
        # Plain strings on the debug side go to the user channel.
        put_string(self.user_out, text)

    def debug_print(self, fmt: str, *args: Any) -> None:
        format_to(self.debug_out, fmt, *args)


class KernelPanic(RuntimeError):
    """Raised when the kernel cannot continue."""

    def __init__(self, file: str, func: str, line: int) -> None:
        self.file = file
        self.func = func
        self.line = line
        super().__init__(f"{file}:{func}:{line} KERNEL PANIC!!!")


class KernelLog:
    """Writes log records of the enabled levels to a console's debug channel."""

    def __init__(
        self, console: Console, enabled_levels: Iterable[LogLevel | str] | None = None
    ) -> None:
        self.console = console
        if enabled_levels is None:
            self.enabled_levels = frozenset(LogLevel)
        else:
            self.enabled_levels = frozenset(LogLevel(level) for level in enabled_levels)

    def _enabled(self, level: LogLevel | str) -> bool:
        return LogLevel(level) in self.enabled_levels

    def log(
        self,
        level: LogLevel | str,
        file: str,
        func: str,
        line: int,
        fmt: str,
        *args: Any,
    ) -> None:
        """Write a record headed by its level and origin."""
        if not self._enabled(level):
            return
        self.console.debug_print("[%s] %s:%s:%d ", LogLevel(level).value, file, func, line)
        self.console.debug_print(fmt, *args)

    def append(self, level: LogLevel | str, fmt: str, *args: Any) -> None:
        """Continue the previous record without a header."""
        if not self._enabled(level):
            return
        self.console.debug_print(fmt, *args)


def kernel_panic(console: Console, file: str, func: str, line: int) -> None:
    """Report a panic on the user channel and raise :class:`KernelPanic`."""
    console.print("%s:%s:%d KERNEL PANIC!!!\n", file, func, line)
    raise KernelPanic(file, func, line)