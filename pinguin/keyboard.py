"""PS/2 keyboard scan-code handling."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from pinguin.klog import KernelLog, LogLevel

_PLAIN = "??1234567890-=\b" "?qwertyuiop[]" "\n?asdfghjkl;'`" "?\\zxcvbnm,./??? " "\0"
_SHIFTED = "??!@#$%^&*()_+\b" "?QWERTYUIOP{}" "\n?ASDFGHJKL:\"~" "?|ZXCVBNM<>???? " "\0"


class _SpecialKey(IntEnum):
    LEFT_SHIFT_PRESSED = 0x2A
    RIGHT_SHIFT_PRESSED = 0x36
    LEFT_SHIFT_RELEASED = 0xAA
    RIGHT_SHIFT_RELEASED = 0xB6
    CAPS_LOCK_PRESSED = 0x3A
    CAPS_LOCK_RELEASED = 0xBA


@dataclass(frozen=True)
class Keycode:
    """A key press as seen by the rest of the kernel."""

    pressed_char: str


class PS2Keyboard:
    """Turns PS/2 set-1 scan codes into key codes, tracking shift and caps lock."""

    def __init__(self, hook: Callable[[Keycode], None], log: KernelLog | None = None) -> None:
        self.hook = hook
        self.log = log
        self.shift = False
        self.caps_lock = False

    def reset(self) -> None:
        self.shift = False
        self.caps_lock = False

    def handle_scan_code(self, scan_code: int) -> None:
        """Update modifier state or pass the pressed character to the hook."""
        scan_code &= 0xFF
        if scan_code == _SpecialKey.CAPS_LOCK_PRESSED:
            self.caps_lock = not self.caps_lock
        elif scan_code in (_SpecialKey.LEFT_SHIFT_PRESSED, _SpecialKey.RIGHT_SHIFT_PRESSED):
            self.shift = True
        elif scan_code in (_SpecialKey.LEFT_SHIFT_RELEASED, _SpecialKey.RIGHT_SHIFT_RELEASED):
            self.shift = False
        else:
            if scan_code >= len(_PLAIN):
                return
            table = _SHIFTED if self.shift != self.caps_lock else _PLAIN
            self.hook(Keycode(table[scan_code]))

        if self.log is not None:
            frame = inspect.currentframe()
            line = frame.f_lineno if frame is not None else 0
            self.log.log(
                LogLevel.DEBUG,
                __name__,
                "handle_scan_code",
                line,
                "Ps2 command hook run. state.shift=%d, state.caps_lock=%d\n",
                int(self.shift),
                int(self.caps_lock),
            )