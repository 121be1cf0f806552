"""Small printf-style formatting and string helpers shared by boot and kernel code."""

from __future__ import annotations

from collections.abc import Callable
from itertools import chain, islice, repeat
from typing import Any

Emit = Callable[[str], None]

_UINT32_MASK = 0xFFFFFFFF
_NUL = "\0"


def put_string(emit: Emit, text: str) -> None:
    """Send every character of ``text`` to ``emit``, stopping at a NUL."""
    for char in text:
        if char == _NUL:
            break
        emit(char)


def int_to_str(num: int) -> str:
    """Decimal text of ``num`` taken as an unsigned 32-bit value."""
    return str(num & _UINT32_MASK)


def hex_str(num: int) -> str:
    """Upper-case hexadecimal text of ``num`` as an unsigned 32-bit value, with 0x prefix."""
    return f"0x{num & _UINT32_MASK:X}"


def _as_char(value: Any) -> str:
    if isinstance(value, str):
        return value[:1] or _NUL
    return chr(int(value) & 0xFF)


def format_to(emit: Emit, fmt: str, *args: Any) -> None:
    """Format ``fmt`` with ``args`` and send the result to ``emit`` one character at a time.

    Supported specifiers are %d, %i, %x, %c, %s and %%. Unknown specifiers
    are dropped together with their percent sign.
    """
    pending = iter(args)

    def next_arg(spec: str) -> Any:
        try:
            return next(pending)
        except StopIteration:
            raise TypeError(f"not enough arguments for %{spec}") from None

    in_specifier = False
    for char in fmt:
        if char == _NUL:
            break
        if not in_specifier:
            if char == "%":
                in_specifier = True
            else:
                emit(char)
            continue

        in_specifier = False
        if char in "di":
            put_string(emit, int_to_str(int(next_arg(char))))
        elif char == "x":
            put_string(emit, hex_str(int(next_arg(char))))
        elif char == "c":
            emit(_as_char(next_arg(char)))
        elif char == "s":
            put_string(emit, str(next_arg(char)))
        elif char == "%":
            emit("%")


def format_message(fmt: str, *args: Any) -> str:
    """Return the text that :func:`format_to` would emit."""
    parts: list[str] = []
    format_to(parts.append, fmt, *args)
    return "".join(parts)


def _as_text(value: str | bytes | bytearray) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("latin-1")
    return value


def bounded_equal(first: str | bytes, second: str | bytes, size: int) -> bool:
    """Compare at most ``size`` characters; a shared NUL ends the comparison as equal."""
    padded_first = chain(_as_text(first), repeat(_NUL))
    padded_second = chain(_as_text(second), repeat(_NUL))
    for a, b in islice(zip(padded_first, padded_second), size):
        if a != b:
            return False
        if a == _NUL:
            return True
    return True


def between(value: Any, low: Any, high: Any) -> bool:
    """True when ``low <= value <= high``."""
    return low <= value <= high