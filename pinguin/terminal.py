"""A text-mode terminal backed by a buffer of VGA character cells."""

from __future__ import annotations

from enum import IntEnum

from pinguin.fmt import int_to_str


class VgaColor(IntEnum):
    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GREY = 7
    DARK_GREY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    LIGHT_MAGENTA = 13
    LIGHT_BROWN = 14
    WHITE = 15


def entry_color(fg: int, bg: int) -> int:
    """Attribute byte combining a foreground and a background colour."""
    return (int(fg) | int(bg) << 4) & 0xFF


def vga_entry(char: str | int, color: int) -> int:
    """16-bit VGA cell holding ``char`` in the low byte and ``color`` in the high byte."""
    code = ord(char) if isinstance(char, str) else int(char)
    return (code & 0xFF) | (int(color) & 0xFF) << 8


class Terminal:
    """Scrolling text terminal writing into a flat list of VGA cells."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("terminal dimensions must be positive")
        self.width = width
        self.height = height
        self.row = 0
        self.column = 0
        self.color = entry_color(VgaColor.LIGHT_GREY, VgaColor.BLACK)
        self.buffer = [0] * (width * height)
        self.clear()

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def move_cursor(self, row: int, column: int) -> None:
        self.row = row
        self.column = column

    def clear(self) -> None:
        """Blank every cell with the current colour and home the cursor."""
        self.row = 0
        self.column = 0
        blank = vga_entry(" ", self.color)
        self.buffer[:] = [blank] * (self.width * self.height)

    def set_color(self, color: int) -> None:
        self.color = color

    def put_entry_at(self, char: str | int, color: int, x: int, y: int) -> None:
        self.buffer[self._index(x, y)] = vga_entry(char, color)

    def put_char(self, char: str) -> None:
        """Write one character, handling NUL, backspace, carriage return and newline."""
        if char == "\0":
            return
        if char == "\b":
            if self.column == 0:
                self.column = self.width
                if self.row != 0:
                    self.row -= 1
            else:
                self.column -= 1
            self.put_entry_at(" ", self.color, self.column, self.row)
        elif char == "\r":
            self.column = 0
        elif char == "\n":
            self.row += 1
            self.column = 0
            if self.row == self.height:
                self.scroll_down()
        else:
            self.put_entry_at(char, self.color, self.column, self.row)
            self.column += 1
            if self.column == self.width:
                self.column = 0
                self.row += 1
                if self.row == self.height:
                    self.scroll_down()

    def scroll_down(self) -> None:
        """Move every line up by one, blank the last line and move the cursor up."""
        width = self.width
        self.buffer[:-width] = self.buffer[width:]
        self.buffer[-width:] = [vga_entry(" ", self.color)] * width
        self.row -= 1

    def write(self, data: str) -> None:
        for char in data:
            self.put_char(char)

    def write_int(self, num: int) -> None:
        self.write(int_to_str(num))

    def char_at(self, x: int, y: int) -> str:
        return chr(self.buffer[self._index(x, y)] & 0xFF)

    def row_text(self, y: int) -> str:
        start = self._index(0, y)
        return "".join(chr(cell & 0xFF) for cell in self.buffer[start:start + self.width])