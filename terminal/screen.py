"""
Low-level screen control for the terminal display.
ANSI cursor addressing, clearing and raw keyboard mode.
"""

import sys
from contextlib import contextmanager
from typing import Optional, TextIO

from colorama import Cursor, Style, ansi

HIDE_CURSOR = ansi.CSI + "?25l"
SHOW_CURSOR = ansi.CSI + "?25h"
HOME = ansi.CSI + "0;0H"


class Screen:
    """
    Thin wrapper around an output stream that speaks ANSI.

    Every method writes straight to the stream and flushes, so the
    player sees each change as it happens.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def move_to(self, row: int, col: int) -> None:
        """Put the terminal cursor at (row, col), 1-based."""
        # colorama takes x (column) first
        self.write(Cursor.POS(col, row))

    def write_at(self, row: int, col: int, text: str) -> None:
        self.move_to(row, col)
        self.write(text)

    def write_styled(self, text: str, *styles: str) -> None:
        """Write text wrapped in style codes, then reset all styles."""
        self.write("".join(styles) + text + Style.RESET_ALL)

    def clear_screen(self) -> None:
        self.write(ansi.clear_screen())
        self.write(HOME)

    def clear_line(self, row: int) -> None:
        self.move_to(row, 1)
        self.write(ansi.clear_line())

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)


@contextmanager
def raw_mode(stream: Optional[TextIO] = None):
    """
    Put the terminal into raw mode (no echo, no line buffering) and
    restore the previous settings on exit, whatever happens inside.

    Ctrl-C arrives as a plain "\\x03" key while raw mode is on.
    """
    import termios
    import tty

    stream = stream or sys.stdin
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
