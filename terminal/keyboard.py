"""
Keyboard input for the terminal display.
Reads single keypresses (arrow keys arrive as several characters).
"""

import codecs
import os
import select
import sys
from typing import Callable, Optional

from logic.cursor import Direction
from .config import DisplayConfig


class KeyReader:
    """
    Reads one keypress at a time.

    An arrow key is an escape sequence of several characters. When the
    first character is ESC everything else already waiting is read too,
    so one call returns the whole sequence. Any other key is returned on
    its own.
    """

    def __init__(
        self,
        read_char: Callable[[], str],
        ready: Callable[[], bool],
        config: Optional[DisplayConfig] = None,
    ):
        """
        Initialize the reader.

        Args:
            read_char: Blocking read of one character. Returns "" at end
                of input.
            ready: True if another character can be read without waiting.
            config: Display configuration. Uses defaults if not provided.
        """
        self._read_char = read_char
        self._ready = ready
        self.config = config or DisplayConfig()

        self._directions = {
            self.config.UP_ARROW: Direction.UP,
            self.config.DOWN_ARROW: Direction.DOWN,
            self.config.LEFT_ARROW: Direction.LEFT,
            self.config.RIGHT_ARROW: Direction.RIGHT,
            self.config.CARRIAGE_RETURN: Direction.SELECT,
            self.config.LINE_FEED: Direction.SELECT,
            self.config.CTRL_C: Direction.CANCEL,
        }

    @classmethod
    def for_stdin(cls, config: Optional[DisplayConfig] = None) -> "KeyReader":
        """
        Reader for the real terminal. Expects raw mode to be on.

        Bytes are decoded incrementally, so a multi-byte character comes
        back whole and undecodable bytes are dropped. Only a closed stdin
        gives "".
        """
        fd = sys.stdin.fileno()
        decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

        def read_char() -> str:
            while True:
                data = os.read(fd, 1)
                if not data:
                    return ""
                char = decoder.decode(data)
                if char:
                    return char

        def ready() -> bool:
            readable, _, _ = select.select([fd], [], [], 0)
            return bool(readable)

        return cls(read_char, ready, config)

    def read_key(self) -> str:
        """
        Read one keypress.

        Returns:
            The key, e.g. "y", "\\r" or "\\x1b[A". Empty at end of input.
        """
        key = self._read_char()
        if key != self.config.ESCAPE:
            return key
        while self._ready():
            char = self._read_char()
            if not char:
                break
            key += char
        return key

    def to_direction(self, key: str) -> Optional[Direction]:
        """
        Map a key to a navigation event.

        End of input counts as CANCEL so a closed stdin ends the game
        instead of spinning. Unknown keys give None.
        """
        if key == "":
            return Direction.CANCEL
        return self._directions.get(key)

    def read_direction(self) -> Direction:
        """Block until a navigation key is pressed, skipping other keys."""
        while True:
            direction = self.to_direction(self.read_key())
            if direction is not None:
                return direction

    def is_interrupt(self, key: str) -> bool:
        return key in ("", self.config.CTRL_C)
