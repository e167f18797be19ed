"""
Exceptions for the tic-tac-toe game logic.

Two kinds of failure exist:
- Programming errors (bad index, searching a finished board). These
  should never happen when the callers check the board first.
- Recoverable input errors (cursor off the grid, taken cell). These are
  reported to the player and the same turn is retried.
"""


class TicTacToeError(Exception):
    """Base class for all game errors."""


class IndexOutOfRangeError(TicTacToeError):
    """A board index outside 0-8 was used."""

    def __init__(self, index):
        super().__init__(f"Board index {index!r} is out of range (must be 0-8)")
        self.index = index


class CellOccupiedError(TicTacToeError):
    """A marker was placed on a cell that already holds one."""

    def __init__(self, index: int):
        super().__init__(f"Cell {index} is already occupied")
        self.index = index


class NoLegalMovesError(TicTacToeError):
    """The engine was asked for a move on a finished board."""


class OutOfBoundsError(TicTacToeError):
    """The cursor was pushed off the edge of the grid."""

    def __init__(self, position: int, direction):
        super().__init__(f"Can't move cursor {direction} from position {position}")
        self.position = position
        self.direction = direction


class GameCancelled(TicTacToeError):
    """The player interrupted the game (e.g. Ctrl-C)."""
