"""
Cursor navigation for picking a cell with the arrow keys.
"""

from enum import Enum

from .config import GameConfig
from .errors import OutOfBoundsError


class Direction(Enum):
    """Navigation events coming from the player."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    CANCEL = "cancel"


# Cells where a move in each direction would leave the grid
_EDGES = {
    Direction.UP: frozenset({0, 1, 2}),
    Direction.DOWN: frozenset({6, 7, 8}),
    Direction.LEFT: frozenset({0, 3, 6}),
    Direction.RIGHT: frozenset({2, 5, 8}),
}

_OFFSETS = {
    Direction.UP: -3,
    Direction.DOWN: 3,
    Direction.LEFT: -1,
    Direction.RIGHT: 1,
}


def step(position: int, direction: Direction) -> int:
    """
    Work out where the cursor lands after one move.

    Args:
        position: Current cell (0-8).
        direction: UP, DOWN, LEFT or RIGHT.

    Returns:
        The new cell.

    Raises:
        OutOfBoundsError: the move would leave the 3x3 grid.
        ValueError: direction is not a movement.
    """
    if direction not in _OFFSETS:
        raise ValueError(f"{direction} is not a cursor movement")
    if not 0 <= position <= 8:
        raise ValueError(f"Cursor position {position} is outside the board")

    if position in _EDGES[direction]:
        raise OutOfBoundsError(position, direction.value)
    return position + _OFFSETS[direction]


class CursorController:
    """
    Tracks the highlighted cell on the 3x3 grid.

    A move that would leave the grid raises OutOfBoundsError and the
    position stays where it was.
    """

    def __init__(self, position: int = GameConfig.CURSOR_START):
        if not 0 <= position <= 8:
            raise ValueError(f"Cursor position {position} is outside the board")
        self.position = position

    def move(self, direction: Direction) -> int:
        """Move one cell in ``direction`` and return the new position."""
        self.position = step(self.position, direction)
        return self.position

    def move_up(self) -> int:
        return self.move(Direction.UP)

    def move_down(self) -> int:
        return self.move(Direction.DOWN)

    def move_left(self) -> int:
        return self.move(Direction.LEFT)

    def move_right(self) -> int:
        return self.move(Direction.RIGHT)

    def select(self) -> int:
        """
        Choose the highlighted cell.

        Whether the cell is free is for the caller to check.
        """
        return self.position

    def reset(self, position: int = GameConfig.CURSOR_START) -> None:
        if not 0 <= position <= 8:
            raise ValueError(f"Cursor position {position} is outside the board")
        self.position = position
