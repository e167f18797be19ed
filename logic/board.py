"""
Board for tic-tac-toe.
Holds the 9 cells and works out whether the game is over.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, field

from .errors import CellOccupiedError, IndexOutOfRangeError
from .win_checker import WinChecker


class Marker(Enum):
    """The two sides in the game."""
    HUMAN = "human"
    COMPUTER = "computer"

    def opposite(self) -> "Marker":
        """Get the other side."""
        return Marker.COMPUTER if self == Marker.HUMAN else Marker.HUMAN


BOARD_CELLS = 9

_win_checker = WinChecker()


@dataclass
class Board:
    """
    The 3x3 board, stored flat.

    Index layout:
        0 1 2
        3 4 5
        6 7 8

    A cell is None when empty, otherwise the Marker that took it.
    Cells only ever go from empty to taken.
    """

    squares: List[Optional[Marker]] = field(
        default_factory=lambda: [None] * BOARD_CELLS
    )

    # Index of the last placement, None on a fresh board
    latest_move: Optional[int] = field(default=None, compare=False)

    @classmethod
    def from_cells(cls, cells: Iterable[Optional[Marker]]) -> "Board":
        """
        Build a board from 9 cells (None or Marker).

        Useful for setting up positions in tests. No play-order check is
        done, the cells are taken as given.
        """
        cells = list(cells)
        if len(cells) != BOARD_CELLS:
            raise ValueError(f"A board has {BOARD_CELLS} cells, got {len(cells)}")
        for cell in cells:
            if cell is not None and not isinstance(cell, Marker):
                raise ValueError(f"Invalid cell value: {cell!r}")
        return cls(squares=cells)

    @property
    def cells(self) -> Tuple[Optional[Marker], ...]:
        """Read-only snapshot of the cells."""
        return tuple(self.squares)

    def __getitem__(self, index: int) -> Optional[Marker]:
        self._check_index(index)
        return self.squares[index]

    def place(self, index: int, marker: Marker) -> None:
        """
        Put a marker on an empty cell.

        Args:
            index: Cell index (0-8).
            marker: Who is moving.

        Raises:
            IndexOutOfRangeError: index is not 0-8.
            CellOccupiedError: the cell is already taken.
        """
        self._check_index(index)
        if not isinstance(marker, Marker):
            raise ValueError(f"Invalid marker: {marker!r}")
        if self.squares[index] is not None:
            raise CellOccupiedError(index)

        self.squares[index] = marker
        self.latest_move = index

    def winner(self) -> Optional[Marker]:
        """The marker owning a complete line, or None."""
        return _win_checker.check_winner(self.squares)

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        """The first complete line (rows, columns, diagonals), or None."""
        return _win_checker.get_winning_line(self.squares)

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.squares)

    def is_terminal(self) -> bool:
        """True once someone has won or no empty cell is left."""
        return self.winner() is not None or self.is_full()

    def legal_moves(self) -> List[int]:
        """Empty cell indices, in ascending order."""
        return [i for i, cell in enumerate(self.squares) if cell is None]

    def copy(self) -> "Board":
        """Create an independent copy of the board."""
        return Board(squares=list(self.squares), latest_move=self.latest_move)

    def reset(self) -> None:
        """Empty every cell for a new game."""
        self.squares = [None] * BOARD_CELLS
        self.latest_move = None

    def _check_index(self, index) -> None:
        # bool is an int subclass, but True/False are not board positions
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(index)
        if not 0 <= index < BOARD_CELLS:
            raise IndexOutOfRangeError(index)

    def __str__(self) -> str:
        symbols = {None: ".", Marker.COMPUTER: "X", Marker.HUMAN: "O"}
        rows = []
        for start in range(0, BOARD_CELLS, 3):
            rows.append(" ".join(symbols[cell] for cell in self.squares[start:start + 3]))
        return "\n".join(rows)
