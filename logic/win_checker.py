"""
Win checker for tic-tac-toe.
Finds three identical markers in a row on a flat 9-cell board.
"""

from typing import Optional, Sequence, Tuple


# All possible winning lines as board indices.
# Order matters: rows, then columns, then diagonals.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class WinChecker:
    """
    Checks for win conditions in tic-tac-toe.

    Cells are ``None`` when empty, otherwise a marker. Any hashable
    marker works, the checker only compares cells for equality.
    """

    def check_winner(self, cells: Sequence):
        """
        Check if there's a winner.

        Args:
            cells: The 9 board cells.

        Returns:
            The winning marker, or None if no line is complete.
        """
        line = self.get_winning_line(cells)
        if line is None:
            return None
        return cells[line[0]]

    def get_winning_line(self, cells: Sequence) -> Optional[Tuple[int, int, int]]:
        """
        Get the first complete line, scanning rows, columns, diagonals.

        Args:
            cells: The 9 board cells.

        Returns:
            The winning line as three indices, or None.
        """
        for line in WINNING_LINES:
            if self._check_line(cells, line):
                return line
        return None

    def _check_line(self, cells: Sequence, line: Tuple[int, int, int]) -> bool:
        """True if all three cells of the line hold the same marker."""
        a, b, c = line
        return cells[a] is not None and cells[a] == cells[b] == cells[c]
