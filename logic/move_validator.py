"""
Move validator for tic-tac-toe.
Checks a human selection before it is applied to the board.
"""

from typing import Optional
from dataclasses import dataclass

from .board import Board, BOARD_CELLS


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates tic-tac-toe moves.

    Rules:
    1. The game must not be over
    2. The index must be on the board
    3. The cell must be empty
    """

    def validate_selection(self, board: Board, index: int) -> ValidationResult:
        """
        Validate a selected cell.

        Args:
            board: Current board.
            index: Selected cell (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if board.is_terminal():
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Check if index is in valid range
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be 0-8."
            )

        # Check if cell is empty
        if index not in board.legal_moves():
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already taken."
            )

        return ValidationResult(is_valid=True)
