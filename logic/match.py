"""
Match history: the finished boards of a multi-game session.
"""

from typing import Iterator, List, Optional
from dataclasses import dataclass, field

from .board import Board, Marker


@dataclass
class MatchHistory:
    """
    Finished games, oldest first.

    Boards are only ever appended. The win and tie counts are tallied
    from each board's winner.
    """

    boards: List[Board] = field(default_factory=list)

    def record(self, board: Board) -> None:
        """
        Add a finished game.

        Args:
            board: The final board. A copy is stored, so the caller may
                reset its board for the next game.
        """
        if not board.is_terminal():
            raise ValueError("Only finished games can be recorded")
        self.boards.append(board.copy())

    def winners(self) -> List[Optional[Marker]]:
        return [board.winner() for board in self.boards]

    @property
    def games_played(self) -> int:
        return len(self.boards)

    @property
    def computer_wins(self) -> int:
        return self.winners().count(Marker.COMPUTER)

    @property
    def human_wins(self) -> int:
        return self.winners().count(Marker.HUMAN)

    @property
    def ties(self) -> int:
        return self.winners().count(None)

    def __len__(self) -> int:
        return len(self.boards)

    def __iter__(self) -> Iterator[Board]:
        return iter(self.boards)
