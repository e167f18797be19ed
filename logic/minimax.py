"""
Minimax engine for tic-tac-toe.
Builds the game tree from the current board and picks a move the
computer can never lose from.
"""

import logging
from typing import Dict, Optional, Tuple

from .board import Board, Marker
from .config import GameConfig
from .errors import NoLegalMovesError


logger = logging.getLogger(__name__)

PositionKey = Tuple[Tuple[Optional[Marker], ...], Marker]


class SearchNode:
    """
    One position in the game tree.

    ``children`` maps each legal move index to the position it leads to,
    in ascending index order. It is empty for a finished board. ``score``
    stays None until the engine backs it up from the leaves.
    """

    def __init__(self, board: Board, to_move: Marker):
        self.board = board
        self.to_move = to_move
        self.children: Dict[int, "SearchNode"] = {}
        self.score: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.board.is_terminal()

    def __repr__(self) -> str:
        return (
            f"SearchNode(to_move={self.to_move.value}, "
            f"children={len(self.children)}, score={self.score})"
        )


class MinimaxEngine:
    """
    Plays perfect tic-tac-toe by exhaustive minimax search.

    The computer is always the maximizing side and the human the
    minimizing side, whichever of them is to move at the root. Each call
    builds a fresh tree and throws it away afterwards.
    """

    def __init__(
        self,
        depth_weighted: Optional[bool] = None,
        share_transpositions: Optional[bool] = None,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize the engine.

        Args:
            depth_weighted: Prefer faster wins and slower losses.
                Defaults to GameConfig.DEPTH_WEIGHTED.
            share_transpositions: Reuse nodes for positions reached by
                different move orders. Defaults to
                GameConfig.SHARE_TRANSPOSITIONS.
            config: Game configuration. Uses defaults if not provided.
        """
        self.config = config or GameConfig()
        self.depth_weighted = (
            self.config.DEPTH_WEIGHTED if depth_weighted is None else depth_weighted
        )
        self.share_transpositions = (
            self.config.SHARE_TRANSPOSITIONS
            if share_transpositions is None
            else share_transpositions
        )

        # Number of nodes created by the last search (for debugging)
        self.last_search_size = 0

    def best_move(self, board: Board, acting_marker: Marker) -> int:
        """
        Get the best move for ``acting_marker``.

        Args:
            board: Current board. It is never modified.
            acting_marker: The side to move.

        Returns:
            Index (0-8) of the chosen cell. On equal scores the lowest
            index wins.

        Raises:
            NoLegalMovesError: the board is already finished.
        """
        if board.is_terminal() or not board.legal_moves():
            raise NoLegalMovesError("No legal moves on a finished board")

        root = self.expand(board, acting_marker)
        self.score(root)

        best_index = None
        best_score = None
        for index, child in root.children.items():
            if best_score is None or self._better(child.score, best_score, acting_marker):
                best_index = index
                best_score = child.score

        logger.debug(
            "%s plays %d (score %d, %d positions searched)",
            acting_marker.value, best_index, best_score, self.last_search_size,
        )
        return best_index

    def expand(self, board: Board, to_move: Marker) -> SearchNode:
        """
        Build the full game tree below ``board``.

        Args:
            board: Root position. A copy is taken.
            to_move: The side to move at the root.

        Returns:
            The root SearchNode, unscored.
        """
        table: Optional[Dict[PositionKey, SearchNode]] = (
            {} if self.share_transpositions else None
        )
        root = SearchNode(board.copy(), to_move)
        self.last_search_size = 1
        self._add_children(root, table)
        return root

    def _add_children(
        self,
        node: SearchNode,
        table: Optional[Dict[PositionKey, SearchNode]],
    ) -> None:
        if node.is_terminal:
            return

        next_to_move = node.to_move.opposite()
        for index in node.board.legal_moves():
            child_board = node.board.copy()
            child_board.place(index, node.to_move)

            if table is not None:
                key = (child_board.cells, next_to_move)
                child = table.get(key)
                if child is not None:
                    node.children[index] = child
                    continue

            child = SearchNode(child_board, next_to_move)
            self.last_search_size += 1
            if table is not None:
                table[key] = child
            node.children[index] = child
            self._add_children(child, table)

    def score(self, node: SearchNode) -> int:
        """
        Back up scores from the leaves to ``node``.

        The computer maximizes and the human minimizes, decided by who is
        to move at each node rather than by depth.
        """
        if node.score is not None:
            return node.score

        if not node.children:
            node.score = self._terminal_score(node.board)
            return node.score

        child_scores = [self.score(child) for child in node.children.values()]
        if node.to_move == Marker.COMPUTER:
            node.score = max(child_scores)
        else:
            node.score = min(child_scores)
        return node.score

    def _terminal_score(self, board: Board) -> int:
        winner = board.winner()
        if winner is None:
            return 0  # Tie

        weight = 1
        if self.depth_weighted:
            weight += len(board.legal_moves())

        return weight if winner == Marker.COMPUTER else -weight

    @staticmethod
    def _better(score: int, best_score: int, acting_marker: Marker) -> bool:
        # Strict comparison keeps the first (lowest index) move on ties
        if acting_marker == Marker.COMPUTER:
            return score > best_score
        return score < best_score


# Quick test
if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    engine = MinimaxEngine()
    X, O, _ = Marker.COMPUTER, Marker.HUMAN, None

    # Human threatens the middle column, the computer must block at 1
    board = Board.from_cells([_, _, X, X, O, O, _, O, X])
    print(board)
    move = engine.best_move(board, Marker.COMPUTER)
    print(f"Engine plays {move}")
    assert move == 1, f"Expected 1, got {move}"

    print("\nMinimaxEngine test done!")
