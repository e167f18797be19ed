"""
Turn controller for tic-tac-toe.

Ties together:
- Board (the live game)
- MinimaxEngine (computer moves)
- CursorController + Display (human moves)

and runs single games or a match of several games.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from .board import Board, Marker
from .config import GameConfig
from .cursor import CursorController, Direction
from .errors import GameCancelled, OutOfBoundsError
from .match import MatchHistory
from .minimax import MinimaxEngine
from .move_validator import MoveValidator


logger = logging.getLogger(__name__)


class TurnState(Enum):
    """Where the game currently is."""
    AWAITING_FIRST_PLAYER = "awaiting_first_player"
    HUMAN_TURN = "human_turn"
    COMPUTER_TURN = "computer_turn"
    TERMINAL = "terminal"


class Display(Protocol):
    """
    Everything the controller needs from the screen and keyboard.
    terminal.display.TerminalDisplay is the real implementation.
    """

    def start_game(self, board: Board) -> None: ...

    def choose_first_player(self) -> Marker: ...

    def show_turn(self, marker: Marker) -> None: ...

    def render_move(self, index: int, marker: Marker) -> None: ...

    def move_cursor(self, position: int) -> None: ...

    def read_direction(self) -> Direction: ...

    def report_out_of_bounds(self) -> None: ...

    def report_invalid_selection(self) -> None: ...

    def report_outcome(self, winner: Optional[Marker]) -> None: ...

    def report_score(self, history: MatchHistory) -> None: ...

    def ask_play_again(self) -> bool: ...


class TurnController:
    """
    Alternates human and computer turns until the game ends.

    Game flow:
    1. Decide who goes first (asked through the display unless given)
    2. Human turn: move the cursor until a free cell is selected
    3. Computer turn: ask the engine for the best move
    4. After every move check for a win or a full board
    5. Report the outcome and record the board in the match history

    A CANCEL event raises GameCancelled, which ends the whole match.
    """

    def __init__(
        self,
        display: Display,
        engine: Optional[MinimaxEngine] = None,
        validator: Optional[MoveValidator] = None,
        history: Optional[MatchHistory] = None,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize the controller.

        Args:
            display: Screen and keyboard collaborator.
            engine: Computer player. A default MinimaxEngine if not given.
            validator: Checks human selections.
            history: Finished games of this session.
            config: Game configuration. Uses defaults if not provided.
        """
        self.display = display
        self.config = config or GameConfig()
        self.engine = engine or MinimaxEngine(config=self.config)
        self.validator = validator or MoveValidator()
        self.history = history if history is not None else MatchHistory()

        self.board = Board()
        self.cursor = CursorController(self.config.CURSOR_START)
        self.state = TurnState.AWAITING_FIRST_PLAYER

    # ==================== GAME SETUP ====================

    def new_game(self) -> None:
        """Clear the board and wait for the first player to be chosen."""
        self.board.reset()
        self.cursor.reset(self.config.CURSOR_START)
        self._set_state(TurnState.AWAITING_FIRST_PLAYER)
        self.display.start_game(self.board)

    def start(self, first_player: Optional[Marker] = None) -> None:
        """
        Resolve who moves first.

        Args:
            first_player: Who opens the game. Asked through the display
                when None.
        """
        if self.state != TurnState.AWAITING_FIRST_PLAYER:
            raise RuntimeError(f"Can't start a game from state {self.state.value}")

        if first_player is None:
            first_player = self.display.choose_first_player()

        self._set_state(self._turn_state_for(first_player))

    # ==================== TURNS ====================

    def step(self) -> None:
        """Play one turn for whoever is to move."""
        if self.state == TurnState.HUMAN_TURN:
            self._human_turn()
        elif self.state == TurnState.COMPUTER_TURN:
            self._computer_turn()
        else:
            raise RuntimeError(f"No turn to play in state {self.state.value}")

    def _human_turn(self) -> None:
        self.display.show_turn(Marker.HUMAN)
        self.cursor.reset(self.config.CURSOR_START)
        self.display.move_cursor(self.cursor.position)

        while True:
            index = self._read_selection()
            result = self.validator.validate_selection(self.board, index)
            if result.is_valid:
                break

            logger.info("Rejected selection: %s", result.error_message)
            self.display.report_invalid_selection()

        self._apply(index, Marker.HUMAN)

    def _read_selection(self) -> int:
        """Drive the cursor from player input until a cell is selected."""
        while True:
            direction = self.display.read_direction()

            if direction == Direction.CANCEL:
                logger.info("Game cancelled by player")
                raise GameCancelled("Game cancelled by player")

            if direction == Direction.SELECT:
                return self.cursor.select()

            try:
                position = self.cursor.move(direction)
            except OutOfBoundsError as e:
                logger.info("%s", e)
                self.display.report_out_of_bounds()
                continue

            self.display.move_cursor(position)

    def _computer_turn(self) -> None:
        self.display.show_turn(Marker.COMPUTER)
        index = self.engine.best_move(self.board, Marker.COMPUTER)
        self._apply(index, Marker.COMPUTER)

    def _apply(self, index: int, marker: Marker) -> None:
        self.board.place(index, marker)
        self.display.render_move(index, marker)
        logger.debug("%s took cell %d", marker.value, index)

        if self.board.is_terminal():
            self._finish()
        else:
            self._set_state(self._turn_state_for(marker.opposite()))

    def _finish(self) -> None:
        self._set_state(TurnState.TERMINAL)
        winner = self.board.winner()
        self.history.record(self.board)
        self.display.report_outcome(winner)

    # ==================== GAMES AND MATCHES ====================

    def play_game(self, first_player: Optional[Marker] = None) -> Optional[Marker]:
        """
        Play one full game.

        Args:
            first_player: Who opens. Asked through the display when None.

        Returns:
            The winner, or None for a tie.

        Raises:
            GameCancelled: the player cancelled mid-game.
        """
        self.new_game()
        self.start(first_player)

        while self.state != TurnState.TERMINAL:
            self.step()

        return self.board.winner()

    def play_match(
        self,
        first_player: Optional[Marker] = None,
        games: Optional[int] = None,
    ) -> MatchHistory:
        """
        Play games until the match is over.

        Args:
            first_player: Who opens every game. Asked each game when None.
            games: Number of games to play. When None the display is
                asked after each game whether to play again.

        Returns:
            The match history.
        """
        if games is not None and games < 1:
            raise ValueError("A match needs at least one game")

        played = 0
        while True:
            self.play_game(first_player)
            played += 1
            self.display.report_score(self.history)

            if games is not None:
                if played >= games:
                    break
            elif not self.display.ask_play_again():
                break

        return self.history

    # ==================== HELPERS ====================

    @staticmethod
    def _turn_state_for(marker: Marker) -> TurnState:
        if marker == Marker.HUMAN:
            return TurnState.HUMAN_TURN
        return TurnState.COMPUTER_TURN

    def _set_state(self, state: TurnState) -> None:
        logger.debug("Turn state: %s -> %s", self.state.value, state.value)
        self.state = state
