"""
Terminal display for tic-tac-toe.

Shows:
- The board, drawn with box characters
- An arrow-key cursor under the highlighted cell
- Turn messages, warnings, the result and the match score
"""

import logging
import time
from contextlib import ExitStack
from typing import Dict, List, Optional, Sequence, Tuple

from colorama import Style, just_fix_windows_console

from logic.board import Board, Marker
from logic.cursor import Direction
from logic.errors import GameCancelled
from logic.match import MatchHistory
from .config import DisplayConfig
from .keyboard import KeyReader
from .line import Line, Point
from .screen import Screen, raw_mode


logger = logging.getLogger(__name__)


def prettier_options(options: Sequence[str]) -> str:
    """
    Join key options for a prompt: "y or n", "a, b or c".
    A space is shown as "space".
    """
    names = ["space" if option == " " else option for option in options]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " or " + names[-1]


class TerminalDisplay:
    """
    Draws the game in a text terminal and reads the arrow keys.

    Use it as a context manager: entering puts the terminal into raw
    mode and clears the screen, leaving always restores the terminal.
    """

    def __init__(
        self,
        config: Optional[DisplayConfig] = None,
        screen: Optional[Screen] = None,
        keys: Optional[KeyReader] = None,
        terminal_setup: bool = True,
        computer_delay: Optional[float] = None,
    ):
        """
        Initialize the display.

        Args:
            config: Display configuration. Uses defaults if not provided.
            screen: Output. Defaults to stdout.
            keys: Keyboard input. Defaults to stdin.
            terminal_setup: Switch the real terminal to raw mode on enter.
                Pass False when testing with fake streams.
            computer_delay: Pause before the computer's move in seconds.
                Defaults to DisplayConfig.COMPUTER_DELAY.
        """
        self.config = config or DisplayConfig()
        self.screen = screen or Screen()
        self.keys = keys
        self.terminal_setup = terminal_setup
        self.computer_delay = (
            self.config.COMPUTER_DELAY if computer_delay is None else computer_delay
        )

        self.horizontal_lines = [self._apply_offset(line) for line in self.config.HORIZONTAL_LINES]
        self.vertical_lines = [self._apply_offset(line) for line in self.config.VERTICAL_LINES]
        self.center = self._calculate_center()
        self.square_coordinates = self._calculate_square_coordinates()
        self.cursor_coordinates = self._calculate_cursor_coordinates()

        self.cursor_position: Optional[int] = None
        self.warning_visible = False
        self.board: Optional[Board] = None

        self._exit_stack: Optional[ExitStack] = None

    # ==================== TERMINAL SETUP ====================

    def __enter__(self):
        """Switch to raw mode, hide the cursor and clear the screen."""
        self._exit_stack = ExitStack()
        if self.terminal_setup:
            just_fix_windows_console()
            self._exit_stack.enter_context(raw_mode())
        if self.keys is None:
            self.keys = KeyReader.for_stdin(self.config)

        self.screen.hide_cursor()
        self.screen.clear_screen()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Restore the terminal, even after Ctrl-C or an error."""
        try:
            self.screen.show_cursor()
            self.screen.clear_screen()
        finally:
            if self._exit_stack is not None:
                self._exit_stack.close()
                self._exit_stack = None

    # ==================== LAYOUT ====================

    def _apply_offset(self, line: Tuple[Point, Point]) -> Tuple[Point, Point]:
        row_offset, col_offset = self.config.BOARD_OFFSET
        start, stop = line
        return (
            (start[0] + row_offset, start[1] + col_offset),
            (stop[0] + row_offset, stop[1] + col_offset),
        )

    def _calculate_center(self) -> Point:
        (top_start, _), (bottom_start, _) = self.horizontal_lines
        (left_start, _), (right_start, _) = self.vertical_lines
        return (
            (top_start[0] + bottom_start[0]) // 2,
            (left_start[1] + right_start[1]) // 2,
        )

    def _calculate_distances(self) -> Point:
        """Rows and columns between neighbouring cell centres."""
        h_start, h_stop = self.horizontal_lines[0]
        v_start, v_stop = self.vertical_lines[0]
        col_dist = round((h_stop[1] - h_start[1] + 1) / 3.0)
        row_dist = round((v_stop[0] - v_start[0] + 1) / 3.0)
        return row_dist, col_dist

    def _calculate_square_coordinates(self) -> Dict[int, Point]:
        row_dist, col_dist = self._calculate_distances()
        center_row, center_col = self.center
        coordinates = {}
        for index in range(9):
            row, col = divmod(index, 3)
            coordinates[index] = (
                center_row + (row - 1) * row_dist,
                center_col + (col - 1) * col_dist,
            )
        return coordinates

    def _calculate_cursor_coordinates(self) -> Dict[int, Point]:
        # The cursor sits one row under the marker
        return {
            index: (row + 1, col)
            for index, (row, col) in self.square_coordinates.items()
        }

    @property
    def bottom_row(self) -> int:
        return max(stop[0] for _, stop in self.vertical_lines)

    # ==================== DRAWING ====================

    def start_game(self, board: Board) -> None:
        """Clear the screen and draw an empty grid (plus any markers)."""
        self.board = board
        self.cursor_position = None
        self.warning_visible = False

        self.screen.clear_screen()
        self.draw_board()
        for index, cell in enumerate(board.cells):
            if cell is not None:
                self.render_move(index, cell)

    def draw_board(self) -> None:
        drawn = set()
        for start, stop in self.horizontal_lines + self.vertical_lines:
            Line(start, stop, self.config).draw(self.screen, drawn)

    def marker_symbol(self, marker: Marker) -> str:
        if marker == Marker.COMPUTER:
            return self.config.COMPUTER_MARKER
        return self.config.HUMAN_MARKER

    def render_move(self, index: int, marker: Marker) -> None:
        self.screen.write_at(*self.square_coordinates[index], self.marker_symbol(marker))

    def move_cursor(self, position: int) -> None:
        """Move the highlighted cursor mark to a new cell."""
        if self.warning_visible:
            self.clear_warning()
        self._erase_cursor()
        self.cursor_position = position
        self.screen.move_to(*self.cursor_coordinates[position])
        self.screen.write_styled(self.config.CURSOR_MARKER, Style.BRIGHT)

    def _erase_cursor(self) -> None:
        if self.cursor_position is not None:
            self.screen.write_at(*self.cursor_coordinates[self.cursor_position], " ")
            self.cursor_position = None

    def highlight_line(self, line: Sequence[int]) -> None:
        """Redraw the markers of a winning line in color."""
        if self.board is None:
            return
        for index in line:
            marker = self.board.cells[index]
            if marker is None:
                continue
            self.screen.move_to(*self.square_coordinates[index])
            self.screen.write_styled(
                self.marker_symbol(marker), Style.BRIGHT, self.config.WIN_COLOR
            )

    # ==================== MESSAGES ====================

    def print_message(self, text: str) -> None:
        self.screen.clear_line(self.config.MESSAGE_ROW)
        self.screen.write(text)

    def print_warning(self, text: str) -> None:
        self.clear_warning()
        if self.config.WARNING_BLINK:
            time.sleep(self.config.WARNING_BLINK)
        self.screen.write_styled(text, self.config.WARNING_COLOR)
        self.warning_visible = True

    def clear_warning(self) -> None:
        self.screen.clear_line(self.config.WARNING_ROW)
        self.warning_visible = False

    def print_status(self, row_gap: int, text: str) -> None:
        row = self.bottom_row + row_gap
        self.screen.clear_line(row)
        self.screen.write(text)

    def show_turn(self, marker: Marker) -> None:
        if marker == Marker.HUMAN:
            self.print_message("Your move? (arrow keys to move cursor and Enter to select)")
        else:
            self._erase_cursor()
            self.print_message("Computer's move")
            if self.computer_delay:
                time.sleep(self.computer_delay)

    def report_out_of_bounds(self) -> None:
        self.print_warning("Sorry, can't move cursor there.")

    def report_invalid_selection(self) -> None:
        self.print_warning("Sorry, that move is taken.")

    def report_outcome(self, winner: Optional[Marker]) -> None:
        self._erase_cursor()
        self.clear_warning()
        if self.board is not None:
            line = self.board.winning_line()
            if line is not None:
                self.highlight_line(line)

        if winner == Marker.COMPUTER:
            text = "The computer wins!"
        elif winner == Marker.HUMAN:
            text = "You win!"
        else:
            text = "It's a tie!"
        self.print_status(self.config.OUTCOME_ROW_GAP, text)
        logger.info("Game over: %s", text)

    def report_score(self, history: MatchHistory) -> None:
        self.print_status(
            self.config.SCORE_ROW_GAP,
            f"Games: {history.games_played}  "
            f"Computer: {history.computer_wins}  "
            f"You: {history.human_wins}  "
            f"Ties: {history.ties}",
        )

    # ==================== INPUT ====================

    def read_direction(self) -> Direction:
        return self.keys.read_direction()

    def input_char(self, prompt: str, options: Optional[List[str]] = None) -> str:
        """
        Ask a one-key question.

        Args:
            prompt: Shown on the message row.
            options: Accepted keys. Any key is accepted when None.

        Returns:
            The key pressed.

        Raises:
            GameCancelled: Ctrl-C (or end of input) was pressed.
        """
        self.print_message(prompt)
        while True:
            key = self.keys.read_key()
            if self.keys.is_interrupt(key):
                raise GameCancelled("Game cancelled by player")

            if options is None or key.lower() in options:
                self.screen.clear_line(self.config.MESSAGE_ROW)
                self.clear_warning()
                return key.lower()

            self.print_warning(f"Please enter {prettier_options(options)}")

    def choose_first_player(self) -> Marker:
        answer = self.input_char("Would you like to go first? (y/n)", ["y", "n"])
        return Marker.HUMAN if answer == "y" else Marker.COMPUTER

    def ask_play_again(self) -> bool:
        return self.input_char("Play again? (y/n)", ["y", "n"]) == "y"

    def pause(self, prompt: str = "Press any key to exit") -> None:
        """
        Keep the final board on screen until a key is pressed.

        The game is already over, so Ctrl-C or end of input just end the
        wait like any other key.
        """
        self.print_message(prompt)
        key = self.keys.read_key()
        logger.debug("Pause ended with %r", key)
