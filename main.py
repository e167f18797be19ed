"""
Main entry point for terminal tic-tac-toe.

This script ties together:
- Logic (board, minimax engine, cursor, turn controller)
- Terminal (ANSI drawing and arrow-key input)

Run this script to play tic-tac-toe against a computer that never loses!
"""

import argparse
import logging
import sys
from typing import List, Optional

from logic.board import Marker
from logic.config import GameConfig
from logic.errors import GameCancelled
from logic.match import MatchHistory
from logic.minimax import MinimaxEngine
from logic.turn_controller import TurnController
from terminal.config import DisplayConfig
from terminal.display import TerminalDisplay


logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


class TicTacToeGame:
    """
    Main controller for a terminal session.

    Session flow:
    1. Show the welcome banner
    2. Switch the terminal to raw mode and draw the board
    3. Play one game, a fixed number of games, or until the player stops
    4. Restore the terminal and print the match score
    """

    def __init__(
        self,
        first_player: Optional[Marker] = None,
        games: Optional[int] = 1,
        computer_delay: Optional[float] = None,
        depth_weighted: Optional[bool] = None,
    ):
        """
        Initialize the session.

        Args:
            first_player: Who opens every game. Asked each game when None.
            games: Games to play. None keeps asking "Play again?".
            computer_delay: Pause before computer moves, in seconds.
            depth_weighted: Prefer faster wins (see GameConfig).
        """
        self.first_player = first_player
        self.games = games

        self.game_config = GameConfig()
        self.display_config = DisplayConfig()
        self.engine = MinimaxEngine(depth_weighted=depth_weighted, config=self.game_config)
        self.history = MatchHistory()
        self.display = TerminalDisplay(self.display_config, computer_delay=computer_delay)

    def start(self) -> MatchHistory:
        """Run the session. GameCancelled propagates to the caller."""
        print("\n" + "=" * 60)
        print("   Tic-Tac-Toe - you can't beat the computer, but try!")
        print(f"   You play {self.display_config.HUMAN_MARKER}, "
              f"the computer plays {self.display_config.COMPUTER_MARKER}")
        print("=" * 60 + "\n")

        with self.display:
            controller = TurnController(
                self.display,
                engine=self.engine,
                history=self.history,
                config=self.game_config,
            )
            controller.play_match(self.first_player, self.games)
            self.display.pause()

        return self.history

    def show_match_result(self):
        """Print the final score once the terminal is back to normal."""
        if not self.history.games_played:
            return

        print("\n" + "=" * 60)
        print("   MATCH OVER!")
        print("=" * 60)
        print(f"   Games played: {self.history.games_played}")
        print(f"   Computer wins: {self.history.computer_wins}")
        print(f"   Your wins: {self.history.human_wins}")
        print(f"   Ties: {self.history.ties}")
        print("=" * 60 + "\n")


def setup_logging(log_file: Optional[str], level: str) -> None:
    """
    Configure logging.

    The game owns the screen while it runs, so log records go to a file
    when one is given. Otherwise only warnings reach stderr.
    """
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if log_file:
        logging.basicConfig(filename=log_file, level=level.upper(), format=fmt)
    else:
        logging.basicConfig(level=logging.WARNING, format=fmt)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tic-tac-toe against a perfect computer player")

    first = parser.add_mutually_exclusive_group()
    first.add_argument(
        "--human-first",
        action="store_true",
        help="You make the first move of every game"
    )
    first.add_argument(
        "--computer-first",
        action="store_true",
        help="The computer makes the first move of every game"
    )

    games = parser.add_mutually_exclusive_group()
    games.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play (default: 1)"
    )
    games.add_argument(
        "--match",
        action="store_true",
        help="Keep playing until you answer 'n' to 'Play again?'"
    )

    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Don't pause before the computer's move"
    )
    parser.add_argument(
        "--unit-scores",
        action="store_true",
        help="Score every win the same instead of preferring faster wins"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log records to this file"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for --log-file (default: INFO)"
    )

    args = parser.parse_args(argv)
    if not args.match and args.games < 1:
        parser.error("--games must be at least 1")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    if args.human_first:
        first_player = Marker.HUMAN
    elif args.computer_first:
        first_player = Marker.COMPUTER
    else:
        first_player = None

    game = TicTacToeGame(
        first_player=first_player,
        games=None if args.match else args.games,
        computer_delay=0.0 if args.no_delay else None,
        depth_weighted=False if args.unit_scores else None,
    )

    exit_code = 0
    try:
        game.start()
    except (GameCancelled, KeyboardInterrupt):
        logger.info("Session interrupted by player")
        print("\nGame interrupted by user.")
        exit_code = EXIT_CANCELLED
    finally:
        game.show_match_result()
        print("Goodbye!")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
