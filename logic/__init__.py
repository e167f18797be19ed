"""
Logic module for terminal tic-tac-toe.
Handles the board, rules, cursor navigation, turns and the minimax AI.
"""

from .board import Board, Marker
from .cursor import CursorController, Direction
from .match import MatchHistory
from .minimax import MinimaxEngine, SearchNode
from .move_validator import MoveValidator, ValidationResult
from .turn_controller import Display, TurnController, TurnState
from .win_checker import WinChecker, WINNING_LINES

__version__ = "1.0.0"
