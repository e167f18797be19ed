"""
Terminal module for tic-tac-toe.
Handles ANSI drawing, raw keyboard input and the game display.
"""

from .config import DisplayConfig
from .screen import Screen, raw_mode
from .keyboard import KeyReader
from .line import Line
from .display import TerminalDisplay
