"""
Terminal display configuration for tic-tac-toe.
All the settings for drawing the board and reading keys.
"""

from colorama import Fore


class DisplayConfig:
    """
    Configuration class for the terminal display.
    Coordinates are (row, column), 1-based like ANSI cursor addressing.
    """

    # ==================== MARKERS ====================
    COMPUTER_MARKER = "X"
    HUMAN_MARKER = "O"
    CURSOR_MARKER = "‾"

    # ==================== LAYOUT ====================
    # Row for prompts and turn messages
    MESSAGE_ROW = 1
    # Row for warnings (bad key, taken cell, ...)
    WARNING_ROW = 2

    # (row, col) offset of the board from the upper left corner
    BOARD_OFFSET = (2, 2)

    # Grid lines before the offset is applied
    HORIZONTAL_LINES = (
        ((4, 1), (4, 13)),
        ((8, 1), (8, 13)),
    )
    VERTICAL_LINES = (
        ((1, 5), (11, 5)),
        ((1, 9), (11, 9)),
    )

    # Rows below the board for the result and the match score
    OUTCOME_ROW_GAP = 2
    SCORE_ROW_GAP = 3

    # ==================== LINE DRAWING ====================
    HORIZONTAL_CHAR = "─"
    VERTICAL_CHAR = "│"
    INTERSECTION_CHAR = "┼"

    # ==================== COLORS ====================
    WARNING_COLOR = Fore.CYAN
    WIN_COLOR = Fore.YELLOW

    # ==================== KEYS ====================
    ESCAPE = "\x1b"
    UP_ARROW = "\x1b[A"
    DOWN_ARROW = "\x1b[B"
    RIGHT_ARROW = "\x1b[C"
    LEFT_ARROW = "\x1b[D"
    CARRIAGE_RETURN = "\r"
    LINE_FEED = "\n"
    CTRL_C = "\x03"

    # ==================== TIMING ====================
    # Pause before the computer moves so the player can follow (seconds)
    COMPUTER_DELAY = 0.6
    # Short blink before a warning is redrawn (seconds)
    WARNING_BLINK = 0.08
