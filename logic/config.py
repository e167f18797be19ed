"""
Game logic configuration for tic-tac-toe.
"""


class GameConfig:
    """
    Settings for the decision engine and the turn controller.
    Command line flags in main.py override these for a single run.
    """

    # ==================== CURSOR ====================
    # Cell the cursor jumps to at the start of every human turn
    CURSOR_START = 4  # center

    # ==================== ENGINE ====================
    # Score wins as 1 + empty cells left so faster wins (and slower
    # losses) are preferred. False scores every win as 1.
    DEPTH_WEIGHTED = True

    # Reuse one search node for positions reached by different move
    # orders within a single search. Does not change the chosen move.
    SHARE_TRANSPOSITIONS = True
