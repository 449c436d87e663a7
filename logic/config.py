"""
Game configuration for the N×N tic-tac-toe game.
Board defaults, AI difficulty table, and scoring constants.
"""


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tune the game and the AI!
    """

    # ==================== BOARD SETTINGS ====================
    # Default board is 5x5 with 4 in a row to win
    BOARD_SIZE = 5
    WIN_LENGTH = 4

    # Sizes offered by the console front-end
    MIN_BOARD_SIZE = 3
    MAX_BOARD_SIZE = 7
    MIN_WIN_LENGTH = 3

    # ==================== AI SETTINGS ====================
    # Search depth for each difficulty level
    DIFFICULTY_DEPTHS = {
        "easy": 1,      # Random moves
        "medium": 2,    # Win / block / centre / corner rules
        "hard": 3,      # Minimax, shallow
        "master": 4,    # Minimax, deep
    }
    DEFAULT_DIFFICULTY = "medium"

    # Minimax falls back to the rule cascade while more than
    # size*size - OPENING_EMPTY_MARGIN cells are empty.
    # Tunable, not derived from depth or board size.
    OPENING_EMPTY_MARGIN = 3

    # Fake "thinking" pause before the AI moves (seconds)
    AI_THINK_DELAY = 1.0

    # ==================== SCORING ====================
    WIN_SCORE = 100         # Terminal score, adjusted by depth
    LINE_SCORE_BASE = 10    # Window with n markers scores BASE ** n
