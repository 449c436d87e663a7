"""
Storage configuration for N×N tic-tac-toe.
Where saved games and statistics live on disk.
"""


class StorageConfig:
    """
    Configuration for saved games and statistics.
    Paths are relative to the working directory unless absolute.
    """

    # ==================== SAVED GAMES ====================
    SAVE_DIR = "saves"
    SAVE_EXTENSION = ".json"

    # ==================== STATISTICS ====================
    STATS_FILE = "stats.json"

    # ==================== FORMAT ====================
    JSON_INDENT = 2
    ENCODING = "utf-8"
