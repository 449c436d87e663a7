"""
Storage module for N×N tic-tac-toe.
Handles saved games and win/loss/draw statistics.
"""

from .config import StorageConfig
from .game_storage import GameStorage, SavedGame, Stats
