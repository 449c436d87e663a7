"""
Logic module for N×N tic-tac-toe.
Handles game state, rules, and AI opponent.
"""

from .config import GameConfig
from .game_state import GameState, Move, Player
from .move_validator import MoveValidator, ValidationResult
from .win_checker import GameResult, WinChecker
from .ai_player import AIPlayer, Difficulty

__version__ = "1.0.0"
