"""
Win checker for N×N tic-tac-toe.
Checks if a player has won or if the game is a draw.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .game_state import GameState, Player
from .lines import line_windows, window_cells


@dataclass
class GameResult:
    """Outcome of a position, as seen by the game loop."""
    is_game_over: bool = False
    winner: Optional[Player] = None
    is_draw: bool = False
    winning_line: Optional[List[Tuple[int, int]]] = None


class WinChecker:
    """
    Checks for win conditions in N×N tic-tac-toe.

    Win condition: `win_length` markers of the same player in a row
    (horizontally, vertically, or diagonally in either direction)
    """

    def has_won(self, game_state: GameState, player: Player) -> bool:
        """Check whether `player` has a winning line."""
        return game_state.check_win(player)

    def check_winner(self, game_state: GameState) -> Optional[Player]:
        """
        Check if there's a winner.

        Args:
            game_state: The current game state.

        Returns:
            The winning Player, or None if no winner yet.
        """
        for player in Player:
            if self.has_won(game_state, player):
                return player

        return None

    def check_draw(self, game_state: GameState) -> bool:
        """
        Check if the board is full.

        The winner has to be checked first; see game_result().
        """
        return game_state.check_draw()

    def get_winning_line(self, game_state: GameState) -> Optional[List[Tuple[int, int]]]:
        """
        Get the winning line if there is one.

        Args:
            game_state: The game state.

        Returns:
            The winning line as list of (row, col), or None.
        """
        windows = line_windows(game_state.to_array(), game_state.win_length)
        for player in Player:
            complete = np.flatnonzero(np.all(windows == player.code, axis=1))
            if complete.size:
                return window_cells(game_state.size, game_state.win_length, int(complete[0]))
        return None

    def game_result(self, game_state: GameState) -> GameResult:
        """
        Work out whether the game is over, and how.

        A full board with a winning line is a win, so the winner is
        checked before the draw.

        Args:
            game_state: The game state.

        Returns:
            GameResult describing the position.
        """
        winner = self.check_winner(game_state)

        if winner is not None:
            return GameResult(
                is_game_over=True,
                winner=winner,
                winning_line=self.get_winning_line(game_state),
            )

        if self.check_draw(game_state):
            return GameResult(is_game_over=True, is_draw=True)

        return GameResult()
