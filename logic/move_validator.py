"""
Move validator for N×N tic-tac-toe.
Parses typed moves and checks them against the rules.
"""

from typing import Optional, Tuple
from dataclasses import dataclass
from .game_state import GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates tic-tac-toe moves.

    Rules:
    1. Input must look like "row,col"
    2. The position must be on the board
    3. Can only place on empty cells
    """

    def parse_move(self, text: str) -> Tuple[Optional[Tuple[int, int]], ValidationResult]:
        """
        Parse a move typed as "row,col".

        Args:
            text: Raw user input.

        Returns:
            ((row, col), result) on success, (None, result) otherwise.
        """
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 2:
            return None, ValidationResult(
                is_valid=False,
                error_message="Invalid input. Enter row and column separated by a comma, or a command."
            )

        try:
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            return None, ValidationResult(
                is_valid=False,
                error_message=f"Invalid input '{text.strip()}'. Row and column must be numbers."
            )

        return (row, col), ValidationResult(is_valid=True)

    def validate_move(
        self,
        game_state: GameState,
        row: int,
        col: int
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            row: Row to place the marker.
            col: Column to place the marker.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if row/col are in valid range
        if not game_state.in_bounds(row, col):
            last = game_state.size - 1
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({row}, {col}). Must be 0-{last}."
            )

        # Check if cell is empty
        occupant = game_state.board[row][col]
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({row}, {col}) is already occupied by {occupant.value}"
            )

        # All checks passed!
        return ValidationResult(is_valid=True)
