"""
Game state management for N×N tic-tac-toe.
Tracks the board, current player, and move history.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

import numpy as np

from .config import GameConfig
from .lines import EMPTY_CODE, line_windows

logger = logging.getLogger(__name__)


class Player(Enum):
    """The two players in the game."""
    O = "O"
    X = "X"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.X if self == Player.O else Player.O

    @property
    def code(self) -> int:
        """Numeric code of this player's marker in the numpy board view."""
        return 1 if self == Player.O else 2


@dataclass
class Move:
    """
    A move in the game.
    """
    row: int                # Row (0 to size-1)
    col: int                # Column (0 to size-1)
    player: Player          # Who made the move

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "col": self.col, "player": self.player.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Move":
        return cls(row=int(data["row"]), col=int(data["col"]), player=Player(data["player"]))


@dataclass
class GameState:
    """
    The complete state of an N×N tic-tac-toe game.

    Tracks:
    - The size x size board (which marker is where)
    - How many markers in a row win
    - Move history (replaying it reproduces the board)
    - Current player

    Size and win length are fixed for the lifetime of the state. The board
    only changes through place() and undo().
    """

    size: int = GameConfig.BOARD_SIZE
    win_length: int = GameConfig.WIN_LENGTH

    # The board - None means empty, otherwise the Player whose marker is there
    board: List[List[Optional[Player]]] = field(default_factory=list)

    # Current player's turn
    current_player: Player = Player.O

    # Move history
    moves: List[Move] = field(default_factory=list)

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if not 1 <= self.win_length <= self.size:
            raise ValueError(
                f"Win length must be between 1 and {self.size}, got {self.win_length}"
            )
        if not self.board:
            self.board = [[None for _ in range(self.size)] for _ in range(self.size)]

    def in_bounds(self, row: int, col: int) -> bool:
        """Check that (row, col) is on the board."""
        return 0 <= row < self.size and 0 <= col < self.size

    def place(self, row: int, col: int, player: Player) -> bool:
        """
        Place a player's marker at the given position.

        Args:
            row: Row index.
            col: Column index.
            player: Whose marker to place.

        Returns:
            True if the marker was placed, False if the cell is off the
            board or already occupied (the state is left unchanged).
        """
        if not self.in_bounds(row, col):
            logger.debug("Rejected move (%s, %s): off the board", row, col)
            return False

        if self.board[row][col] is not None:
            logger.debug("Rejected move (%s, %s): cell is occupied", row, col)
            return False

        self.board[row][col] = player
        self.moves.append(Move(row=row, col=col, player=player))
        return True

    def undo(self) -> Optional[Move]:
        """
        Take back the most recent move.

        Returns:
            The removed Move, or None if there is nothing to undo.
        """
        if not self.moves:
            return None

        move = self.moves.pop()
        self.board[move.row][move.col] = None
        return move

    def switch_player(self):
        """Hand the turn to the other player."""
        self.current_player = self.current_player.opposite()

    def to_array(self) -> np.ndarray:
        """
        Encode the board as a numpy array of cell codes.

        Returns:
            (size, size) int8 array: 0 for empty, else Player.code.
        """
        return np.array(
            [[EMPTY_CODE if cell is None else cell.code for cell in row] for row in self.board],
            dtype=np.int8,
        )

    def check_win(self, player: Player) -> bool:
        """
        Check whether a player has `win_length` markers in a row.

        Rows, columns, diagonals and anti-diagonals are all checked.
        """
        windows = line_windows(self.to_array(), self.win_length)
        return bool(np.any(np.all(windows == player.code, axis=1)))

    def check_draw(self) -> bool:
        """
        Check whether the board is full.

        Does not look for a winner: check_win must be asked first, a full
        board with a winning line is a win.
        """
        return all(cell is not None for row in self.board for cell in row)

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get all empty cells on the board.

        Returns:
            List of (row, col) tuples in row-major order.
        """
        empty = []
        for row in range(self.size):
            for col in range(self.size):
                if self.board[row][col] is None:
                    empty.append((row, col))
        return empty

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            size=self.size,
            win_length=self.win_length,
            board=[list(row) for row in self.board],
            current_player=self.current_player,
            moves=[Move(m.row, m.col, m.player) for m in self.moves],
        )

    def serialize(self) -> Dict[str, Any]:
        """
        Convert the state into a plain record (JSON friendly).

        Returns:
            Dict with size, win_length, board, move_history and current_player.
        """
        return {
            "size": self.size,
            "win_length": self.win_length,
            "board": [
                [None if cell is None else cell.value for cell in row]
                for row in self.board
            ],
            "move_history": [move.to_dict() for move in self.moves],
            "current_player": self.current_player.value,
        }

    def restore_from(self, record: Dict[str, Any]):
        """
        Replace this state with the contents of a serialized record.

        Args:
            record: A dict produced by serialize().

        Raises:
            ValueError: If the record is malformed or inconsistent.
        """
        try:
            size = int(record["size"])
            win_length = int(record["win_length"])
            board = [
                [None if cell is None else Player(cell) for cell in row]
                for row in record["board"]
            ]
            moves = [Move.from_dict(m) for m in record["move_history"]]
            current_player = Player(record["current_player"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed game state record: {e}") from e

        if size < 1 or not 1 <= win_length <= size:
            raise ValueError(f"Invalid board geometry: size={size}, win_length={win_length}")
        if len(board) != size or any(len(row) != size for row in board):
            raise ValueError(f"Board is not {size}x{size}")

        # The history must replay to exactly this board
        replay = [[None for _ in range(size)] for _ in range(size)]
        for move in moves:
            if not (0 <= move.row < size and 0 <= move.col < size):
                raise ValueError(f"Move ({move.row}, {move.col}) is off the board")
            if replay[move.row][move.col] is not None:
                raise ValueError(f"Move ({move.row}, {move.col}) repeats an occupied cell")
            replay[move.row][move.col] = move.player
        if replay != board:
            raise ValueError("Move history does not match the board")

        self.size = size
        self.win_length = win_length
        self.board = board
        self.moves = moves
        self.current_player = current_player

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "GameState":
        """Build a new GameState from a serialized record."""
        state = cls(size=1, win_length=1)
        state.restore_from(record)
        return state

    def render(self) -> str:
        """Draw the board as text, with row and column numbers."""
        header = "    " + "".join(f"{col:^4}" for col in range(self.size))
        divider = "   +" + "---+" * self.size
        lines = [header, divider]
        for row in range(self.size):
            cells = "".join(
                f" {' ' if cell is None else cell.value} |" for cell in self.board[row]
            )
            lines.append(f"{row:>2} |{cells}")
            lines.append(divider)
        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())
        print(f"\nCurrent turn: {self.current_player.value}")
