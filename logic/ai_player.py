"""
AI player for N×N tic-tac-toe.
Picks moves by difficulty: random, rule based, or Minimax with alpha-beta.
"""

import logging
import random
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .config import GameConfig
from .game_state import GameState, Move, Player
from .lines import line_windows

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"        # Random moves
    MEDIUM = "medium"    # Win, block, centre, corners
    HARD = "hard"        # Minimax, shallow
    MASTER = "master"    # Minimax, deep


class AIPlayer:
    """
    An AI that plays N×N tic-tac-toe.

    EASY picks a random empty cell. MEDIUM runs a fixed rule list: win if
    possible, block the opponent's win, take the centre, take a corner,
    otherwise play randomly. HARD and MASTER search with Minimax and
    alpha-beta pruning to a depth set by GameConfig.DIFFICULTY_DEPTHS.

    The AI never changes the state it is given; it searches on a copy.
    """

    def __init__(
        self,
        player: Player = Player.X,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng=None,
        use_pruning: bool = True,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (default: X)
            difficulty: How strong the AI plays.
            rng: Random source with a choice(sequence) method. A private
                random.Random is used if not provided.
            use_pruning: Cut branches with alpha-beta. Turning it off gives
                plain Minimax, which picks the same moves more slowly.
            config: Game configuration. Uses defaults if not provided.
        """
        self.config = config or GameConfig()
        self.player = player
        self.opponent = player.opposite()
        self.difficulty = difficulty
        self.max_depth = self.config.DIFFICULTY_DEPTHS[difficulty.value]
        self.rng = rng if rng is not None else random.Random()
        self.use_pruning = use_pruning

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def select_move(self, game_state: GameState) -> Optional[Move]:
        """
        Choose the AI's next move.

        Args:
            game_state: Current game state. Not modified.

        Returns:
            The chosen Move, or None if the board is full.
        """
        if self.difficulty == Difficulty.EASY:
            cell = self.random_move(game_state)
        elif self.difficulty == Difficulty.MEDIUM:
            cell = self.heuristic_move(game_state)
        else:
            cell = self.minimax_move(game_state)

        if cell is None:
            return None

        row, col = cell
        return Move(row=row, col=col, player=self.player)

    def random_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """Pick a random empty cell, or None if the board is full."""
        empty_cells = game_state.get_empty_cells()
        if not empty_cells:
            return None
        return self.rng.choice(empty_cells)

    def heuristic_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """
        Pick a move with the fixed rule list.

        1. Winning move for the AI
        2. Block the opponent's winning move
        3. The centre
        4. A corner (top-left, top-right, bottom-left, bottom-right)
        5. Random

        Args:
            game_state: Current game state.

        Returns:
            (row, col) of the move, or None if the board is full.
        """
        board = game_state.copy()
        empty_cells = board.get_empty_cells()

        if not empty_cells:
            return None

        winning = self._find_winning_cell(board, self.player)
        if winning is not None:
            return winning

        blocking = self._find_winning_cell(board, self.opponent)
        if blocking is not None:
            return blocking

        center = board.size // 2
        if board.board[center][center] is None:
            return (center, center)

        last = board.size - 1
        for row, col in [(0, 0), (0, last), (last, 0), (last, last)]:
            if board.board[row][col] is None:
                return (row, col)

        return self.random_move(board)

    def _find_winning_cell(self, board: GameState, player: Player) -> Optional[Tuple[int, int]]:
        """First empty cell (row-major) where `player` would complete a line."""
        for row, col in board.get_empty_cells():
            board.place(row, col, player)
            won = board.check_win(player)
            board.undo()
            if won:
                return (row, col)
        return None

    def minimax_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """
        Get the best move for the current position with Minimax.

        Args:
            game_state: Current game state.

        Returns:
            (row, col) of best move, or None if no moves available.
        """
        self.positions_evaluated = 0

        board = game_state.copy()
        empty_cells = board.get_empty_cells()

        if not empty_cells:
            return None

        # Special case: if only one move, just take it
        if len(empty_cells) == 1:
            return empty_cells[0]

        # Too many branches in the opening, use the rules instead
        if len(empty_cells) > board.size * board.size - self.config.OPENING_EMPTY_MARGIN:
            return self.heuristic_move(board)

        best_score = float('-inf')
        best_move = None

        for row, col in empty_cells:
            # Try this move
            board.place(row, col, self.player)
            score = self._minimax(board, 0, False, float('-inf'), float('inf'))
            board.undo()

            if score > best_score:
                best_score = score
                best_move = (row, col)

        logger.debug(
            "AI %s evaluated %d positions. Best move: %s (score: %s)",
            self.player.value, self.positions_evaluated, best_move, best_score
        )

        return best_move

    def _minimax(
        self,
        game_state: GameState,
        depth: int,
        is_maximizing: bool,
        alpha: float,
        beta: float
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            game_state: State to evaluate. Moves are placed and undone in place.
            depth: How many plies below the root move we are.
            is_maximizing: True if it's the AI's turn.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        own, opponent = self._count_windows(game_state)
        win_score = self.config.WIN_SCORE

        # Check terminal states
        if np.any(own == game_state.win_length):
            return win_score - depth  # Win (prefer faster wins)
        if np.any(opponent == game_state.win_length):
            return -win_score + depth  # Loss (prefer slower losses)

        if game_state.check_draw() or depth >= self.max_depth:
            return self._score_windows(own, opponent)

        if is_maximizing:
            max_score = float('-inf')
            for row, col in game_state.get_empty_cells():
                game_state.place(row, col, self.player)
                score = self._minimax(game_state, depth + 1, False, alpha, beta)
                game_state.undo()

                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if self.use_pruning and beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            for row, col in game_state.get_empty_cells():
                game_state.place(row, col, self.opponent)
                score = self._minimax(game_state, depth + 1, True, alpha, beta)
                game_state.undo()

                min_score = min(min_score, score)
                beta = min(beta, score)
                if self.use_pruning and beta <= alpha:
                    break  # Prune
            return min_score

    def evaluate_board(self, game_state: GameState) -> int:
        """
        Score a position from the AI's point of view.

        Each line window with only AI markers adds BASE ** count, each
        window with only opponent markers subtracts BASE ** count. Mixed
        and empty windows score nothing.

        Args:
            game_state: The position.

        Returns:
            Heuristic score (positive is good for the AI).
        """
        own, opponent = self._count_windows(game_state)
        return self._score_windows(own, opponent)

    def _count_windows(self, game_state: GameState) -> Tuple[np.ndarray, np.ndarray]:
        """Count AI and opponent markers in every line window."""
        windows = line_windows(game_state.to_array(), game_state.win_length)
        own = np.count_nonzero(windows == self.player.code, axis=1)
        opponent = np.count_nonzero(windows == self.opponent.code, axis=1)
        return own, opponent

    def _score_windows(self, own: np.ndarray, opponent: np.ndarray) -> int:
        base = self.config.LINE_SCORE_BASE
        own_only = own[(opponent == 0) & (own > 0)]
        opponent_only = opponent[(own == 0) & (opponent > 0)]
        # Python ints: base ** win_length overflows int64 on long lines
        return (
            sum(base ** int(count) for count in own_only)
            - sum(base ** int(count) for count in opponent_only)
        )

    def get_move_suggestion(self, game_state: GameState) -> str:
        """
        Get a human-readable move suggestion.

        Args:
            game_state: Current game state.

        Returns:
            A string describing the suggested move.
        """
        move = self.select_move(game_state)

        if move is None:
            return "No moves available!"

        return f"Hint: row={move.row}, col={move.col} might be a good move."
