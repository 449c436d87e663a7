"""
Main orchestration script for N×N tic-tac-toe.

This script ties together:
- Logic (game state, move validation, win checking, AI)
- Storage (saved games, statistics)

Run this script to play in the terminal, against a friend or the computer!
"""

import argparse
import logging
import time
from typing import Optional

# Logic imports
from logic.config import GameConfig
from logic.game_state import GameState, Move, Player
from logic.move_validator import MoveValidator, ValidationResult
from logic.win_checker import GameResult, WinChecker
from logic.ai_player import AIPlayer, Difficulty

# Storage imports
from storage.game_storage import GameStorage, SavedGame, Stats

logger = logging.getLogger(__name__)

COMMANDS = ("save", "load", "hint", "stats", "undo", "quit")


class TicTacToeGame:
    """
    Console controller for a tic-tac-toe session.

    Game flow:
    1. The current player enters "row,col" (or a command)
    2. The move is validated and placed
    3. Win is checked, then draw
    4. Against the computer, the AI answers after a short pause
    5. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        size: int = GameConfig.BOARD_SIZE,
        win_length: int = GameConfig.WIN_LENGTH,
        game_mode: str = "single",
        difficulty: Difficulty = Difficulty.MEDIUM,
        human_player: Player = Player.O,
        storage: Optional[GameStorage] = None,
        think_delay: float = GameConfig.AI_THINK_DELAY,
        rng=None,
    ):
        """
        Initialize a game session.

        Args:
            size: Board dimension.
            win_length: Markers in a row needed to win.
            game_mode: "single" to play the computer, "multi" for two humans.
            difficulty: AI difficulty (single mode only).
            human_player: Marker of the human in single mode.
            storage: Where games and statistics are kept.
            think_delay: Pause before the AI moves, in seconds.
            rng: Random source passed to the AI.
        """
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.storage = storage or GameStorage()
        self.stats = self.storage.load_stats()
        self.think_delay = think_delay
        self.rng = rng
        self.is_running = False

        self.new_game(size, win_length, game_mode, difficulty, human_player)

    def new_game(
        self,
        size: int,
        win_length: int,
        game_mode: str,
        difficulty: Optional[Difficulty],
        human_player: Player = Player.O,
    ):
        """Start a fresh game with the given settings."""
        self.game_state = GameState(size=size, win_length=win_length)
        self._set_session(game_mode, difficulty, human_player)

    def _set_session(self, game_mode: str, difficulty: Optional[Difficulty], human_player: Player):
        self.game_mode = game_mode
        self.human_player = human_player
        self.result = GameResult()

        if game_mode == "single":
            self.difficulty = difficulty or Difficulty(GameConfig.DEFAULT_DIFFICULTY)
            self.ai: Optional[AIPlayer] = AIPlayer(
                human_player.opposite(), self.difficulty, rng=self.rng
            )
        else:
            self.difficulty = None
            self.ai = None

    def is_ai_turn(self) -> bool:
        """True when the computer should move next."""
        return (
            self.ai is not None
            and not self.result.is_game_over
            and self.game_state.current_player == self.ai.player
        )

    def play_move(self, row: int, col: int) -> ValidationResult:
        """
        Play a move for the current player.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            ValidationResult; the state is unchanged if the move is invalid.
        """
        if self.result.is_game_over:
            return ValidationResult(is_valid=False, error_message="Game is already over!")

        validation = self.validator.validate_move(self.game_state, row, col)
        if not validation.is_valid:
            return validation

        self.game_state.place(row, col, self.game_state.current_player)
        self._check_game_status()
        return validation

    def ai_turn(self) -> Optional[Move]:
        """Let the computer pick and play its move."""
        if self.think_delay > 0:
            time.sleep(self.think_delay)

        move = self.ai.select_move(self.game_state)

        if move is None:
            logger.error("AI could not find a move!")
            return None

        self.game_state.place(move.row, move.col, move.player)
        self._check_game_status()
        return move

    def _check_game_status(self):
        """Check win, then draw; pass the turn if the game goes on."""
        self.result = self.win_checker.game_result(self.game_state)

        if self.result.is_game_over:
            self.stats.record(self.result.winner)
            self.storage.save_stats(self.stats)
        else:
            self.game_state.switch_player()

    def undo(self) -> int:
        """
        Take back the last move.

        Against the computer the AI's reply is taken back as well, so the
        human is to move again.

        Returns:
            Number of moves taken back.
        """
        if self.result.is_game_over:
            return 0

        # Against the computer, only undo back to a human move
        if self.ai is not None and not any(
            move.player != self.ai.player for move in self.game_state.moves
        ):
            return 0

        undone = 0
        while True:
            move = self.game_state.undo()
            if move is None:
                break
            undone += 1
            self.game_state.current_player = move.player
            if self.ai is None or move.player != self.ai.player:
                break

        return undone

    def save(self, save_name: str) -> bool:
        """Save the current game under a name."""
        saved = SavedGame(
            state=self.game_state,
            game_mode=self.game_mode,
            difficulty=self.difficulty,
            player_marker=self.human_player,
            ai_marker=self.human_player.opposite(),
        )
        return self.storage.save_game(save_name, saved)

    def load(self, save_name: str) -> bool:
        """Replace the current game with a saved one."""
        saved = self.storage.load_game(save_name)
        if saved is None:
            return False

        self.game_state = saved.state
        self._set_session(saved.game_mode, saved.difficulty, saved.player_marker)
        self.result = self.win_checker.game_result(self.game_state)
        return True

    def hint(self) -> str:
        """Suggest a move for the player whose turn it is."""
        adviser = AIPlayer(
            self.game_state.current_player,
            self.difficulty or Difficulty.MEDIUM,
            rng=self.rng,
        )
        return adviser.get_move_suggestion(self.game_state)

    # ==================== CONSOLE ====================

    def start(self):
        """Run games until the player stops."""
        self.is_running = True
        while self.is_running:
            self._game_loop()
            if not self.is_running:
                break

            self._show_game_result()
            if not self._confirm("Play again?"):
                break
            self.new_game(
                self.game_state.size,
                self.game_state.win_length,
                self.game_mode,
                self.difficulty,
                self.human_player,
            )

    def _game_loop(self):
        """Main game loop."""
        while self.is_running and not self.result.is_game_over:
            self.game_state.print_board()

            if self.is_ai_turn():
                print(f"\n>>> AI ({self.difficulty.value}) is thinking...")
                move = self.ai_turn()
                if move is None:
                    self.is_running = False
                else:
                    print(f">>> AI played ({move.row}, {move.col})")
            else:
                self._human_turn()

    def _human_turn(self):
        """Read and apply one line of input."""
        print(f"Commands: {', '.join(COMMANDS)}")
        text = input(f"{self.game_state.current_player.value} move (row,col): ").strip().lower()

        if text in COMMANDS:
            self._handle_command(text)
            return

        cell, parsed = self.validator.parse_move(text)
        if cell is None:
            print(parsed.error_message)
            return

        result = self.play_move(*cell)
        if not result.is_valid:
            print(result.error_message)

    def _handle_command(self, command: str):
        if command == "save":
            name = input("Save name: ").strip()
            if self.save(name):
                print(f"Game saved as \"{name}\".")
            else:
                print("Could not save the game.")
        elif command == "load":
            self._load_menu()
        elif command == "hint":
            print(self.hint())
        elif command == "stats":
            show_stats(self.stats)
        elif command == "undo":
            if not self.undo():
                print("Nothing to undo.")
        elif command == "quit":
            if self._confirm("Quit this game?"):
                self.is_running = False

    def _load_menu(self):
        names = self.storage.list_saved_games()
        if not names:
            print("No saved games.")
            return

        for index, name in enumerate(names, start=1):
            print(f"  {index}. {name}")
        choice = input("Load which game (number, blank to cancel): ").strip()
        if not choice:
            return
        if not choice.isdigit() or not 1 <= int(choice) <= len(names):
            print("Invalid choice.")
            return

        name = names[int(choice) - 1]
        if self.load(name):
            print(f"Loaded \"{name}\".")
        else:
            print("Could not load the game.")

    def _confirm(self, question: str) -> bool:
        return input(f"{question} [y/N] ").strip().lower() in ("y", "yes")

    def _show_game_result(self):
        """Show the final game result."""
        print("\n" + "=" * 40)
        print("   GAME OVER!")
        print("=" * 40)

        self.game_state.print_board()

        winner = self.result.winner
        if winner is None:
            print("\nIt's a draw! Good game!")
        elif self.ai is not None and winner == self.ai.player:
            print(f"\n{winner.value} wins! The computer takes this one.")
        else:
            print(f"\n{winner.value} wins!")

        if self.result.winning_line:
            print(f"Winning line: {self.result.winning_line}")

        print("=" * 40)


def show_stats(stats: Stats):
    """Print the statistics table."""
    print("\n" + "=" * 28)
    print("   Statistics")
    print("=" * 28)
    print(f"  {'O wins':<16}{stats.o_wins:>8}")
    print(f"  {'X wins':<16}{stats.x_wins:>8}")
    print(f"  {'Draws':<16}{stats.draws:>8}")
    print(f"  {'Total games':<16}{stats.total_games:>8}")
    print("=" * 28)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="N×N tic-tac-toe in the terminal")
    parser.add_argument(
        "--size",
        type=int,
        default=GameConfig.BOARD_SIZE,
        help=f"Board size ({GameConfig.MIN_BOARD_SIZE}-{GameConfig.MAX_BOARD_SIZE})"
    )
    parser.add_argument(
        "--win-length",
        type=int,
        help=f"Markers in a row needed to win (default: {GameConfig.WIN_LENGTH}, capped at the size)"
    )
    parser.add_argument(
        "--mode",
        choices=["single", "multi"],
        default="single",
        help="Play the computer (single) or a friend (multi)"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY,
        help="AI difficulty"
    )
    parser.add_argument(
        "--ai-first",
        action="store_true",
        help="Let the computer play first (as O)"
    )
    parser.add_argument(
        "--load",
        metavar="NAME",
        help="Resume a saved game"
    )
    parser.add_argument(
        "--save-dir",
        help="Directory for saved games"
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Don't pause before AI moves"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show statistics and exit"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output (AI search statistics)"
    )
    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not GameConfig.MIN_BOARD_SIZE <= args.size <= GameConfig.MAX_BOARD_SIZE:
        parser.error(
            f"--size must be between {GameConfig.MIN_BOARD_SIZE} and {GameConfig.MAX_BOARD_SIZE}"
        )
    if args.win_length is None:
        args.win_length = min(GameConfig.WIN_LENGTH, args.size)
    if not GameConfig.MIN_WIN_LENGTH <= args.win_length <= args.size:
        parser.error(f"--win-length must be between {GameConfig.MIN_WIN_LENGTH} and {args.size}")

    storage = GameStorage(save_dir=args.save_dir)

    if args.stats:
        show_stats(storage.load_stats())
        return 0

    game = TicTacToeGame(
        size=args.size,
        win_length=args.win_length,
        game_mode=args.mode,
        difficulty=Difficulty(args.difficulty),
        human_player=Player.X if args.ai_first else Player.O,
        storage=storage,
        think_delay=0.0 if args.no_delay else GameConfig.AI_THINK_DELAY,
    )

    if args.load and not game.load(args.load):
        print(f"Could not load saved game \"{args.load}\".")
        return 1

    print("\n" + "=" * 40)
    print(f"   {game.game_state.size}x{game.game_state.size} Tic-Tac-Toe")
    print(f"   {game.game_state.win_length} in a row wins")
    print("=" * 40)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
