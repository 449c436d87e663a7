"""
Saved games and statistics for N×N tic-tac-toe.
Stores everything as JSON files on disk.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from logic.ai_player import Difficulty
from logic.game_state import GameState, Player

from .config import StorageConfig

logger = logging.getLogger(__name__)

GAME_MODES = ("single", "multi")


@dataclass
class SavedGame:
    """A game in progress plus the session settings needed to resume it."""
    state: GameState
    game_mode: str = "single"               # "single" (vs AI) or "multi"
    difficulty: Optional[Difficulty] = None
    player_marker: Player = Player.O
    ai_marker: Player = Player.X

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": self.state.serialize(),
            "game_mode": self.game_mode,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "player_marker": self.player_marker.value,
            "ai_marker": self.ai_marker.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedGame":
        """
        Rebuild a saved game from its JSON record.

        Raises:
            ValueError: If the record is malformed.
        """
        try:
            difficulty = data.get("difficulty")
            saved = cls(
                state=GameState.from_dict(data["board"]),
                game_mode=data["game_mode"],
                difficulty=Difficulty(difficulty) if difficulty else None,
                player_marker=Player(data["player_marker"]),
                ai_marker=Player(data["ai_marker"]),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed saved game: {e}") from e

        if saved.game_mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode: {saved.game_mode!r}")
        if saved.ai_marker != saved.player_marker.opposite():
            raise ValueError(
                f"AI marker {saved.ai_marker.value} must differ from "
                f"player marker {saved.player_marker.value}"
            )
        return saved


@dataclass
class Stats:
    """Win / loss / draw counters across games."""
    o_wins: int = 0
    x_wins: int = 0
    draws: int = 0
    total_games: int = 0

    def record(self, winner: Optional[Player]):
        """Count a finished game. `winner` is None for a draw."""
        self.total_games += 1
        if winner == Player.O:
            self.o_wins += 1
        elif winner == Player.X:
            self.x_wins += 1
        else:
            self.draws += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "o_wins": self.o_wins,
            "x_wins": self.x_wins,
            "draws": self.draws,
            "total_games": self.total_games,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        return cls(
            o_wins=int(data.get("o_wins", 0)),
            x_wins=int(data.get("x_wins", 0)),
            draws=int(data.get("draws", 0)),
            total_games=int(data.get("total_games", 0)),
        )


class GameStorage:
    """
    Saves and loads games and statistics.

    Every failure (missing file, unreadable JSON, bad record) is logged and
    reported through the return value, so a broken save never stops a game.
    """

    def __init__(
        self,
        save_dir: Optional[Union[str, Path]] = None,
        stats_file: Optional[Union[str, Path]] = None,
        config: Optional[StorageConfig] = None,
    ):
        """
        Initialize the storage.

        Args:
            save_dir: Directory for saved games. Uses the config default if not provided.
            stats_file: Statistics file. Uses the config default if not provided.
            config: Storage configuration. Uses defaults if not provided.
        """
        self.config = config or StorageConfig()
        self.save_dir = Path(save_dir or self.config.SAVE_DIR)
        self.stats_file = Path(stats_file or self.config.STATS_FILE)

    def _save_path(self, save_name: str) -> Optional[Path]:
        name = save_name.strip()
        if not name or Path(name).name != name or name in (".", ".."):
            logger.error("Invalid save name: %r", save_name)
            return None
        return self.save_dir / f"{name}{self.config.SAVE_EXTENSION}"

    def save_game(self, save_name: str, saved_game: SavedGame) -> bool:
        """
        Save a game under a name.

        Args:
            save_name: Name of the save (no path separators).
            saved_game: The game to store.

        Returns:
            True if the game was written.
        """
        path = self._save_path(save_name)
        if path is None:
            return False

        try:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(saved_game.to_dict(), indent=self.config.JSON_INDENT),
                encoding=self.config.ENCODING,
            )
        except OSError as e:
            logger.error("Could not save game %r: %s", save_name, e)
            return False

        logger.info("Saved game %r to %s", save_name, path)
        return True

    def load_game(self, save_name: str) -> Optional[SavedGame]:
        """
        Load a saved game.

        Args:
            save_name: Name the game was saved under.

        Returns:
            The SavedGame, or None if it is missing or unreadable.
        """
        path = self._save_path(save_name)
        if path is None:
            return None

        if not path.exists():
            logger.info("No saved game named %r", save_name)
            return None

        try:
            data = json.loads(path.read_text(encoding=self.config.ENCODING))
            return SavedGame.from_dict(data)
        except (OSError, ValueError) as e:
            logger.error("Could not load game %r: %s", save_name, e)
            return None

    def list_saved_games(self) -> List[str]:
        """Get the names of all saved games, sorted."""
        if not self.save_dir.is_dir():
            return []
        return sorted(path.stem for path in self.save_dir.glob(f"*{self.config.SAVE_EXTENSION}"))

    def save_stats(self, stats: Stats) -> bool:
        """
        Write the statistics file.

        Returns:
            True if the file was written.
        """
        try:
            if self.stats_file.parent != Path("."):
                self.stats_file.parent.mkdir(parents=True, exist_ok=True)
            self.stats_file.write_text(
                json.dumps(stats.to_dict(), indent=self.config.JSON_INDENT),
                encoding=self.config.ENCODING,
            )
        except OSError as e:
            logger.error("Could not save statistics: %s", e)
            return False
        return True

    def load_stats(self) -> Stats:
        """
        Read the statistics file.

        Returns:
            The stored Stats, or fresh counters if the file is missing or unreadable.
        """
        if not self.stats_file.exists():
            return Stats()

        try:
            data = json.loads(self.stats_file.read_text(encoding=self.config.ENCODING))
            return Stats.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error("Could not load statistics: %s", e)
            return Stats()
