"""Best-effort persistence of finished rounds.

The history only biases word selection and feeds the statistics screen. It is
never authoritative game state, so read and write failures are logged and the
game carries on.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from undercover.errors.handler import ErrorHandler
from undercover.types.game import Winner, WordPair
from undercover.types.stats import GameStats, OutcomeRecord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100
STATS_FILENAME = "undercover_stats.json"


class HistoryStore:
    """Append-only, capped outcome history with in-memory cache and optional file persistence."""

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, limit: int = DEFAULT_HISTORY_LIMIT):
        """
        Initialize the history store.

        Args:
            data_dir: Directory holding the stats file; None keeps everything in memory
            limit: Number of most recent outcomes kept
        """
        self.limit = limit
        self.path: Optional[Path] = None
        if data_dir is not None:
            self.path = Path(data_dir) / STATS_FILENAME
        self._stats: Optional[GameStats] = None

    def get_stats(self) -> GameStats:
        """Get aggregate stats, loading them from disk on first use."""
        if self._stats is None:
            self._stats = self._load()
        return self._stats

    def get_used_word_pairs(self) -> List[WordPair]:
        """Word pairs of the recorded rounds, oldest first."""
        return self.get_stats().used_word_pairs

    def record_outcome(self, winner: Winner, word_pair: WordPair) -> GameStats:
        """Append a finished round and update the win counters."""
        stats = self.get_stats()

        history = stats.history + [
            OutcomeRecord(winner=winner, civilian=word_pair.civilian, undercover=word_pair.undercover)
        ]
        updated = GameStats(
            total_games=stats.total_games + 1,
            civil_wins=stats.civil_wins + (winner == Winner.CIVIL),
            undercover_wins=stats.undercover_wins + (winner == Winner.UNDERCOVER),
            mister_white_wins=stats.mister_white_wins + (winner == Winner.MISTER_WHITE),
            history=history[-self.limit:],
        )

        self._stats = updated
        self._save(updated)
        logger.info(f"Recorded {winner.value} win with words {word_pair.civilian!r}/{word_pair.undercover!r}")
        return updated

    def clear(self) -> None:
        """Forget every recorded outcome."""
        self._stats = GameStats()
        self._save(self._stats)

    def _load(self) -> GameStats:
        if self.path is None or not self.path.exists():
            return GameStats()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return GameStats.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"[{ErrorHandler.classify_error(e).value}] Failed to load game stats from {self.path}: {e}")
            return GameStats()

    def _save(self, stats: GameStats) -> None:
        if self.path is None:
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(stats.model_dump_json(indent=2))
        except OSError as e:
            logger.error(f"[{ErrorHandler.classify_error(e).value}] Failed to write game stats to {self.path}: {e}")
