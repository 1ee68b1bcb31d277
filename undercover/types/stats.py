"""Outcome history models"""

from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel, Field

from undercover.types.game import WordPair, Winner


class OutcomeRecord(BaseModel):
    """One finished round"""
    winner: Winner
    civilian: str
    undercover: str
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def word_pair(self) -> WordPair:
        return WordPair(civilian=self.civilian, undercover=self.undercover)


class GameStats(BaseModel):
    """Aggregate statistics over all recorded rounds"""
    total_games: int = 0
    civil_wins: int = 0
    undercover_wins: int = 0
    mister_white_wins: int = 0
    history: List[OutcomeRecord] = Field(default_factory=list, description="Most recent outcomes, oldest first")

    @property
    def used_word_pairs(self) -> List[WordPair]:
        return [record.word_pair for record in self.history]

    def win_rate(self, winner: Winner) -> float:
        """Percentage of recorded games won by the given side."""
        if not self.total_games:
            return 0.0
        wins = {
            Winner.CIVIL: self.civil_wins,
            Winner.UNDERCOVER: self.undercover_wins,
            Winner.MISTER_WHITE: self.mister_white_wins,
        }[winner]
        return wins / self.total_games * 100
