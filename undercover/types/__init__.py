"""Data types for the Undercover game"""

from .command import CommandType, GameCommand
from .game import (
    GamePhase,
    GameSettings,
    GameState,
    Player,
    PlayerConfig,
    Role,
    Scores,
    Winner,
    WordPair,
)
from .stats import GameStats, OutcomeRecord

__all__ = [
    # Command types
    "CommandType",
    "GameCommand",
    # Game types
    "GamePhase",
    "GameSettings",
    "GameState",
    "Player",
    "PlayerConfig",
    "Role",
    "Scores",
    "Winner",
    "WordPair",
    # History types
    "GameStats",
    "OutcomeRecord",
]
