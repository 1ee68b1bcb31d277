"""Game logic for the Undercover game"""

from .engine import GameEngine
from .rules import RulesValidator
from .session import GameSession
from .state import StateManager

__all__ = [
    "GameEngine",
    "GameSession",
    "RulesValidator",
    "StateManager",
]
