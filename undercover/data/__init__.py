"""Static game data"""

from .word_pairs import WORD_PAIRS

__all__ = ["WORD_PAIRS"]
