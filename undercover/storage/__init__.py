"""Persistence for finished rounds"""

from .history import HistoryStore

__all__ = ["HistoryStore"]
