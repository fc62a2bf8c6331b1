"""Domain repository interfaces."""

from .history_index import HistoryIndex

__all__ = ["HistoryIndex"]
