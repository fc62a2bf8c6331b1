"""History storage implementations."""

from .memory_history_index import InMemoryHistoryIndex

__all__ = ["InMemoryHistoryIndex"]
