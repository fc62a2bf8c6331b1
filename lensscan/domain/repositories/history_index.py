"""History index interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from lensscan.domain.entities.export_artifact import ExportArtifact
from lensscan.domain.entities.history_entry import HistoryEntry


class HistoryIndex(ABC):
    """Append-only log of exported artifacts."""

    @abstractmethod
    def record(self, artifact: ExportArtifact, name: Optional[str] = None) -> str:
        """Append an entry for ``artifact`` and return its identifier."""

    @abstractmethod
    def search(self, query: Optional[str] = None) -> List[HistoryEntry]:
        """Return matching entries, most recent first; an empty query matches all."""

    @abstractmethod
    def get(self, entry_id: str) -> HistoryEntry:
        """Return the entry with ``entry_id`` or raise EntityNotFoundError."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of recorded entries."""
