"""Query handler for searching export history."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from lensscan.application.dto.history_dto import HistoryEntryDTO
from lensscan.domain.exceptions import DomainValidationError
from lensscan.domain.repositories.history_index import HistoryIndex

MAX_QUERY_LENGTH = 200


@dataclass
class SearchHistoryQuery:
    """Free-text history search; blank text lists everything."""

    text_query: Optional[str] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if self.text_query is not None:
            if len(self.text_query) > MAX_QUERY_LENGTH:
                raise DomainValidationError(f"Search text must be at most {MAX_QUERY_LENGTH} characters")
            if len(self.text_query.strip()) == 0:
                self.text_query = None
        if self.limit is not None and self.limit < 1:
            raise DomainValidationError("Limit must be positive")


class SearchHistoryHandler:
    """Handles SearchHistory query execution."""

    def __init__(self, history: HistoryIndex):
        self._history = history

    def handle(self, query: SearchHistoryQuery) -> List[HistoryEntryDTO]:
        entries = self._history.search(query.text_query)
        if query.limit is not None:
            entries = entries[: query.limit]
        return [HistoryEntryDTO.from_entry(entry) for entry in entries]
