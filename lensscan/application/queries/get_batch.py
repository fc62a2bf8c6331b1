"""Query handler returning the current batch state."""
from __future__ import annotations

from dataclasses import dataclass

from lensscan.application.dto.page_dto import BatchDTO
from lensscan.domain.services.page_store import PageStore


@dataclass(frozen=True)
class GetBatchQuery:
    """Query for the batch overview (no parameters)."""


class GetBatchHandler:
    def __init__(self, page_store: PageStore):
        self._store = page_store

    def handle(self, query: GetBatchQuery) -> BatchDTO:
        return BatchDTO.from_batch(
            self._store.batch,
            is_processing=self._store.is_processing,
            processing_page_id=self._store.processing_page_id,
        )
