"""ExportBatch Command - Renders the current batch and records it in history.

The batch snapshot is taken once, up front; edits made after the handler
starts do not leak into the produced artifact.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from lensscan.application.dto.history_dto import ExportResultDTO
from lensscan.domain.repositories.history_index import HistoryIndex
from lensscan.domain.services.batch_export_assembler import BatchExportAssembler
from lensscan.domain.services.page_store import PageStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportBatchCommand:
    name: Optional[str] = None


class ExportBatchHandler:
    """Handles ExportBatch commands."""

    def __init__(self, page_store: PageStore, assembler: BatchExportAssembler, history: HistoryIndex):
        self._store = page_store
        self._assembler = assembler
        self._history = history

    def handle(self, command: ExportBatchCommand) -> ExportResultDTO:
        """Assemble the artifact and append it to history.

        Raises:
            EmptyBatchError: if there is nothing to export
        """
        snapshot = self._store.batch
        artifact = self._assembler.assemble(snapshot, name=command.name)
        entry_id = self._history.record(artifact)
        logger.info("Exported %s as history entry %s", artifact.name, entry_id)

        return ExportResultDTO(
            entry_id=entry_id,
            artifact_id=artifact.artifact_id,
            name=artifact.name,
            page_count=artifact.page_count,
            created_at=artifact.created_at,
            has_text=bool(artifact.text),
            size_bytes=len(artifact.content or b""),
        )
