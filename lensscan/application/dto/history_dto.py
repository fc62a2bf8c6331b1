"""Data Transfer Objects for exports and history views."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from lensscan.domain.entities.history_entry import HistoryEntry

_PREVIEW_CHARS = 160


@dataclass(frozen=True)
class HistoryEntryDTO:
    """DTO capturing one history row."""

    entry_id: str
    artifact_id: str
    name: str
    page_count: int
    timestamp: datetime
    media_type: str
    text_preview: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> HistoryEntryDTO:
        preview = None
        if entry.text_content:
            preview = entry.text_content[:_PREVIEW_CHARS]
        return cls(
            entry_id=entry.entry_id,
            artifact_id=entry.artifact_id,
            name=entry.name,
            page_count=entry.page_count,
            timestamp=entry.timestamp,
            media_type=entry.artifact.media_type,
            text_preview=preview,
        )


@dataclass(frozen=True)
class ExportResultDTO:
    """DTO returned after a batch export."""

    entry_id: str
    artifact_id: str
    name: str
    page_count: int
    created_at: datetime
    has_text: bool
    size_bytes: int
