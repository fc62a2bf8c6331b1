"""
Schemas for export and history endpoints
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from lensscan.application.dto.history_dto import ExportResultDTO, HistoryEntryDTO


class ExportRequestSchema(BaseModel):
    name: Optional[str] = None


class ExportResponseSchema(BaseModel):
    entryId: str
    artifactId: str
    name: str
    pageCount: int
    createdAt: datetime
    hasText: bool = False
    sizeBytes: int = 0


class HistoryEntrySchema(BaseModel):
    entryId: str
    artifactId: str
    name: str
    pageCount: int
    timestamp: datetime
    mediaType: str
    textPreview: Optional[str] = None


class HistoryListResponseSchema(BaseModel):
    entries: List[HistoryEntrySchema] = Field(default_factory=list)
    total: int = 0


def export_to_schema(result: ExportResultDTO) -> ExportResponseSchema:
    return ExportResponseSchema(
        entryId=result.entry_id,
        artifactId=result.artifact_id,
        name=result.name,
        pageCount=result.page_count,
        createdAt=result.created_at,
        hasText=result.has_text,
        sizeBytes=result.size_bytes,
    )


def history_entry_to_schema(entry: HistoryEntryDTO) -> HistoryEntrySchema:
    return HistoryEntrySchema(
        entryId=entry.entry_id,
        artifactId=entry.artifact_id,
        name=entry.name,
        pageCount=entry.page_count,
        timestamp=entry.timestamp,
        mediaType=entry.media_type,
        textPreview=entry.text_preview,
    )
