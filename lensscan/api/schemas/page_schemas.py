"""
Schemas for batch and page endpoints
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from lensscan.application.dto.page_dto import BatchDTO, PageDTO


class PageSchema(BaseModel):
    pageId: str
    position: int
    isActive: bool = False
    originalMime: str
    hasProcessed: bool
    processedMime: Optional[str] = None
    extractedText: Optional[str] = None
    filterMode: Optional[str] = None
    revision: int = 0


class BatchSchema(BaseModel):
    pages: List[PageSchema] = Field(default_factory=list)
    pageCount: int = 0
    activeIndex: Optional[int] = None
    isProcessing: bool = False
    processingPageId: Optional[str] = None


class AppendPagesResponseSchema(BaseModel):
    pageIds: List[str]
    batch: BatchSchema


class CaptureRequestSchema(BaseModel):
    image: str = Field(..., description="data:image/...;base64 URL or bare base64 image")


class SetActiveRequestSchema(BaseModel):
    index: int


class CropRegionSchema(BaseModel):
    x: int
    y: int
    width: int
    height: int


class TransformRequestSchema(BaseModel):
    operation: Literal["rotate90", "scale", "crop"]
    factor: Optional[float] = None
    region: Optional[CropRegionSchema] = None


class ProcessRequestSchema(BaseModel):
    filterMode: str = "scan"


class ProcessResponseSchema(BaseModel):
    applied: bool
    page: Optional[PageSchema] = None


class EditTextRequestSchema(BaseModel):
    text: Optional[str] = None


def page_to_schema(page: PageDTO) -> PageSchema:
    return PageSchema(
        pageId=page.page_id,
        position=page.position,
        isActive=page.is_active,
        originalMime=page.original_mime,
        hasProcessed=page.has_processed,
        processedMime=page.processed_mime,
        extractedText=page.extracted_text,
        filterMode=page.filter_mode,
        revision=page.revision,
    )


def batch_to_schema(batch: BatchDTO) -> BatchSchema:
    return BatchSchema(
        pages=[page_to_schema(page) for page in batch.pages],
        pageCount=batch.page_count,
        activeIndex=batch.active_index,
        isProcessing=batch.is_processing,
        processingPageId=batch.processing_page_id,
    )
