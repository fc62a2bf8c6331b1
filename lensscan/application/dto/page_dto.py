"""
Data Transfer Objects for batch and page views.
"""
from dataclasses import dataclass
from typing import List, Optional

from lensscan.domain.entities.batch import Batch
from lensscan.domain.entities.page import Page


@dataclass(frozen=True)
class PageDTO:
    """DTO for one page of the batch."""

    page_id: str
    position: int
    original_mime: str
    has_processed: bool
    processed_mime: Optional[str] = None
    extracted_text: Optional[str] = None
    filter_mode: Optional[str] = None
    revision: int = 0
    is_active: bool = False

    @classmethod
    def from_page(cls, page: Page, position: int, *, is_active: bool = False) -> "PageDTO":
        return cls(
            page_id=page.page_id,
            position=position,
            original_mime=page.original.mime_type,
            has_processed=page.has_processed,
            processed_mime=page.processed.mime_type if page.processed is not None else None,
            extracted_text=page.extracted_text,
            filter_mode=page.filter_mode.value if page.filter_mode is not None else None,
            revision=page.revision,
            is_active=is_active,
        )


@dataclass(frozen=True)
class BatchDTO:
    """DTO for the whole batch plus the processing indicator."""

    pages: List[PageDTO]
    active_index: Optional[int]
    is_processing: bool
    processing_page_id: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @classmethod
    def from_batch(
        cls,
        batch: Batch,
        *,
        is_processing: bool = False,
        processing_page_id: Optional[str] = None,
    ) -> "BatchDTO":
        pages = [
            PageDTO.from_page(page, position, is_active=position == batch.active_index)
            for position, page in enumerate(batch.pages)
        ]
        return cls(
            pages=pages,
            active_index=batch.active_index,
            is_processing=is_processing,
            processing_page_id=processing_page_id,
        )
