"""
Page Entity - One document page in a scan batch.

A page keeps its raw capture (``original``) next to the optional result of a
remote filter/OCR call. The processed image and its text are only meaningful
for the exact original that produced them, so replacing the original always
drops them.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult


@dataclass(frozen=True)
class Page:
    """
    Immutable page entity - use the ``with_*`` methods to derive new versions.

    Business rules:
    - page_id is assigned once and never reused
    - replacing the original clears processed, extracted_text and filter_mode
    - revision increases every time the original is replaced
    - extracted_text may be edited independently of processed
    """

    page_id: str
    original: ImageData
    processed: Optional[ImageData] = None
    extracted_text: Optional[str] = None
    filter_mode: Optional[FilterMode] = None
    revision: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.page_id:
            raise ValueError("page_id must not be empty")
        if not isinstance(self.original, ImageData):
            raise TypeError("original must be ImageData")
        if self.revision < 0:
            raise ValueError("revision must be >= 0")

    @classmethod
    def create(cls, original: ImageData, page_id: str | None = None) -> Page:
        """Create a fresh page for a captured or uploaded image."""
        return cls(page_id=page_id or uuid.uuid4().hex, original=original)

    @property
    def has_processed(self) -> bool:
        return self.processed is not None

    @property
    def export_image(self) -> ImageData:
        """The best available representation: processed if present, else original."""
        return self.processed if self.processed is not None else self.original

    def with_original(self, image: ImageData) -> Page:
        """Return page with a new original; any processing result is invalidated."""
        return replace(
            self,
            original=image,
            processed=None,
            extracted_text=None,
            filter_mode=None,
            revision=self.revision + 1,
        )

    def with_processing_result(self, result: ProcessingResult) -> Page:
        """Return page carrying the filtered image and text of a processing call."""
        return replace(
            self,
            processed=result.filtered_image,
            extracted_text=result.text,
            filter_mode=result.filter_mode,
        )

    def with_text(self, text: Optional[str]) -> Page:
        """Return page with user-edited extracted text."""
        return replace(self, extracted_text=text)
