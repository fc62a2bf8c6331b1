"""
ExportArtifact Entity - A rendered multi-page document built from a batch.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from lensscan.domain.value_objects.image_data import ImageData

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class ExportArtifact:
    """
    Immutable export produced from a batch snapshot.

    ``pages`` holds one image per batch page, in batch order. ``content`` is
    the rendered document (PDF bytes) when a writer was used.
    """

    artifact_id: str
    name: str
    pages: tuple[ImageData, ...]
    created_at: datetime = field(default_factory=datetime.now)
    text: Optional[str] = None
    content: Optional[bytes] = None
    media_type: str = PDF_MEDIA_TYPE

    def __post_init__(self):
        if not isinstance(self.pages, tuple):
            object.__setattr__(self, "pages", tuple(self.pages))
        if not self.pages:
            raise ValueError("An export artifact needs at least one page")
        if not self.name:
            raise ValueError("Artifact name must not be empty")

    def __repr__(self) -> str:
        return (
            f"ExportArtifact(artifact_id={self.artifact_id!r}, name={self.name!r}, "
            f"pages={len(self.pages)}, rendered={self.content is not None})"
        )

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_rendered(self) -> bool:
        return self.content is not None
