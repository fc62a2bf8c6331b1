"""
BatchExportAssembler domain service.

Turns a batch snapshot into an ``ExportArtifact``: one image per page in batch
order (processed if present, else original), the concatenated extracted text,
and the rendered document produced by a ``DocumentWriter``.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from lensscan.domain.entities.batch import Batch
from lensscan.domain.entities.export_artifact import ExportArtifact
from lensscan.domain.exceptions import EmptyBatchError
from lensscan.domain.interfaces import DocumentWriter

logger = logging.getLogger(__name__)

TEXT_SEPARATOR = "\n\n"


class BatchExportAssembler:
    """Domain service assembling export artifacts from batches."""

    def __init__(self, writer: Optional[DocumentWriter] = None, *, name_prefix: str = "Scan") -> None:
        """
        Args:
            writer: renders the artifact document; without one the artifact
                carries page images and text only
            name_prefix: prefix of generated artifact names
        """
        self._writer = writer
        self._name_prefix = name_prefix

    def assemble(
        self,
        batch: Batch,
        name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> ExportArtifact:
        """Build an artifact from ``batch``.

        Raises:
            EmptyBatchError: if the batch has no pages
        """
        if batch.is_empty:
            raise EmptyBatchError()

        created_at = created_at or datetime.now()
        images = tuple(page.export_image for page in batch.pages)
        texts = [page.extracted_text for page in batch.pages if page.extracted_text]

        artifact = ExportArtifact(
            artifact_id=uuid.uuid4().hex,
            name=(name or "").strip() or self.default_name(created_at),
            pages=images,
            created_at=created_at,
            text=TEXT_SEPARATOR.join(texts) if texts else None,
        )

        if self._writer is not None:
            content = self._writer.write(artifact)
            artifact = replace(artifact, content=content, media_type=self._writer.media_type)

        logger.info("Assembled %s with %s page(s)", artifact.name, artifact.page_count)
        return artifact

    def default_name(self, created_at: datetime) -> str:
        return f"{self._name_prefix}_{int(created_at.timestamp() * 1000)}.pdf"
