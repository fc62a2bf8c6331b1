"""
PageStore domain service.

Owns the scan batch and the active-page cursor and mediates every mutation:
appends from capture/upload, geometric edits, remote processing, text edits
and removals.

Concurrency contract:
- all mutations run on one event loop; only ``begin_processing`` suspends
- at most one processing call is outstanding across the whole batch
- a processing response is bound to the page id (and original revision)
  captured when the call started; it is dropped if that page was removed or
  its original was replaced before the response arrived
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from lensscan.domain.entities.batch import Batch
from lensscan.domain.entities.page import Page
from lensscan.domain.exceptions import AlreadyProcessingError, RemoteProcessingError
from lensscan.domain.interfaces import ImageTransformer, ProcessingClient
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.transform_op import TransformOp

logger = logging.getLogger(__name__)


class PageStore:
    """Mutable holder of the current immutable ``Batch`` snapshot."""

    def __init__(
        self,
        transform_engine: ImageTransformer,
        processing_client: ProcessingClient,
        batch: Optional[Batch] = None,
    ) -> None:
        self._transformer = transform_engine
        self._client = processing_client
        self._batch = batch or Batch.empty()
        self._processing_page_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def batch(self) -> Batch:
        """Current snapshot; later mutations never alter a returned batch."""
        return self._batch

    @property
    def active_index(self) -> Optional[int]:
        return self._batch.active_index

    @property
    def active_page(self) -> Optional[Page]:
        return self._batch.active_page

    @property
    def is_processing(self) -> bool:
        return self._processing_page_id is not None

    @property
    def processing_page_id(self) -> Optional[str]:
        return self._processing_page_id

    def __len__(self) -> int:
        return len(self._batch)

    def get_page(self, index: int) -> Page:
        return self._batch.page_at(index)

    # ------------------------------------------------------------------
    # Batch composition
    # ------------------------------------------------------------------
    def append(self, image: ImageData) -> str:
        """Append a page for ``image`` and make it active; returns the page id."""
        page = Page.create(image)
        # Position comes from the batch as it is now, not from an earlier count.
        self._batch = self._batch.append(page)
        logger.debug("Appended page %s at position %s", page.page_id, self._batch.active_index)
        return page.page_id

    def append_many(self, images: Iterable[ImageData]) -> List[str]:
        """Append several images in order, then select the newest page once."""
        pages = [Page.create(image) for image in images]
        if pages:
            self._batch = self._batch.extend(pages).select_last()
            logger.info("Appended %s pages; batch now has %s", len(pages), len(self._batch))
        return [page.page_id for page in pages]

    def select_last(self) -> None:
        self._batch = self._batch.select_last()

    def set_active(self, index: int) -> None:
        self._batch = self._batch.with_active(index)

    def remove(self, index: int) -> Page:
        """Remove and return the page at ``index``."""
        page = self._batch.page_at(index)
        self._batch = self._batch.remove_at(index)
        logger.info("Removed page %s from position %s", page.page_id, index)
        return page

    def clear(self) -> None:
        """Drop every page (start over). An in-flight response will be discarded."""
        self._batch = Batch.empty()
        logger.info("Cleared batch")

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def apply_transform(self, index: int, op: TransformOp) -> Page:
        """Transform the original of the page at ``index`` and invalidate its processed result."""
        page = self._batch.page_at(index)
        transformed = self._transformer.transform(page.original, op)
        updated = page.with_original(transformed)
        self._batch = self._batch.replace_page(updated)
        logger.info(
            "Applied %s to page %s (revision %s)",
            op.describe(),
            page.page_id,
            updated.revision,
        )
        return updated

    def edit_text(self, index: int, text: Optional[str]) -> Page:
        """Override the extracted text of a page; images are untouched."""
        page = self._batch.page_at(index)
        updated = page.with_text(text)
        self._batch = self._batch.replace_page(updated)
        return updated

    # ------------------------------------------------------------------
    # Remote processing
    # ------------------------------------------------------------------
    async def begin_processing(self, index: int, filter_mode: FilterMode | str) -> Optional[Page]:
        """Run the remote filter for the page at ``index``.

        Returns the updated page, or None when the response was discarded
        because its page was removed or re-edited while the call was in flight.

        Raises:
            AlreadyProcessingError: if another processing call is outstanding
            IndexOutOfRangeError: if ``index`` is invalid
            UnsupportedFilterError / RemoteProcessingError: from the client;
                the page keeps any previous result
        """
        if self._processing_page_id is not None:
            raise AlreadyProcessingError(self._processing_page_id)

        target = self._batch.page_at(index)
        self._processing_page_id = target.page_id
        logger.info(
            "Processing page %s",
            target.page_id,
            extra={"page_id": target.page_id, "filter_mode": str(getattr(filter_mode, "value", filter_mode))},
        )
        try:
            result = await self._client.process(target.original, filter_mode)
        except RemoteProcessingError as exc:
            logger.warning("Processing failed for page %s: %s", target.page_id, exc)
            raise
        finally:
            self._processing_page_id = None

        current = self._batch.find(target.page_id)
        if current is None:
            logger.info("Dropping processing result for removed page %s", target.page_id)
            return None
        if current.revision != target.revision:
            logger.info(
                "Dropping processing result for page %s: original changed while in flight",
                target.page_id,
            )
            return None

        updated = current.with_processing_result(result)
        self._batch = self._batch.replace_page(updated)
        logger.info("Stored %s result for page %s", result.filter_mode.value, target.page_id)
        return updated
