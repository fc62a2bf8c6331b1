"""PDF writer for export artifacts."""
from __future__ import annotations

import logging
import textwrap
from typing import Callable, List, Optional, Tuple

import fitz  # type: ignore

from lensscan.config import get_settings
from lensscan.domain.entities.export_artifact import PDF_MEDIA_TYPE, ExportArtifact
from lensscan.domain.interfaces import DocumentWriter
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.infrastructure.imaging.image_codec import image_dimensions

logger = logging.getLogger(__name__)

TEXT_HEADING = "OCR Extracted Text"
HEADING_FONT_SIZE = 14
BODY_FONT_SIZE = 10
MARGIN_PT = 28.0
LINE_HEIGHT_FACTOR = 1.3
# Helvetica averages roughly half an em per character.
AVG_CHAR_WIDTH_EM = 0.5

DimensionReader = Callable[[ImageData], Tuple[int, int]]


class PdfDocumentWriter(DocumentWriter):
    """Writes one PDF page per artifact image plus trailing text pages.

    Each image is scaled to the full page width with its aspect ratio kept.
    A page whose scaled image is taller than the configured page height is
    lengthened so the image is never clipped.
    """

    media_type = PDF_MEDIA_TYPE

    def __init__(
        self,
        *,
        page_width: Optional[float] = None,
        page_height: Optional[float] = None,
        dimension_reader: DimensionReader = image_dimensions,
    ) -> None:
        settings = get_settings()
        self._page_width = float(page_width or settings.export_page_width)
        self._page_height = float(page_height or settings.export_page_height)
        self._dimensions = dimension_reader

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def write(self, artifact: ExportArtifact) -> bytes:
        with fitz.open() as document:
            for image in artifact.pages:
                self._add_image_page(document, image)

            if artifact.text:
                self._add_text_pages(document, artifact.text)

            document.set_metadata({"title": artifact.name, "creator": "LensScan"})
            content = document.tobytes(garbage=3, deflate=True)

        logger.debug("Wrote %s (%s bytes)", artifact.name, len(content))
        return content

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------
    def scaled_height(self, image_width: int, image_height: int) -> float:
        return image_height * self._page_width / image_width

    def _add_image_page(self, document: "fitz.Document", image: ImageData) -> None:
        width, height = self._dimensions(image)
        target_height = self.scaled_height(width, height)
        page = document.new_page(width=self._page_width, height=max(self._page_height, target_height))
        page.insert_image(fitz.Rect(0, 0, self._page_width, target_height), stream=image.content)

    def _add_text_pages(self, document: "fitz.Document", text: str) -> None:
        lines = self.wrap_text(text)
        line_height = BODY_FONT_SIZE * LINE_HEIGHT_FACTOR
        first_body_y = MARGIN_PT + HEADING_FONT_SIZE * 2
        per_first_page = max(1, int((self._page_height - first_body_y - MARGIN_PT) // line_height))
        per_page = max(1, int((self._page_height - 2 * MARGIN_PT) // line_height))

        page = document.new_page(width=self._page_width, height=self._page_height)
        page.insert_text((MARGIN_PT, MARGIN_PT + HEADING_FONT_SIZE), TEXT_HEADING, fontsize=HEADING_FONT_SIZE)
        chunk, lines = lines[:per_first_page], lines[per_first_page:]
        if chunk:
            page.insert_text((MARGIN_PT, first_body_y), chunk, fontsize=BODY_FONT_SIZE, lineheight=LINE_HEIGHT_FACTOR)

        while lines:
            chunk, lines = lines[:per_page], lines[per_page:]
            page = document.new_page(width=self._page_width, height=self._page_height)
            page.insert_text((MARGIN_PT, MARGIN_PT + BODY_FONT_SIZE), chunk, fontsize=BODY_FONT_SIZE, lineheight=LINE_HEIGHT_FACTOR)

    def wrap_text(self, text: str) -> List[str]:
        usable = self._page_width - 2 * MARGIN_PT
        width_chars = max(20, int(usable / (BODY_FONT_SIZE * AVG_CHAR_WIDTH_EM)))
        lines: List[str] = []
        for paragraph in text.splitlines():
            if not paragraph.strip():
                lines.append("")
                continue
            lines.extend(textwrap.wrap(paragraph, width=width_chars) or [""])
        return lines
