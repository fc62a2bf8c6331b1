"""PDF output for export artifacts."""

from .pdf_writer import PdfDocumentWriter

__all__ = ["PdfDocumentWriter"]
