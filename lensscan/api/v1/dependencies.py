"""Shared FastAPI dependencies for v1 API routers.

These factories centralize construction of the page store, the history index
and the application handlers so routers can depend on simple callables. The
store and history are process-wide singletons: one batch per running backend.
"""
from __future__ import annotations

from functools import lru_cache

from lensscan.application.commands.export_batch import ExportBatchHandler
from lensscan.application.queries.get_batch import GetBatchHandler
from lensscan.application.queries.search_history import SearchHistoryHandler
from lensscan.config import get_settings
from lensscan.domain.interfaces import ImageTransformer, ProcessingClient
from lensscan.domain.repositories.history_index import HistoryIndex
from lensscan.domain.services.batch_export_assembler import BatchExportAssembler
from lensscan.domain.services.page_store import PageStore
from lensscan.infrastructure.imaging.transform_engine import OpenCVTransformEngine
from lensscan.infrastructure.pdf.pdf_writer import PdfDocumentWriter
from lensscan.infrastructure.persistence.memory_history_index import InMemoryHistoryIndex
from lensscan.infrastructure.processing.remote_processing_client import RemoteProcessingClient


@lru_cache()
def _transform_engine() -> ImageTransformer:
    return OpenCVTransformEngine()


@lru_cache()
def _processing_client() -> ProcessingClient:
    return RemoteProcessingClient()


@lru_cache()
def _page_store() -> PageStore:
    return PageStore(_transform_engine(), _processing_client())


def get_page_store() -> PageStore:
    """Provide the singleton page store."""
    return _page_store()


@lru_cache()
def _history_index() -> HistoryIndex:
    return InMemoryHistoryIndex()


def get_history_index() -> HistoryIndex:
    """Provide the singleton history index."""
    return _history_index()


@lru_cache()
def _assembler() -> BatchExportAssembler:
    return BatchExportAssembler(PdfDocumentWriter(), name_prefix=get_settings().export_name_prefix)


def get_export_batch_handler() -> ExportBatchHandler:
    return ExportBatchHandler(get_page_store(), _assembler(), get_history_index())


def get_search_history_handler() -> SearchHistoryHandler:
    return SearchHistoryHandler(get_history_index())


def get_batch_handler() -> GetBatchHandler:
    return GetBatchHandler(get_page_store())


async def close_processing_client() -> None:
    """Release the HTTP client if it was ever created."""
    if _processing_client.cache_info().currsize:
        client = _processing_client()
        if isinstance(client, RemoteProcessingClient):
            await client.aclose()
        _processing_client.cache_clear()
