"""History API routes for v1 endpoints."""
from __future__ import annotations

import re
import unicodedata
from io import BytesIO
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from lensscan.api.schemas import (
    HistoryEntrySchema,
    HistoryListResponseSchema,
    history_entry_to_schema,
)
from lensscan.api.v1.dependencies import get_history_index, get_search_history_handler
from lensscan.application.dto.history_dto import HistoryEntryDTO
from lensscan.application.queries.search_history import SearchHistoryHandler, SearchHistoryQuery
from lensscan.domain.exceptions import DomainValidationError, EntityNotFoundError
from lensscan.domain.repositories.history_index import HistoryIndex

router = APIRouter(prefix="/history", tags=["history"])

FALLBACK_FILENAME = "export.pdf"
_UNSAFE_FILENAME_CHARS = re.compile(r'[\x00-\x1f\x7f"\\]')

def content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-ASCII and quote characters.

    ``filename`` carries an ASCII fallback; ``filename*`` (RFC 5987) carries the
    exact UTF-8 name.
    """
    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    ascii_name = _UNSAFE_FILENAME_CHARS.sub("_", ascii_name).strip() or FALLBACK_FILENAME
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename, safe='')}"

@router.get("", response_model=HistoryListResponseSchema)
def search_history(
    q: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    handler: SearchHistoryHandler = Depends(get_search_history_handler),
) -> HistoryListResponseSchema:
    try:
        entries = handler.handle(SearchHistoryQuery(text_query=q, limit=limit))
    except DomainValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return HistoryListResponseSchema(
        entries=[history_entry_to_schema(entry) for entry in entries],
        total=len(entries),
    )

@router.get("/{entry_id}", response_model=HistoryEntrySchema)
def get_history_entry(
    entry_id: str,
    history: HistoryIndex = Depends(get_history_index),
) -> HistoryEntrySchema:
    try:
        entry = history.get(entry_id)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return history_entry_to_schema(HistoryEntryDTO.from_entry(entry))

@router.get("/{entry_id}/document")
def download_history_document(
    entry_id: str,
    history: HistoryIndex = Depends(get_history_index),
) -> StreamingResponse:
    try:
        entry = history.get(entry_id)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    artifact = entry.artifact
    if artifact.content is None:
        raise HTTPException(status_code=404, detail="Export has no rendered document")

    headers = {"Content-Disposition": content_disposition(entry.name)}
    return StreamingResponse(BytesIO(artifact.content), media_type=artifact.media_type, headers=headers)
