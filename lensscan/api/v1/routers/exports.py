"""Export API routes for v1 endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from lensscan.api.schemas import ExportRequestSchema, ExportResponseSchema, export_to_schema
from lensscan.api.v1.dependencies import get_export_batch_handler
from lensscan.application.commands.export_batch import ExportBatchCommand, ExportBatchHandler
from lensscan.domain.exceptions import DecodeError, EmptyBatchError

router = APIRouter(prefix="/exports", tags=["exports"])


@router.post("", response_model=ExportResponseSchema, status_code=201)
def export_batch(
    request: Optional[ExportRequestSchema] = Body(default=None),
    handler: ExportBatchHandler = Depends(get_export_batch_handler),
) -> ExportResponseSchema:
    name = request.name if request is not None else None
    try:
        result = handler.handle(ExportBatchCommand(name=name))
    except EmptyBatchError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=f"Failed to render export: {exc}") from exc
    return export_to_schema(result)
