"""Batch and page API routes for v1 endpoints."""
from __future__ import annotations

from typing import List, Literal

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from lensscan.api.schemas import (
    AppendPagesResponseSchema,
    BatchSchema,
    CaptureRequestSchema,
    EditTextRequestSchema,
    PageSchema,
    ProcessRequestSchema,
    ProcessResponseSchema,
    SetActiveRequestSchema,
    TransformRequestSchema,
    batch_to_schema,
    page_to_schema,
)
from lensscan.api.v1.dependencies import get_batch_handler, get_page_store
from lensscan.application.dto.page_dto import PageDTO
from lensscan.application.queries.get_batch import GetBatchHandler, GetBatchQuery
from lensscan.domain.entities.page import Page
from lensscan.domain.exceptions import (
    AlreadyProcessingError,
    DecodeError,
    DomainValidationError,
    IndexOutOfRangeError,
    InvalidRegionError,
    RemoteProcessingError,
    UnsupportedFilterError,
)
from lensscan.domain.services.page_store import PageStore
from lensscan.domain.value_objects.crop_region import CropRegion
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.transform_op import TransformOp


router = APIRouter(prefix="/pages", tags=["pages"])

PROCESSING_FAILED = "Processing failed"


def _current_batch(handler: GetBatchHandler) -> BatchSchema:
    return batch_to_schema(handler.handle(GetBatchQuery()))


def _page_schema(store: PageStore, page: Page) -> PageSchema:
    position = store.batch.index_of(page.page_id)
    dto = PageDTO.from_page(page, position if position is not None else -1, is_active=position == store.active_index)
    return page_to_schema(dto)


@router.get("", response_model=BatchSchema)
def get_batch(handler: GetBatchHandler = Depends(get_batch_handler)) -> BatchSchema:
    return _current_batch(handler)


@router.post("", response_model=AppendPagesResponseSchema, status_code=201)
async def upload_pages(
    files: List[UploadFile] = File(...),
    store: PageStore = Depends(get_page_store),
    handler: GetBatchHandler = Depends(get_batch_handler),
) -> AppendPagesResponseSchema:
    images: List[ImageData] = []
    for upload in files:
        content_type = (upload.content_type or "").lower()
        if content_type and not content_type.startswith("image/") and content_type != "application/octet-stream":
            raise HTTPException(status_code=400, detail=f"Only image files are supported: {upload.filename}")
        data = await upload.read()
        try:
            images.append(ImageData.from_bytes(data, content_type or None))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"{upload.filename}: {exc}") from exc

    # All reads are complete before the first append; positions come from the store.
    page_ids = store.append_many(images)
    return AppendPagesResponseSchema(pageIds=page_ids, batch=_current_batch(handler))


@router.post("/capture", response_model=AppendPagesResponseSchema, status_code=201)
def capture_page(
    request: CaptureRequestSchema,
    store: PageStore = Depends(get_page_store),
    handler: GetBatchHandler = Depends(get_batch_handler),
) -> AppendPagesResponseSchema:
    try:
        image = ImageData.from_data_url(request.image)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    page_id = store.append(image)
    return AppendPagesResponseSchema(pageIds=[page_id], batch=_current_batch(handler))


@router.delete("", response_model=BatchSchema)
def clear_batch(
    store: PageStore = Depends(get_page_store),
    handler: GetBatchHandler = Depends(get_batch_handler),
) -> BatchSchema:
    store.clear()
    return _current_batch(handler)


@router.put("/active", response_model=BatchSchema)
def set_active_page(
    request: SetActiveRequestSchema,
    store: PageStore = Depends(get_page_store),
    handler: GetBatchHandler = Depends(get_batch_handler),
) -> BatchSchema:
    try:
        store.set_active(request.index)
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _current_batch(handler)


@router.delete("/{index}", response_model=BatchSchema)
def remove_page(
    index: int,
    store: PageStore = Depends(get_page_store),
    handler: GetBatchHandler = Depends(get_batch_handler),
) -> BatchSchema:
    try:
        store.remove(index)
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _current_batch(handler)


@router.get("/{index}/image")
def get_page_image(
    index: int,
    variant: Literal["original", "processed"] = "original",
    store: PageStore = Depends(get_page_store),
) -> Response:
    try:
        page = store.get_page(index)
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    image = page.original if variant == "original" else page.processed
    if image is None:
        raise HTTPException(status_code=404, detail="Page has no processed image")
    return Response(content=image.content, media_type=image.mime_type)


@router.post("/{index}/transform", response_model=PageSchema)
def transform_page(
    index: int,
    request: TransformRequestSchema,
    store: PageStore = Depends(get_page_store),
) -> PageSchema:
    try:
        if request.operation == "rotate90":
            op = TransformOp.rotate90()
        elif request.operation == "scale":
            op = TransformOp.scale(request.factor)
        else:
            if request.region is None:
                raise InvalidRegionError("Crop requires a region")
            op = TransformOp.crop(CropRegion.from_dict(request.region.model_dump()))
        page = store.apply_transform(index, op)
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (InvalidRegionError, DomainValidationError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _page_schema(store, page)


@router.post("/{index}/process", response_model=ProcessResponseSchema)
async def process_page(
    index: int,
    request: ProcessRequestSchema,
    store: PageStore = Depends(get_page_store),
) -> ProcessResponseSchema:
    try:
        page = await store.begin_processing(index, request.filterMode)
    except AlreadyProcessingError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UnsupportedFilterError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RemoteProcessingError as exc:
        raise HTTPException(status_code=502, detail=PROCESSING_FAILED) from exc

    if page is None:
        return ProcessResponseSchema(applied=False)
    return ProcessResponseSchema(applied=True, page=_page_schema(store, page))


@router.put("/{index}/text", response_model=PageSchema)
def edit_page_text(
    index: int,
    request: EditTextRequestSchema,
    store: PageStore = Depends(get_page_store),
) -> PageSchema:
    try:
        page = store.edit_text(index, request.text)
    except IndexOutOfRangeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _page_schema(store, page)
