"""
API Schemas - organized by domain
"""
from .page_schemas import (
    AppendPagesResponseSchema,
    BatchSchema,
    CaptureRequestSchema,
    CropRegionSchema,
    EditTextRequestSchema,
    PageSchema,
    ProcessRequestSchema,
    ProcessResponseSchema,
    SetActiveRequestSchema,
    TransformRequestSchema,
    batch_to_schema,
    page_to_schema,
)
from .history_schemas import (
    ExportRequestSchema,
    ExportResponseSchema,
    HistoryEntrySchema,
    HistoryListResponseSchema,
    export_to_schema,
    history_entry_to_schema,
)

__all__ = [
    # Page schemas
    "PageSchema",
    "BatchSchema",
    "AppendPagesResponseSchema",
    "CaptureRequestSchema",
    "SetActiveRequestSchema",
    "CropRegionSchema",
    "TransformRequestSchema",
    "ProcessRequestSchema",
    "ProcessResponseSchema",
    "EditTextRequestSchema",
    "page_to_schema",
    "batch_to_schema",
    # History schemas
    "ExportRequestSchema",
    "ExportResponseSchema",
    "HistoryEntrySchema",
    "HistoryListResponseSchema",
    "export_to_schema",
    "history_entry_to_schema",
]
