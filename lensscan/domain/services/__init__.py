"""
Domain services for business logic that doesn't belong to a specific entity.

- PageStore: owns the batch and mediates every page mutation
- BatchExportAssembler: builds export artifacts from batch snapshots
"""
from .page_store import PageStore
from .batch_export_assembler import BatchExportAssembler

__all__ = ["PageStore", "BatchExportAssembler"]
