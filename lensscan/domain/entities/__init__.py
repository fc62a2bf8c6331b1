"""Domain entities package"""

from .page import Page
from .batch import Batch
from .export_artifact import ExportArtifact
from .history_entry import HistoryEntry

__all__ = ["Page", "Batch", "ExportArtifact", "HistoryEntry"]
