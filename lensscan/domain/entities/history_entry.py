"""HistoryEntry entity - one recorded export."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from lensscan.domain.entities.export_artifact import ExportArtifact


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable log entry pointing at an exported artifact."""

    entry_id: str
    artifact: ExportArtifact
    name: str
    page_count: int
    timestamp: datetime = field(default_factory=datetime.now)
    text_content: Optional[str] = None

    @classmethod
    def for_artifact(cls, entry_id: str, artifact: ExportArtifact, name: str | None = None) -> HistoryEntry:
        return cls(
            entry_id=entry_id,
            artifact=artifact,
            name=name or artifact.name,
            page_count=artifact.page_count,
            timestamp=datetime.now(),
            text_content=artifact.text,
        )

    @property
    def artifact_id(self) -> str:
        return self.artifact.artifact_id

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on the name or the exported text."""
        needle = query.lower()
        if needle in self.name.lower():
            return True
        return bool(self.text_content) and needle in self.text_content.lower()
