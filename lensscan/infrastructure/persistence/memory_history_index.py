from __future__ import annotations

import logging
import uuid
from threading import Lock
from typing import List, Optional

from lensscan.domain.entities.export_artifact import ExportArtifact
from lensscan.domain.entities.history_entry import HistoryEntry
from lensscan.domain.exceptions import EntityNotFoundError
from lensscan.domain.repositories.history_index import HistoryIndex

logger = logging.getLogger(__name__)


class InMemoryHistoryIndex(HistoryIndex):
  """Process-local history log; entries live as long as the process."""

  def __init__(self) -> None:
    self._entries: List[HistoryEntry] = []
    self._lock = Lock()

  def record(self, artifact: ExportArtifact, name: Optional[str] = None) -> str:
    entry = HistoryEntry.for_artifact(uuid.uuid4().hex, artifact, name)
    with self._lock:
      self._entries.append(entry)
    logger.info("Recorded export %s (%s pages)", entry.name, entry.page_count)
    return entry.entry_id

  def search(self, query: Optional[str] = None) -> List[HistoryEntry]:
    with self._lock:
      newest_first = list(reversed(self._entries))
    needle = (query or "").strip()
    if not needle:
      return newest_first
    return [entry for entry in newest_first if entry.matches(needle)]

  def get(self, entry_id: str) -> HistoryEntry:
    with self._lock:
      for entry in self._entries:
        if entry.entry_id == entry_id:
          return entry
    raise EntityNotFoundError("HistoryEntry", entry_id)

  def count(self) -> int:
    with self._lock:
      return len(self._entries)
