"""
Batch Entity - Ordered pages plus the active-page cursor.

The Batch is an immutable snapshot. ``PageStore`` holds the current snapshot
and swaps it on every mutation, so anything that captured an earlier batch
(an export, for instance) is unaffected by later edits.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from lensscan.domain.entities.page import Page
from lensscan.domain.exceptions import IndexOutOfRangeError


@dataclass(frozen=True)
class Batch:
    """
    Batch aggregate.

    Invariants:
    - active_index is None exactly when the batch is empty
    - otherwise 0 <= active_index < len(pages)
    - list position, not page_id, defines page order
    """

    pages: tuple[Page, ...] = ()
    active_index: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.pages, tuple):
            object.__setattr__(self, "pages", tuple(self.pages))

        if not self.pages:
            if self.active_index is not None:
                raise ValueError("active_index must be None for an empty batch")
            return
        if self.active_index is None or not 0 <= self.active_index < len(self.pages):
            raise ValueError(
                f"active_index {self.active_index} outside [0, {len(self.pages) - 1}]"
            )

    @classmethod
    def empty(cls) -> Batch:
        return cls()

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    @property
    def is_empty(self) -> bool:
        return not self.pages

    @property
    def active_page(self) -> Optional[Page]:
        if self.active_index is None:
            return None
        return self.pages[self.active_index]

    # ==================== Lookup ====================

    def page_at(self, index: int) -> Page:
        """Return the page at ``index``; negative indices are not accepted."""
        self._check_index(index)
        return self.pages[index]

    def index_of(self, page_id: str) -> Optional[int]:
        for position, page in enumerate(self.pages):
            if page.page_id == page_id:
                return position
        return None

    def find(self, page_id: str) -> Optional[Page]:
        position = self.index_of(page_id)
        return None if position is None else self.pages[position]

    # ==================== Mutations (return new batches) ====================

    def append(self, page: Page) -> Batch:
        """Return batch with ``page`` at the end, made active."""
        pages = self.pages + (page,)
        return Batch(pages=pages, active_index=len(pages) - 1)

    def extend(self, pages: Iterable[Page]) -> Batch:
        batch = self
        for page in pages:
            batch = batch.append(page)
        return batch

    def with_active(self, index: int) -> Batch:
        self._check_index(index)
        return Batch(pages=self.pages, active_index=index)

    def select_last(self) -> Batch:
        if self.is_empty:
            return self
        return Batch(pages=self.pages, active_index=len(self.pages) - 1)

    def remove_at(self, index: int) -> Batch:
        """Return batch without the page at ``index``; active_index is re-clamped."""
        self._check_index(index)
        pages = self.pages[:index] + self.pages[index + 1:]
        if not pages:
            return Batch()
        active = min(self.active_index if self.active_index is not None else 0, len(pages) - 1)
        return Batch(pages=pages, active_index=active)

    def replace_page(self, page: Page) -> Batch:
        """Return batch with the page sharing ``page.page_id`` swapped in place."""
        position = self.index_of(page.page_id)
        if position is None:
            raise KeyError(page.page_id)
        pages = self.pages[:position] + (page,) + self.pages[position + 1:]
        return Batch(pages=pages, active_index=self.active_index)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.pages):
            raise IndexOutOfRangeError(index, len(self.pages))
