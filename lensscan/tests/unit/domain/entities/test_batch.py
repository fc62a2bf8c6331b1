"""
Unit tests for Batch entity
"""
import pytest

from lensscan.domain.entities.batch import Batch
from lensscan.domain.entities.page import Page
from lensscan.domain.exceptions import IndexOutOfRangeError
from lensscan.domain.value_objects.image_data import ImageData


def _page(tag: str) -> Page:
    return Page.create(ImageData(content=tag.encode(), mime_type="image/jpeg"), page_id=tag)


def _batch(*tags: str, active: int = 0) -> Batch:
    return Batch(pages=tuple(_page(tag) for tag in tags), active_index=active)


class TestBatchInvariants:
    def test_empty_batch_has_no_active_page(self):
        batch = Batch.empty()
        assert batch.is_empty
        assert len(batch) == 0
        assert batch.active_index is None
        assert batch.active_page is None

    def test_empty_batch_rejects_active_index(self):
        with pytest.raises(ValueError):
            Batch(pages=(), active_index=0)

    def test_non_empty_batch_requires_active_index(self):
        with pytest.raises(ValueError):
            Batch(pages=(_page("a"),), active_index=None)

    def test_active_index_must_be_in_range(self):
        with pytest.raises(ValueError):
            Batch(pages=(_page("a"),), active_index=1)

    def test_list_of_pages_is_frozen(self):
        batch = Batch(pages=[_page("a")], active_index=0)
        assert isinstance(batch.pages, tuple)


class TestBatchLookup:
    def test_page_at(self):
        assert _batch("a", "b").page_at(1).page_id == "b"

    @pytest.mark.parametrize("index", [-1, 2, 99, True, "0", 1.0])
    def test_page_at_rejects_invalid_index(self, index):
        with pytest.raises(IndexOutOfRangeError):
            _batch("a", "b").page_at(index)

    def test_page_at_on_empty_batch(self):
        with pytest.raises(IndexOutOfRangeError, match="empty"):
            Batch.empty().page_at(0)

    def test_find_by_id(self):
        batch = _batch("a", "b")
        assert batch.index_of("b") == 1
        assert batch.find("b").page_id == "b"
        assert batch.find("zzz") is None


class TestBatchMutations:
    def test_append_makes_new_page_active(self):
        batch = Batch.empty().append(_page("a")).append(_page("b"))
        assert [page.page_id for page in batch] == ["a", "b"]
        assert batch.active_index == 1

    def test_append_does_not_change_original_snapshot(self):
        before = _batch("a")
        after = before.append(_page("b"))
        assert len(before) == 1
        assert len(after) == 2

    def test_remove_middle_keeps_order(self):
        batch = _batch("a", "b", "c", active=0).remove_at(1)
        assert [page.page_id for page in batch] == ["a", "c"]
        assert batch.active_index == 0

    def test_remove_clamps_active_index_past_end(self):
        batch = _batch("a", "b", "c", active=2).remove_at(1)
        assert [page.page_id for page in batch] == ["a", "c"]
        assert batch.active_index == 1

    def test_remove_last_page_empties_batch(self):
        batch = _batch("a").remove_at(0)
        assert batch.is_empty
        assert batch.active_index is None

    def test_remove_invalid_index(self):
        with pytest.raises(IndexOutOfRangeError):
            _batch("a").remove_at(3)

    def test_with_active(self):
        assert _batch("a", "b").with_active(1).active_index == 1

    def test_with_active_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError):
            _batch("a", "b").with_active(2)

    def test_select_last(self):
        assert _batch("a", "b", "c").select_last().active_index == 2
        assert Batch.empty().select_last().is_empty

    def test_replace_page_keeps_position(self):
        batch = _batch("a", "b", active=1)
        updated = batch.replace_page(batch.page_at(0).with_text("note"))
        assert updated.page_at(0).extracted_text == "note"
        assert updated.active_index == 1

    def test_replace_unknown_page(self):
        with pytest.raises(KeyError):
            _batch("a").replace_page(_page("zzz"))
