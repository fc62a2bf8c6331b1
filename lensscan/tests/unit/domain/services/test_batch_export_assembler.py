"""
Unit tests for BatchExportAssembler domain service
"""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from lensscan.domain.entities.batch import Batch
from lensscan.domain.entities.page import Page
from lensscan.domain.exceptions import EmptyBatchError
from lensscan.domain.interfaces import DocumentWriter
from lensscan.domain.services.batch_export_assembler import BatchExportAssembler
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult


def _image(tag: str) -> ImageData:
    return ImageData(content=tag.encode(), mime_type="image/jpeg")


def _processed(page: Page, tag: str, text: str = "") -> Page:
    return page.with_processing_result(ProcessingResult(_image(tag), text, FilterMode.SCAN))


@pytest.fixture
def assembler():
    return BatchExportAssembler()


def test_empty_batch_fails(assembler):
    with pytest.raises(EmptyBatchError):
        assembler.assemble(Batch.empty())


def test_prefers_processed_and_keeps_order(assembler):
    first = _processed(Page.create(_image("orig-0")), "proc-0")
    second = Page.create(_image("orig-1"))
    batch = Batch.empty().append(first).append(second)

    artifact = assembler.assemble(batch)

    assert artifact.pages == (_image("proc-0"), _image("orig-1"))
    assert artifact.page_count == 2
    assert not artifact.is_rendered


def test_text_is_joined_in_page_order(assembler):
    batch = Batch.empty().extend([
        _processed(Page.create(_image("a")), "pa", "first page"),
        Page.create(_image("b")),
        _processed(Page.create(_image("c")), "pc", ""),
        Page.create(_image("d")).with_text("typed note"),
    ])

    artifact = assembler.assemble(batch)

    assert artifact.text == "first page\n\ntyped note"


def test_no_text_yields_none(assembler):
    artifact = assembler.assemble(Batch.empty().append(Page.create(_image("a"))))
    assert artifact.text is None


def test_default_name_uses_epoch_millis():
    assembler = BatchExportAssembler(name_prefix="Scan")
    created_at = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)

    artifact = assembler.assemble(Batch.empty().append(Page.create(_image("a"))), created_at=created_at)

    assert artifact.name == f"Scan_{int(created_at.timestamp() * 1000)}.pdf"
    assert artifact.created_at == created_at


def test_explicit_name_wins(assembler):
    artifact = assembler.assemble(Batch.empty().append(Page.create(_image("a"))), name="  Receipts  ")
    assert artifact.name == "Receipts"


def test_blank_name_falls_back_to_default(assembler):
    artifact = assembler.assemble(Batch.empty().append(Page.create(_image("a"))), name="   ")
    assert artifact.name.startswith("Scan_")


def test_artifact_is_independent_of_later_edits(assembler):
    batch = Batch.empty().append(Page.create(_image("a")))
    artifact = assembler.assemble(batch)

    later = batch.append(Page.create(_image("b"))).remove_at(0)

    assert artifact.pages == (_image("a"),)
    assert len(later) == 1


def test_writer_renders_content():
    writer = Mock(spec=DocumentWriter)
    writer.media_type = "application/pdf"
    writer.write.return_value = b"%PDF-1.7"
    assembler = BatchExportAssembler(writer)

    artifact = assembler.assemble(Batch.empty().append(Page.create(_image("a"))))

    writer.write.assert_called_once()
    rendered_from = writer.write.call_args.args[0]
    assert rendered_from.pages == (_image("a"),)
    assert artifact.content == b"%PDF-1.7"
    assert artifact.media_type == "application/pdf"
    assert artifact.is_rendered
