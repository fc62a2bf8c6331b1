import pytest

from lensscan.domain.exceptions import DecodeError, RemoteRejectedError
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.infrastructure.processing import ProcessingResponseParser


@pytest.fixture
def parser():
    return ProcessingResponseParser()


def test_success_payload(parser, make_image):
    filtered = make_image(12, 8)
    result = parser.parse(
        {"status": "success", "scanned_image": filtered.to_data_url(), "text": "line one"},
        FilterMode.ENHANCE,
    )
    assert result.filtered_image == filtered
    assert result.text == "line one"
    assert result.filter_mode is FilterMode.ENHANCE


def test_camel_case_image_key(parser, make_image):
    filtered = make_image()
    result = parser.parse({"status": "success", "scannedImage": filtered.to_data_url()}, FilterMode.SCAN)
    assert result.filtered_image == filtered
    assert result.text == ""


def test_null_text_becomes_empty(parser, make_image):
    result = parser.parse(
        {"status": "success", "scanned_image": make_image().to_data_url(), "text": None},
        FilterMode.SCAN,
    )
    assert result.text == ""


@pytest.mark.parametrize("payload", [None, [], "success"])
def test_non_object_payload(parser, payload):
    with pytest.raises(DecodeError):
        parser.parse(payload, FilterMode.SCAN)


def test_failed_status(parser):
    with pytest.raises(RemoteRejectedError, match="quota exceeded"):
        parser.parse({"status": "failed", "error": "quota exceeded"}, FilterMode.SCAN)


def test_missing_status(parser):
    with pytest.raises(RemoteRejectedError):
        parser.parse({"scanned_image": "abc"}, FilterMode.SCAN)


def test_missing_image(parser):
    with pytest.raises(DecodeError, match="no scanned image"):
        parser.parse({"status": "success", "text": "hi"}, FilterMode.SCAN)


def test_non_string_text(parser, make_image):
    with pytest.raises(DecodeError):
        parser.parse(
            {"status": "success", "scanned_image": make_image().to_data_url(), "text": ["a"]},
            FilterMode.SCAN,
        )


def test_invalid_base64(parser):
    with pytest.raises(DecodeError):
        parser.parse({"status": "success", "scanned_image": "data:image/png;base64,@@@"}, FilterMode.SCAN)


def test_undecodable_image(parser):
    # valid base64, but not an image OpenCV can read
    with pytest.raises(DecodeError):
        parser.parse({"status": "success", "scanned_image": "data:image/jpeg;base64,aGVsbG8="}, FilterMode.SCAN)
