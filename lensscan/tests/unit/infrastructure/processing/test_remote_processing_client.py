"""
Unit tests for RemoteProcessingClient using httpx.MockTransport
"""
import asyncio
import json
import threading

import httpx
import pytest

from lensscan.domain.exceptions import (
    DecodeError,
    RemoteRejectedError,
    RemoteUnavailableError,
    UnsupportedFilterError,
)
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.infrastructure.processing import ProcessingResponseParser, RemoteProcessingClient

ENDPOINT = "https://processing.test/process"


def _client(handler) -> RemoteProcessingClient:
    transport = httpx.MockTransport(handler)
    return RemoteProcessingClient(
        endpoint=ENDPOINT,
        client=httpx.AsyncClient(transport=transport),
    )


def _process(client: RemoteProcessingClient, image, mode="scan"):
    return asyncio.run(client.process(image, mode))


def test_posts_data_url_and_filter_type(make_image):
    image = make_image(10, 10)
    filtered = make_image(8, 8, color=(0, 0, 0))
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"status": "success", "scanned_image": filtered.to_data_url(), "text": "Invoice 42"},
        )

    result = _process(_client(handler), image, "blackAndWhite")

    assert seen["method"] == "POST"
    assert seen["url"] == ENDPOINT
    assert seen["body"] == {"image": image.to_data_url(), "filter_type": "bw"}
    assert result.filtered_image == filtered
    assert result.text == "Invoice 42"
    assert result.filter_mode is FilterMode.BLACK_AND_WHITE


def test_unsupported_filter_is_rejected_before_request(make_image):
    def handler(request):
        pytest.fail("no request expected")

    with pytest.raises(UnsupportedFilterError):
        _process(_client(handler), make_image(), "sepia")


def test_transport_error_is_unavailable(make_image):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteUnavailableError) as exc_info:
        _process(_client(handler), make_image())
    assert isinstance(exc_info.value.cause, httpx.ConnectError)


def test_timeout_is_unavailable(make_image):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RemoteUnavailableError):
        _process(_client(handler), make_image())


def test_http_error_is_rejected(make_image):
    def handler(request):
        return httpx.Response(500, text="internal error")

    with pytest.raises(RemoteRejectedError) as exc_info:
        _process(_client(handler), make_image())
    assert exc_info.value.status_code == 500
    assert "internal error" in str(exc_info.value)


def test_error_status_in_body_is_rejected(make_image):
    def handler(request):
        return httpx.Response(200, json={"status": "error", "message": "no document found"})

    with pytest.raises(RemoteRejectedError, match="no document found"):
        _process(_client(handler), make_image())


def test_non_json_body_is_decode_error(make_image):
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(DecodeError):
        _process(_client(handler), make_image())


def test_corrupt_content_encoding_is_decode_error(make_image):
    def handler(request):
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

    with pytest.raises(DecodeError, match="could not be decoded"):
        _process(_client(handler), make_image())


def test_redirect_loop_is_unavailable(make_image):
    def handler(request):
        return httpx.Response(302, headers={"location": ENDPOINT})

    client = RemoteProcessingClient(
        endpoint=ENDPOINT,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True, max_redirects=2),
    )
    with pytest.raises(RemoteUnavailableError) as exc_info:
        _process(client, make_image())
    assert isinstance(exc_info.value.cause, httpx.TooManyRedirects)


def test_response_parsing_runs_off_the_event_loop_thread(make_image):
    loop_threads = []
    parse_threads = []

    class _RecordingParser(ProcessingResponseParser):
        def parse(self, payload, filter_mode):
            parse_threads.append(threading.get_ident())
            return super().parse(payload, filter_mode)

    def handler(request):
        loop_threads.append(threading.get_ident())
        return httpx.Response(200, json={"status": "success", "scanned_image": make_image().to_data_url()})

    client = RemoteProcessingClient(
        endpoint=ENDPOINT,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        parser=_RecordingParser(),
    )
    result = _process(client, make_image())

    assert result.filtered_image == make_image()
    assert len(parse_threads) == 1
    assert parse_threads[0] != loop_threads[0]


def test_injected_parser_is_used(make_image):
    image = make_image()

    def handler(request):
        return httpx.Response(200, json={"status": "success", "scanned_image": "aGVsbG8="})

    client = RemoteProcessingClient(
        endpoint=ENDPOINT,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        parser=ProcessingResponseParser(image_validator=None),
    )
    result = _process(client, image)

    assert result.filtered_image.content == b"hello"
    assert result.text == ""


def test_aclose_leaves_injected_client_open():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
    client = RemoteProcessingClient(endpoint=ENDPOINT, client=http_client)

    asyncio.run(client.aclose())

    assert not http_client.is_closed
