"""HTTP client for the remote filter/OCR service."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

import httpx

from lensscan.config import get_settings
from lensscan.domain.exceptions import DecodeError, RemoteRejectedError, RemoteUnavailableError
from lensscan.domain.interfaces import ProcessingClient
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult

from .response_parser import ProcessingResponseParser

logger = logging.getLogger(__name__)

_MAX_DETAIL_CHARS = 200


class RemoteProcessingClient(ProcessingClient):
    """Posts one image per call; no retries and no caching.

    Failures map onto the domain taxonomy:
    - transport errors, timeouts and other request failures -> RemoteUnavailableError
    - non-2xx responses or a non-success status -> RemoteRejectedError
    - undecodable bodies, or bodies that are not an image/text pair -> DecodeError
    """

    def __init__(
        self,
        *,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        parser: Optional[ProcessingResponseParser] = None,
    ) -> None:
        settings = get_settings()
        self._endpoint = (endpoint or settings.ensure_endpoint()).strip()
        if not self._endpoint:
            raise RuntimeError("LENSSCAN_PROCESSING_ENDPOINT must be configured before using the processing client")

        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout or settings.processing_timeout_seconds),
            )
            self._owns_client = True
        self._parser = parser or ProcessingResponseParser()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def process(self, image: ImageData, filter_mode: FilterMode | str) -> ProcessingResult:
        mode = FilterMode.parse(filter_mode)
        payload = {"image": image.to_data_url(), "filter_type": mode.value}

        start = time.perf_counter()
        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.DecodingError as exc:
            logger.warning("Processing response from %s could not be decoded: %s", self._endpoint, exc)
            raise DecodeError(f"Processing response body could not be decoded: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("Processing service unreachable at %s: %s", self._endpoint, exc)
            raise RemoteUnavailableError(f"Processing service unreachable: {exc}", cause=exc) from exc
        elapsed_ms = (time.perf_counter() - start) * 1000

        if response.is_error:
            raise RemoteRejectedError(response.text[:_MAX_DETAIL_CHARS] or response.reason_phrase, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError("Processing response is not valid JSON") from exc

        # Validating the scanned image decodes it; keep that off the event loop.
        result = await asyncio.to_thread(self._parser.parse, body, mode)
        logger.info(
            "Processing call (%s) completed in %.0fms; %s chars of text",
            mode.value,
            elapsed_ms,
            len(result.text),
        )
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
