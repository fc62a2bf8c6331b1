"""Parse processing-service payloads into ``ProcessingResult`` values."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Tuple

from lensscan.domain.exceptions import DecodeError, RemoteRejectedError
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult
from lensscan.infrastructure.imaging.image_codec import image_dimensions

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "success"

ImageValidator = Callable[[ImageData], Tuple[int, int]]


class ProcessingResponseParser:
    """Validates the ``{status, scanned_image, text}`` response contract."""

    def __init__(self, image_validator: Optional[ImageValidator] = image_dimensions) -> None:
        self._validate_image = image_validator

    def parse(self, payload: Any, filter_mode: FilterMode) -> ProcessingResult:
        if not isinstance(payload, Mapping):
            raise DecodeError("Processing response is not a JSON object")

        status = payload.get("status")
        if status != SUCCESS_STATUS:
            detail = payload.get("message") or payload.get("error") or f"status={status!r}"
            raise RemoteRejectedError(str(detail))

        raw_image = payload.get("scanned_image") or payload.get("scannedImage")
        if not isinstance(raw_image, str) or not raw_image.strip():
            raise DecodeError("Processing response has no scanned image")

        text = payload.get("text")
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise DecodeError(f"Processing response text must be a string, got {type(text).__name__}")

        try:
            image = ImageData.from_data_url(raw_image)
        except ValueError as exc:
            raise DecodeError(f"Scanned image is not valid image data: {exc}") from exc

        if self._validate_image is not None:
            width, height = self._validate_image(image)
            logger.debug("Decoded scanned image %sx%s (%s)", width, height, image.mime_type)

        return ProcessingResult(filtered_image=image, text=text, filter_mode=filter_mode)
