"""Decode/encode helpers between ``ImageData`` and OpenCV pixel arrays."""
from __future__ import annotations

import logging
from typing import Tuple

import cv2
import numpy as np

from lensscan.domain.exceptions import DecodeError
from lensscan.domain.value_objects.image_data import ImageData

logger = logging.getLogger(__name__)

PNG_COMPRESSION = 3


def decode_image(image: ImageData) -> np.ndarray:
    """Decode ``image`` into a BGR (or BGRA for PNG with alpha) array.

    Raises:
        DecodeError: if OpenCV cannot interpret the bytes
    """
    buffer = np.frombuffer(image.content, dtype=np.uint8)
    flags = cv2.IMREAD_UNCHANGED if image.is_png else cv2.IMREAD_COLOR
    pixels = cv2.imdecode(buffer, flags)
    if pixels is None or pixels.size == 0:
        raise DecodeError(f"Unable to decode {image.mime_type} image ({image.size} bytes)")
    return pixels


def encode_image(pixels: np.ndarray, *, as_png: bool, jpeg_quality: int) -> ImageData:
    """Encode pixels as PNG (lossless) or JPEG at ``jpeg_quality``."""
    if as_png:
        ok, encoded = cv2.imencode(".png", pixels, [cv2.IMWRITE_PNG_COMPRESSION, PNG_COMPRESSION])
        mime_type = "image/png"
    else:
        if pixels.ndim == 3 and pixels.shape[2] == 4:
            pixels = cv2.cvtColor(pixels, cv2.COLOR_BGRA2BGR)
        ok, encoded = cv2.imencode(".jpg", pixels, [cv2.IMWRITE_JPEG_QUALITY, int(jpeg_quality)])
        mime_type = "image/jpeg"
    if not ok:
        raise DecodeError(f"OpenCV failed to encode {mime_type} image")
    return ImageData(content=encoded.tobytes(), mime_type=mime_type)


def image_dimensions(image: ImageData) -> Tuple[int, int]:
    """Return ``(width, height)`` in pixels."""
    pixels = decode_image(image)
    height, width = pixels.shape[:2]
    return int(width), int(height)
