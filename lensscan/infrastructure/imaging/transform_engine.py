"""OpenCV implementation of the geometric page transforms."""
from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from lensscan.config import get_settings
from lensscan.domain.exceptions import DomainValidationError
from lensscan.domain.interfaces import ImageTransformer
from lensscan.domain.value_objects.crop_region import CropRegion
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.transform_op import TransformKind, TransformOp

from .image_codec import decode_image, encode_image

logger = logging.getLogger(__name__)


class OpenCVTransformEngine(ImageTransformer):
    """Stateless rotate/scale/crop engine.

    PNG input is re-encoded as PNG; everything else becomes a JPEG at the
    configured quality so repeated edits keep a consistent, high fidelity.
    """

    def __init__(self, *, jpeg_quality: Optional[int] = None) -> None:
        quality = jpeg_quality if jpeg_quality is not None else get_settings().jpeg_quality
        if not 90 <= quality <= 100:
            raise ValueError("jpeg_quality must be between 90 and 100")
        self._jpeg_quality = quality

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def transform(self, image: ImageData, op: TransformOp) -> ImageData:
        pixels = decode_image(image)

        if op.kind is TransformKind.ROTATE_90:
            result = self.rotate90(pixels)
        elif op.kind is TransformKind.SCALE:
            result = self.scale(pixels, op.factor)
        elif op.kind is TransformKind.CROP:
            result = self.crop(pixels, op.region)
        else:  # pragma: no cover - TransformOp validates kind
            raise DomainValidationError(f"Unsupported transform: {op.kind}")

        logger.debug(
            "%s: %sx%s -> %sx%s",
            op.describe(),
            pixels.shape[1],
            pixels.shape[0],
            result.shape[1],
            result.shape[0],
        )
        return encode_image(result, as_png=image.is_png, jpeg_quality=self._jpeg_quality)

    # ------------------------------------------------------------------
    # Pixel operations
    # ------------------------------------------------------------------
    @staticmethod
    def rotate90(pixels: np.ndarray) -> np.ndarray:
        return cv2.rotate(pixels, cv2.ROTATE_90_CLOCKWISE)

    @staticmethod
    def scale(pixels: np.ndarray, factor: Optional[float]) -> np.ndarray:
        if factor is None or factor <= 0:
            raise DomainValidationError(f"Scale factor must be > 0, got {factor}")
        height, width = pixels.shape[:2]
        new_width = max(1, int(round(width * factor)))
        new_height = max(1, int(round(height * factor)))
        interpolation = cv2.INTER_AREA if factor < 1.0 else cv2.INTER_CUBIC
        return cv2.resize(pixels, (new_width, new_height), interpolation=interpolation)

    @staticmethod
    def crop(pixels: np.ndarray, region: Optional[CropRegion]) -> np.ndarray:
        if region is None:
            raise DomainValidationError("Crop transform requires a region")
        height, width = pixels.shape[:2]
        region.validate_for(width, height)
        return np.ascontiguousarray(pixels[region.y:region.bottom, region.x:region.right])
