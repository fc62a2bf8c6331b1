"""Pytest configuration and shared fixtures for the LensScan test suite.

Provides small synthetic images encoded with OpenCV plus in-process fakes for
the transform engine and the remote processing service, so domain tests run
without network access.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

import cv2
import numpy as np
import pytest

from lensscan.domain.interfaces import ImageTransformer, ProcessingClient
from lensscan.domain.services.page_store import PageStore
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult
from lensscan.domain.value_objects.transform_op import TransformOp


def encode_pixels(pixels: np.ndarray, fmt: str = "png") -> ImageData:
    ok, buffer = cv2.imencode(f".{fmt}", pixels)
    assert ok
    mime_type = "image/png" if fmt == "png" else "image/jpeg"
    return ImageData(content=buffer.tobytes(), mime_type=mime_type)


@pytest.fixture
def make_image():
    """Factory for solid-colour images; ``marker`` paints one pixel (x, y, bgr)."""

    def _make(
        width: int = 40,
        height: int = 20,
        *,
        color: Tuple[int, int, int] = (255, 255, 255),
        fmt: str = "png",
        marker: Optional[Tuple[int, int, Tuple[int, int, int]]] = None,
    ) -> ImageData:
        pixels = np.full((height, width, 3), color, dtype=np.uint8)
        if marker is not None:
            x, y, bgr = marker
            pixels[y, x] = bgr
        return encode_pixels(pixels, fmt)

    return _make


class StubTransformer(ImageTransformer):
    """Records transforms and returns a tagged copy of the input bytes."""

    def __init__(self) -> None:
        self.calls: List[Tuple[ImageData, TransformOp]] = []

    def transform(self, image: ImageData, op: TransformOp) -> ImageData:
        self.calls.append((image, op))
        return ImageData(content=image.content + b"|" + op.kind.value.encode(), mime_type=image.mime_type)


class FakeProcessingClient(ProcessingClient):
    """Processing client fake; set ``gate`` to an asyncio.Event to hold responses."""

    def __init__(self) -> None:
        self.calls: List[Tuple[ImageData, FilterMode]] = []
        self.gate: Optional[asyncio.Event] = None
        self.error: Optional[Exception] = None
        self.text = "hello"
        self.image = ImageData(content=b"filtered", mime_type="image/jpeg")

    async def process(self, image: ImageData, filter_mode: FilterMode | str) -> ProcessingResult:
        mode = FilterMode.parse(filter_mode)
        self.calls.append((image, mode))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return ProcessingResult(filtered_image=self.image, text=self.text, filter_mode=mode)


@pytest.fixture
def stub_transformer() -> StubTransformer:
    return StubTransformer()


@pytest.fixture
def processing_client() -> FakeProcessingClient:
    return FakeProcessingClient()


@pytest.fixture
def page_store(stub_transformer, processing_client) -> PageStore:
    return PageStore(stub_transformer, processing_client)


@pytest.fixture
def raw_image():
    """Factory for opaque (undecoded) image payloads."""

    def _raw(tag: str = "x") -> ImageData:
        return ImageData(content=f"raw-{tag}".encode(), mime_type="image/jpeg")

    return _raw
