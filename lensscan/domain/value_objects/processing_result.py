"""Result of one remote filter/OCR call."""
from __future__ import annotations

from dataclasses import dataclass

from .filter_mode import FilterMode
from .image_data import ImageData


@dataclass(frozen=True)
class ProcessingResult:
    """Filtered image and extracted text returned by the processing service."""

    filtered_image: ImageData
    text: str
    filter_mode: FilterMode

    def __post_init__(self):
        if self.text is None:
            object.__setattr__(self, "text", "")
