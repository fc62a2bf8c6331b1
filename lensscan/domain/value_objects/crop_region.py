"""
CropRegion value object

Rectangle in source-image pixel coordinates used by the crop transform.
Unlike the normalized bounding boxes used for OCR overlays, crop regions are
absolute and are validated against the image they are applied to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from lensscan.domain.exceptions import InvalidRegionError


@dataclass(frozen=True)
class CropRegion:
    """
    Immutable pixel rectangle.

    - x, y: top-left corner (pixels)
    - width, height: extent (pixels)
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for field_name in ("x", "y", "width", "height"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidRegionError(f"Crop region {field_name} must be a number, got {value!r}")
            if isinstance(value, float):
                if not value.is_integer():
                    raise InvalidRegionError(f"Crop region {field_name} must be a whole pixel count, got {value}")
                object.__setattr__(self, field_name, int(value))

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> CropRegion:
        if not data:
            raise InvalidRegionError("Crop region is required")
        return cls(
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data.get("width", 0),
            height=data.get("height", 0),
        )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def fits_within(self, image_width: int, image_height: int) -> bool:
        return self.x >= 0 and self.y >= 0 and self.right <= image_width and self.bottom <= image_height

    def validate_for(self, image_width: int, image_height: int) -> None:
        """Ensure the region is non-empty and inside an image of the given size.

        Raises:
            InvalidRegionError: if the region is empty or out of bounds
        """
        if self.is_empty:
            raise InvalidRegionError(f"Crop region is empty: {self.width}x{self.height}")
        if not self.fits_within(image_width, image_height):
            raise InvalidRegionError(
                f"Crop region ({self.x}, {self.y}, {self.width}x{self.height}) "
                f"extends outside image bounds {image_width}x{image_height}"
            )
