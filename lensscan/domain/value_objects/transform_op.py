"""
TransformOp value object

Describes one geometric edit applied to a page's original image.
Use the factory methods rather than the constructor.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lensscan.domain.exceptions import DomainValidationError

from .crop_region import CropRegion


class TransformKind(str, Enum):
    """Supported geometric operations."""
    ROTATE_90 = "rotate90"
    SCALE = "scale"
    CROP = "crop"


@dataclass(frozen=True)
class TransformOp:
    """
    Immutable transform description.

    Business rules:
    - scale requires a finite factor > 0
    - crop requires a region
    """
    kind: TransformKind
    factor: Optional[float] = None
    region: Optional[CropRegion] = None

    def __post_init__(self):
        if not isinstance(self.kind, TransformKind):
            try:
                object.__setattr__(self, "kind", TransformKind(self.kind))
            except ValueError as exc:
                raise DomainValidationError(f"Unknown transform: {self.kind!r}") from exc

        if self.kind is TransformKind.SCALE:
            factor = self.factor
            if isinstance(factor, bool) or not isinstance(factor, (int, float)):
                raise DomainValidationError("Scale factor must be a number")
            if not math.isfinite(factor) or factor <= 0:
                raise DomainValidationError(f"Scale factor must be > 0, got {factor}")
            object.__setattr__(self, "factor", float(factor))
        elif self.kind is TransformKind.CROP and self.region is None:
            raise DomainValidationError("Crop transform requires a region")

    @classmethod
    def rotate90(cls) -> TransformOp:
        """Rotate 90 degrees clockwise."""
        return cls(kind=TransformKind.ROTATE_90)

    @classmethod
    def scale(cls, factor: float) -> TransformOp:
        """Multiply width and height by ``factor``."""
        return cls(kind=TransformKind.SCALE, factor=factor)

    @classmethod
    def crop(cls, region: CropRegion) -> TransformOp:
        """Keep only ``region`` of the source image."""
        return cls(kind=TransformKind.CROP, region=region)

    def describe(self) -> str:
        if self.kind is TransformKind.SCALE:
            return f"scale({self.factor:g})"
        if self.kind is TransformKind.CROP and self.region is not None:
            r = self.region
            return f"crop({r.x},{r.y},{r.width}x{r.height})"
        return self.kind.value
