"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .image_data import ImageData, sniff_mime_type
from .filter_mode import FilterMode
from .crop_region import CropRegion
from .transform_op import TransformKind, TransformOp
from .processing_result import ProcessingResult

__all__ = [
    'ImageData',
    'sniff_mime_type',
    'FilterMode',
    'CropRegion',
    'TransformKind',
    'TransformOp',
    'ProcessingResult',
]
