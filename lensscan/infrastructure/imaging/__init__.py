"""Image decoding and geometric transforms."""

from .image_codec import decode_image, encode_image, image_dimensions
from .transform_engine import OpenCVTransformEngine

__all__ = ["decode_image", "encode_image", "image_dimensions", "OpenCVTransformEngine"]
