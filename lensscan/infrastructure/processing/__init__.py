"""Remote filter/OCR service adapter."""

from .remote_processing_client import RemoteProcessingClient
from .response_parser import ProcessingResponseParser

__all__ = ["RemoteProcessingClient", "ProcessingResponseParser"]
