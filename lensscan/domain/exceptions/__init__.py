"""Domain exceptions."""
from __future__ import annotations

from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer errors."""
    pass


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: str, *, message: str | None = None):
        final_message = message or f"{entity_type} not found: {entity_id}"
        super().__init__(final_message)
        self.entity_type = entity_type
        self.entity_id = entity_id


class DomainValidationError(DomainException):
    """Exception raised when validation fails at the domain boundary."""

    def __init__(self, message: str):
        super().__init__(message)


class IndexOutOfRangeError(DomainException):
    """Raised when a page index does not address a page in the batch."""

    def __init__(self, index: int, length: int):
        if length:
            message = f"Page index {index} out of range for batch of {length} page(s)"
        else:
            message = f"Page index {index} out of range: batch is empty"
        super().__init__(message)
        self.index = index
        self.length = length


class InvalidRegionError(DomainException):
    """Raised when a crop region is empty or exceeds the source image."""

    def __init__(self, message: str):
        super().__init__(message)


class UnsupportedFilterError(DomainException):
    """Raised for a filter mode outside the supported set."""

    def __init__(self, filter_mode: object):
        super().__init__(f"Unsupported filter mode: {filter_mode!r}")
        self.filter_mode = filter_mode


class RemoteProcessingError(DomainException):
    """Base class for failures of the remote filter/OCR call."""


class RemoteUnavailableError(RemoteProcessingError):
    """Raised when the processing service cannot be reached."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class RemoteRejectedError(RemoteProcessingError):
    """Raised when the processing service answers with a non-success response."""

    def __init__(self, detail: str, *, status_code: Optional[int] = None):
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"Processing service rejected the request: {prefix}{detail}")
        self.detail = detail
        self.status_code = status_code


class DecodeError(RemoteProcessingError):
    """Raised when image bytes or a service response cannot be interpreted."""

    def __init__(self, message: str):
        super().__init__(message)


class AlreadyProcessingError(DomainException):
    """Raised when a processing call is started while another is outstanding."""

    def __init__(self, page_id: str):
        super().__init__(f"A processing call is already in flight (page {page_id})")
        self.page_id = page_id


class EmptyBatchError(DomainException):
    """Raised when exporting a batch without pages."""

    def __init__(self) -> None:
        super().__init__("Cannot export an empty batch")
