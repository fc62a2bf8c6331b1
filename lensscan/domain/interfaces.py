"""Abstract collaborators the domain services depend on."""

from abc import ABC, abstractmethod

from lensscan.domain.entities.export_artifact import ExportArtifact
from lensscan.domain.value_objects.filter_mode import FilterMode
from lensscan.domain.value_objects.image_data import ImageData
from lensscan.domain.value_objects.processing_result import ProcessingResult
from lensscan.domain.value_objects.transform_op import TransformOp


class ImageTransformer(ABC):
    """Pure geometric edits on encoded images."""

    @abstractmethod
    def transform(self, image: ImageData, op: TransformOp) -> ImageData:
        """Return a new image with ``op`` applied; the input is left untouched."""


class ProcessingClient(ABC):
    """Remote filter/OCR service, one image per call."""

    @abstractmethod
    async def process(self, image: ImageData, filter_mode: FilterMode | str) -> ProcessingResult:
        """Return the filtered image and extracted text for ``image``."""


class DocumentWriter(ABC):
    """Renders an export artifact into a single document file."""

    media_type: str = "application/pdf"

    @abstractmethod
    def write(self, artifact: ExportArtifact) -> bytes:
        """Return the encoded document for ``artifact``."""
