"""
ImageData value object

Encoded image bytes tagged with their MIME type. Pages, processing results and
export artifacts all carry images in this form; decoding into pixels happens
only inside the imaging infrastructure.
"""
from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*?);base64,(?P<data>.*)$", re.DOTALL)

# Magic-byte prefixes for formats the capture boundary hands us.
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
)


def sniff_mime_type(content: bytes) -> str | None:
    """Return the MIME type implied by the leading bytes, if recognised."""
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _SIGNATURES:
        if content.startswith(signature):
            return mime_type
    return None


@dataclass(frozen=True)
class ImageData:
    """
    Immutable encoded image.

    Business rules:
    - content is never empty
    - mime_type is an ``image/*`` type
    """

    content: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    def __post_init__(self):
        if isinstance(self.content, (bytearray, memoryview)):
            object.__setattr__(self, "content", bytes(self.content))
        if not isinstance(self.content, bytes):
            raise TypeError("ImageData content must be bytes")
        if not self.content:
            raise ValueError("ImageData content must not be empty")
        mime_type = (self.mime_type or DEFAULT_MIME_TYPE).strip().lower()
        if not mime_type.startswith("image/"):
            raise ValueError(f"Unsupported image MIME type: {self.mime_type}")
        object.__setattr__(self, "mime_type", mime_type)

    def __repr__(self) -> str:
        return f"ImageData(mime_type={self.mime_type!r}, size={len(self.content)})"

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_png(self) -> bool:
        return self.mime_type == "image/png"

    @classmethod
    def from_bytes(cls, content: bytes, mime_type: str | None = None) -> ImageData:
        """Wrap raw bytes, sniffing the MIME type when it is not supplied."""
        if not mime_type or mime_type == "application/octet-stream":
            mime_type = sniff_mime_type(bytes(content or b"")) or DEFAULT_MIME_TYPE
        return cls(content=content, mime_type=mime_type)

    @classmethod
    def from_data_url(cls, value: str) -> ImageData:
        """
        Parse a ``data:image/...;base64,`` URL.

        A bare base64 payload without the ``data:`` prefix is accepted too;
        its MIME type is sniffed from the decoded bytes.

        Raises:
            ValueError: if the value is not valid base64 image data
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Image data URL must be a non-empty string")

        text = value.strip()
        mime_type: str | None = None
        if text.startswith("data:"):
            match = _DATA_URL_PATTERN.match(text)
            if match is None:
                raise ValueError("Malformed data URL (expected base64 encoding)")
            mime_type = match.group("mime")
            text = match.group("data")
        text = "".join(text.split())

        try:
            content = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Image payload is not valid base64") from exc
        if not content:
            raise ValueError("Image payload is empty")
        return cls.from_bytes(content, mime_type)

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
