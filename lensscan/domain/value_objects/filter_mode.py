"""Filter modes understood by the remote processing service."""
from __future__ import annotations

from enum import Enum

from lensscan.domain.exceptions import UnsupportedFilterError


class FilterMode(str, Enum):
    """Remote processing presets."""
    SCAN = "scan"
    ENHANCE = "enhance"
    BLACK_AND_WHITE = "bw"
    PHOTO = "photo"

    @classmethod
    def parse(cls, value: "FilterMode | str") -> FilterMode:
        """Resolve a filter mode from its wire name or a known alias.

        Raises:
            UnsupportedFilterError: for anything outside the supported set
        """
        if isinstance(value, FilterMode):
            return value
        if not isinstance(value, str):
            raise UnsupportedFilterError(value)

        key = value.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            raise UnsupportedFilterError(value) from exc


_ALIASES = {
    "blackandwhite": "bw",
    "black_and_white": "bw",
    "black-and-white": "bw",
    "b&w": "bw",
    "original": "photo",
}
