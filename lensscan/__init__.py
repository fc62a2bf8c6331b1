"""LensScan: multi-page document scanning backend."""

__version__ = "0.1.0"
