"""API v1 routers package."""

from . import exports, history, pages

__all__ = [
    "exports",
    "history",
    "pages",
]
