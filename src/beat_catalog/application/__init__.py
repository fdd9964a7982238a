"""Application layer: the browsing session and its read models."""

from .session import BrowserSession, DownloadLink
from .read_models import BeatCard, CatalogRenderer, CatalogView, ViewStatus

__all__ = [
    "BrowserSession",
    "DownloadLink",
    "BeatCard",
    "CatalogRenderer",
    "CatalogView",
    "ViewStatus",
]
