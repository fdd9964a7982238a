"""Infrastructure layer: data sources, the catalog loader and media URLs."""

from .loader import CatalogLoader
from .media import MediaResolver

__all__ = ["CatalogLoader", "MediaResolver"]
