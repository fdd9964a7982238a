"""Terminal user interface."""

from .catalog_renderer import RichCatalogRenderer

__all__ = ["RichCatalogRenderer"]
