"""Read models projected from session state for renderers."""

from .projector import (
    BeatCard,
    CatalogRenderer,
    CatalogView,
    ViewStatus,
    project_card,
    project_view,
)

__all__ = [
    "BeatCard",
    "CatalogRenderer",
    "CatalogView",
    "ViewStatus",
    "project_card",
    "project_view",
]
