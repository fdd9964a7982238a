"""
Catalog Context - the beats on offer and how they are narrowed down.

This bounded context is responsible for:
- The Beat entity and its wire format
- Genre and free-text filtering
- The session's filtered view and pagination cursor
"""

from .entities import Beat, parse_beats
from .value_objects import ALL_GENRES, SearchCriteria, format_duration, normalize_query
from .services import apply_filters, available_genres, genre_counts, matches_genre, matches_query
from .store import CatalogStore, DEFAULT_PAGE_SIZE

__all__ = [
    # Entities
    "Beat",
    "parse_beats",
    # Value Objects
    "ALL_GENRES",
    "SearchCriteria",
    "format_duration",
    "normalize_query",
    # Services
    "apply_filters",
    "available_genres",
    "genre_counts",
    "matches_genre",
    "matches_query",
    # Store
    "CatalogStore",
    "DEFAULT_PAGE_SIZE",
]
