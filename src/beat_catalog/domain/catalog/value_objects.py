"""
Catalog value objects.

Immutable values describing how the catalog is being looked at: the
active genre filter, the normalized search text, and small formatting
helpers shared by the domain and the projection layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

# Sentinel genre filter that keeps every beat.
ALL_GENRES = "all"


def normalize_query(text: str | None) -> str:
    """Normalize raw search input for matching."""
    if not text:
        return ""
    return text.lower()


def normalize_genre(genre: str | None) -> str:
    """Normalize a genre filter value, mapping empty input to the sentinel."""
    if not genre or not genre.strip():
        return ALL_GENRES
    genre = genre.strip()
    if genre.lower() == ALL_GENRES:
        return ALL_GENRES
    return genre


def format_duration(seconds: Union[int, float]) -> str:
    """Format a duration in seconds as M:SS."""
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return "0:00"
    minutes = int(seconds // 60)
    remaining = int(seconds % 60)
    return f"{minutes}:{remaining:02d}"


@dataclass(frozen=True, slots=True)
class SearchCriteria:
    """The genre filter and search query currently applied to the catalog."""

    genre_filter: str = ALL_GENRES
    search_query: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "genre_filter", normalize_genre(self.genre_filter))
        object.__setattr__(self, "search_query", normalize_query(self.search_query))

    @property
    def is_unfiltered(self) -> bool:
        """True when neither a genre nor a search narrows the catalog."""
        return self.genre_filter == ALL_GENRES and not self.search_query

    def with_genre(self, genre: str) -> SearchCriteria:
        return SearchCriteria(genre_filter=genre, search_query=self.search_query)

    def with_query(self, query: str) -> SearchCriteria:
        return SearchCriteria(genre_filter=self.genre_filter, search_query=query)
