"""Catalog query engine.

Pure functions that narrow the catalog by genre and free-text search.
Nothing here touches session state: the store calls these to recompute
its filtered view.
"""

from typing import Dict, List, Sequence

from .entities import Beat
from .value_objects import ALL_GENRES


def matches_genre(beat: Beat, genre_filter: str) -> bool:
    """Check a beat against a genre filter (case-insensitive equality)."""
    if genre_filter == ALL_GENRES:
        return True
    return beat.genre.lower() == genre_filter.lower()


def matches_query(beat: Beat, query: str) -> bool:
    """Check whether a search query hits the beat.

    A beat matches when the query is a substring of its title, genre,
    any tag, its bpm or its key. An empty query matches everything.
    """
    if not query:
        return True
    query = query.lower()
    return (
        query in beat.title.lower()
        or query in beat.genre.lower()
        or any(query in tag.lower() for tag in beat.tags)
        or query in str(beat.bpm)
        or query in beat.key.lower()
    )


def apply_filters(items: Sequence[Beat], genre_filter: str, search_query: str) -> List[Beat]:
    """Return the beats that pass both the genre and the search step.

    The result is a subsequence of ``items`` in the original order.
    """
    filtered = [beat for beat in items if matches_genre(beat, genre_filter)]
    if search_query:
        filtered = [beat for beat in filtered if matches_query(beat, search_query)]
    return filtered


def available_genres(items: Sequence[Beat]) -> List[str]:
    """Distinct lowercase genres in first-seen order."""
    genres: List[str] = []
    for beat in items:
        genre = beat.genre.lower()
        if genre not in genres:
            genres.append(genre)
    return genres


def genre_counts(items: Sequence[Beat]) -> Dict[str, int]:
    """Number of beats per lowercase genre, in first-seen order."""
    counts: Dict[str, int] = {}
    for beat in items:
        genre = beat.genre.lower()
        counts[genre] = counts.get(genre, 0) + 1
    return counts
