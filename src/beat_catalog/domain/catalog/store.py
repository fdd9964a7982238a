"""Catalog store.

Holds the loaded catalog, the filtered view derived from it and the
pagination cursor for one browsing session.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..result import CatalogError, NoDataLoadedError, NoMatchesError, Result, failure, success
from .entities import Beat
from .services import apply_filters
from .value_objects import ALL_GENRES, SearchCriteria

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


class CatalogStore:
    """Session-scoped catalog state with incremental pagination."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self.page_size = page_size
        self._all_items: List[Beat] = []
        self._filtered_items: List[Beat] = []
        self._by_id: Dict[str, Beat] = {}
        self._criteria = SearchCriteria()
        self._page = 1
        self._loaded = False

    @property
    def all_items(self) -> List[Beat]:
        return list(self._all_items)

    @property
    def filtered_items(self) -> List[Beat]:
        return list(self._filtered_items)

    @property
    def page(self) -> int:
        return self._page

    @property
    def criteria(self) -> SearchCriteria:
        return self._criteria

    @property
    def genre_filter(self) -> str:
        return self._criteria.genre_filter

    @property
    def search_query(self) -> str:
        return self._criteria.search_query

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def total_count(self) -> int:
        return len(self._all_items)

    @property
    def filtered_count(self) -> int:
        return len(self._filtered_items)

    @property
    def visible_count(self) -> int:
        return min(self._page * self.page_size, len(self._filtered_items))

    @property
    def has_more(self) -> bool:
        """True while the filtered view extends past the current page."""
        return len(self._filtered_items) > self._page * self.page_size

    def replace_all(self, items: Sequence[Beat]) -> None:
        """Replace the whole catalog and reset the view to its first page."""
        self._all_items = list(items)
        self._by_id = {beat.id: beat for beat in self._all_items}
        self._filtered_items = list(self._all_items)
        self._criteria = SearchCriteria()
        self._page = 1
        self._loaded = True
        logger.debug("Catalog replaced with %d beats", len(self._all_items))

    def get(self, beat_id: str) -> Optional[Beat]:
        """Look up a loaded beat by id."""
        return self._by_id.get(str(beat_id))

    def apply(
        self,
        genre_filter: Optional[str] = None,
        search_query: Optional[str] = None,
        reset_page: bool = False,
    ) -> List[Beat]:
        """Recompute the filtered view.

        Arguments left as ``None`` keep their current value.
        """
        criteria = self._criteria
        if genre_filter is not None:
            criteria = criteria.with_genre(genre_filter)
        if search_query is not None:
            criteria = criteria.with_query(search_query)

        self._criteria = criteria
        self._filtered_items = apply_filters(
            self._all_items, criteria.genre_filter, criteria.search_query
        )
        if reset_page:
            self._page = 1
        logger.debug(
            "Filters applied: genre=%s query=%r -> %d of %d beats",
            criteria.genre_filter, criteria.search_query,
            len(self._filtered_items), len(self._all_items),
        )
        return self.filtered_items

    def visible_slice(self) -> Result[List[Beat], CatalogError]:
        """The first ``page * page_size`` filtered beats.

        An empty view is reported as a failure so callers can tell an
        unloaded (or empty) catalog apart from filters that match nothing.
        """
        if not self._filtered_items:
            if not self._all_items:
                return failure(NoDataLoadedError())
            return failure(NoMatchesError(self.genre_filter, self.search_query))
        return success(self._filtered_items[: self._page * self.page_size])

    def advance_page(self) -> bool:
        """Move to the next page; no-op once everything is visible."""
        if not self.has_more:
            return False
        self._page += 1
        return True

    def reset(self) -> None:
        """Drop the catalog entirely."""
        self._all_items = []
        self._filtered_items = []
        self._by_id = {}
        self._criteria = SearchCriteria()
        self._page = 1
        self._loaded = False

    def is_filtered(self) -> bool:
        return self._criteria.genre_filter != ALL_GENRES or bool(self._criteria.search_query)
