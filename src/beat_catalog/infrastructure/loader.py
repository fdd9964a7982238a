"""
Catalog loader.

Tries each configured source in priority order and keeps the first one
that yields a valid catalog. A failing source is logged and skipped;
only when every source has failed does loading report NoDataLoadedError.
"""

import logging
from typing import Dict, List, Optional, Sequence

import aiohttp

from ..domain.catalog.entities import Beat
from ..domain.catalog.store import CatalogStore
from ..domain.result import (
    MalformedPayloadError,
    NoDataLoadedError,
    Result,
    SourceError,
    SourceUnavailableError,
    failure,
    success,
    try_catch,
)
from ..models.config import Config
from .sources import (
    CatalogSource,
    LocalFileSource,
    RemoteMetadataSource,
    SampleSource,
    normalize_payload,
)

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Resolves the catalog from the first source that succeeds."""

    def __init__(self, sources: Sequence[CatalogSource]):
        if not sources:
            raise ValueError("CatalogLoader needs at least one source")
        self.sources: List[CatalogSource] = list(sources)
        self.last_source: Optional[str] = None

    @classmethod
    def from_config(
        cls, config: Config, session: Optional[aiohttp.ClientSession] = None
    ) -> "CatalogLoader":
        """Local bundled file, then the bucket, then the built-in samples."""
        return cls([
            LocalFileSource(config.catalog.local_data_path),
            RemoteMetadataSource.from_config(config.remote, session=session),
            SampleSource(),
        ])

    async def load(self) -> Result[List[Beat], NoDataLoadedError]:
        """Load the catalog from the first working source."""
        attempts: Dict[str, Exception] = {}
        self.last_source = None

        for source in self.sources:
            result = await self._try_source(source)
            if result.is_success():
                beats = result.value()
                self.last_source = source.name
                logger.info("Loaded %d beats from %s source", len(beats), source.name)
                return success(beats)

            error = result.error()
            attempts[source.name] = error
            logger.warning("Catalog source %s failed: %s", source.name, error)

        logger.error("All %d catalog sources failed", len(self.sources))
        return failure(NoDataLoadedError(
            "Failed to load beats. Please try again later.", attempts=attempts
        ))

    async def load_into(self, store: CatalogStore) -> Result[List[Beat], NoDataLoadedError]:
        """Load and, on success, replace the store's catalog."""
        result = await self.load()
        if result.is_success():
            store.replace_all(result.value())
        return result

    async def _try_source(self, source: CatalogSource) -> Result[List[Beat], SourceError]:
        logger.debug("Trying catalog source %s", source.name)
        try:
            fetched = await source.fetch()
        except Exception as e:
            logger.debug("Catalog source %s raised", source.name, exc_info=True)
            return failure(SourceUnavailableError(f"{source.name} raised {e!r}", source=source.name))

        if fetched.is_failure():
            return fetched

        return try_catch(
            lambda: normalize_payload(fetched.value(), source=source.name),
            MalformedPayloadError,
        )
