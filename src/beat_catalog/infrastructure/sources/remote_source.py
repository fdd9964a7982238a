"""
Remote metadata source - reads the catalog from the storage bucket.

The bucket serves a JSON metadata document next to the audio files.
Network failures and non-200 answers are reported as unavailable so the
loader can move on to the next source.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from ...domain.result import (
    MalformedPayloadError,
    Result,
    SourceError,
    SourceUnavailableError,
    failure,
    success,
)
from ...models.config import RemoteConfig
from .base import CatalogSource

logger = logging.getLogger(__name__)


class RemoteMetadataSource(CatalogSource):
    """Fetches ``beats-metadata.json`` from the bucket's public URL."""

    name = "remote"

    def __init__(
        self,
        url: Optional[str],
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_config(
        cls, remote: RemoteConfig, session: Optional[aiohttp.ClientSession] = None
    ) -> "RemoteMetadataSource":
        return cls(remote.metadata_url, timeout=remote.timeout, session=session)

    async def fetch(self) -> Result[Any, SourceError]:
        if not self.url:
            return failure(SourceUnavailableError("No remote public URL configured", source=self.name))

        try:
            if self._session is not None:
                return await self._get(self._session)

            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                return await self._get(session)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return failure(SourceUnavailableError(f"Error fetching {self.url}: {e!r}", source=self.name))

    async def _get(self, session: aiohttp.ClientSession) -> Result[Any, SourceError]:
        async with session.get(self.url) as response:
            if response.status != 200:
                return failure(SourceUnavailableError(
                    f"{self.url} answered HTTP {response.status}", source=self.name
                ))
            try:
                payload = await response.json(content_type=None)
            except (aiohttp.ContentTypeError, ValueError) as e:
                return failure(MalformedPayloadError(
                    f"Invalid JSON from {self.url}: {e}", source=self.name
                ))

        logger.debug("Fetched metadata from %s", self.url)
        return success(payload)
