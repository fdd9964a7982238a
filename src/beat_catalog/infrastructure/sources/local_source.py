"""Bundled JSON file source."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Union

from ...domain.result import (
    MalformedPayloadError,
    Result,
    SourceError,
    SourceUnavailableError,
    failure,
    success,
)
from .base import CatalogSource

logger = logging.getLogger(__name__)


class LocalFileSource(CatalogSource):
    """Reads the catalog from a JSON file shipped alongside the storefront."""

    name = "local"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def fetch(self) -> Result[Any, SourceError]:
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as e:
            return failure(SourceUnavailableError(f"Cannot read {self.path}: {e}", source=self.name))

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            return failure(MalformedPayloadError(f"Invalid JSON in {self.path}: {e}", source=self.name))

        logger.debug("Read %d bytes from %s", len(text), self.path)
        return success(payload)
