"""Catalog data sources, tried in priority order by the loader."""

from .base import CatalogSource, normalize_payload
from .local_source import LocalFileSource
from .remote_source import RemoteMetadataSource
from .sample_source import SAMPLE_BEATS, SampleSource

__all__ = [
    "CatalogSource",
    "LocalFileSource",
    "RemoteMetadataSource",
    "SAMPLE_BEATS",
    "SampleSource",
    "normalize_payload",
]
