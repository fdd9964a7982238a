"""
Domain layer for the beat catalog.

Pure catalog and playback logic with no I/O; infrastructure and the
session layer build on top of it.
"""

from .result import (
    Result,
    Success,
    Failure,
    success,
    failure,
    CatalogError,
    SourceError,
    SourceUnavailableError,
    MalformedPayloadError,
    NoDataLoadedError,
    NoMatchesError,
    MediaUnavailableError,
    NotFoundError,
)

__all__ = [
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "CatalogError",
    "SourceError",
    "SourceUnavailableError",
    "MalformedPayloadError",
    "NoDataLoadedError",
    "NoMatchesError",
    "MediaUnavailableError",
    "NotFoundError",
]
