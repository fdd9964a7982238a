"""Result pattern implementation for error handling.

Catalog operations that can fail in an expected way (a data source being
down, a filter matching nothing, a preview failing to load) return a
Result instead of raising, so callers decide whether to fall through,
render an empty state or surface the failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, TypeVar, cast

T = TypeVar('T')  # Success type
E = TypeVar('E', bound=Exception)  # Error type


class Result(ABC, Generic[T, E]):
    """Abstract base class for Result pattern.

    A Result represents either a successful operation with a value,
    or a failed operation with an error.
    """

    @abstractmethod
    def is_success(self) -> bool:
        """Check if the result is a success."""
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        ...

    @abstractmethod
    def value(self) -> T:
        """Get the success value.

        Raises:
            ValueError: If the result is a failure.
        """
        ...

    @abstractmethod
    def error(self) -> E:
        """Get the error.

        Raises:
            ValueError: If the result is a success.
        """
        ...

    def or_else(self, default: T) -> T:
        """Get the success value or return a default."""
        return self.value() if self.is_success() else default


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """Represents a successful operation with a value."""
    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def value(self) -> T:
        return self._value

    def error(self) -> E:
        raise ValueError("Cannot get error from Success result")


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """Represents a failed operation with an error."""
    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def value(self) -> T:
        raise ValueError(f"Cannot get value from Failure result: {self._error}")

    def error(self) -> E:
        return self._error


# Helper functions for creating Results
def success(value: T) -> Result[T, Any]:
    """Create a Success result."""
    return Success(value)


def failure(error: E) -> Result[Any, E]:
    """Create a Failure result."""
    return Failure(error)


def try_catch(fn: Callable[[], T], error_class: type[E] | tuple[type[E], ...] = Exception) -> Result[T, E]:
    """Try to execute a function and catch exceptions of specific type(s).

    Args:
        fn: Function to execute
        error_class: Exception class(es) to catch

    Returns:
        Success(value) if no exception, Failure(exception) if caught
    """
    try:
        return Success(fn())
    except error_class as e:
        return Failure(cast(E, e))




# Domain-specific errors for the beat catalog
class CatalogError(Exception):
    """Base class for catalog domain errors."""
    pass


class SourceError(CatalogError):
    """Raised when a catalog data source cannot provide a catalog."""

    def __init__(self, message: str, source: str = "unknown"):
        super().__init__(message)
        self.source = source


class SourceUnavailableError(SourceError):
    """Raised when a data source fetch fails or returns a non-success status."""
    pass


class MalformedPayloadError(SourceError):
    """Raised when a data source returns a payload that is not a catalog."""
    pass


class NoDataLoadedError(CatalogError):
    """Raised when every data source failed, or nothing has been loaded yet."""

    def __init__(self, message: str = "No beats loaded", attempts: Dict[str, Exception] | None = None):
        super().__init__(message)
        self.attempts: Dict[str, Exception] = dict(attempts or {})


class NoMatchesError(CatalogError):
    """Raised when the catalog is loaded but the current filters match nothing."""

    def __init__(self, genre_filter: str = "all", search_query: str = ""):
        super().__init__(
            f"No beats match genre={genre_filter!r} search={search_query!r}"
        )
        self.genre_filter = genre_filter
        self.search_query = search_query


class MediaUnavailableError(CatalogError):
    """Raised when a single beat's audio preview cannot be loaded or played."""

    def __init__(self, beat_id: str, reason: str = "Audio preview not available"):
        super().__init__(f"{reason} ({beat_id})")
        self.beat_id = beat_id
        self.reason = reason


class NotFoundError(CatalogError):
    """Raised when a beat id is not part of the loaded catalog."""
    pass
