"""Base class and payload normalization for catalog data sources."""

from abc import ABC, abstractmethod
from typing import Any, List

from ...domain.catalog.entities import Beat, parse_beats
from ...domain.result import MalformedPayloadError, Result, SourceError

# Object fields that may wrap the beat list.
WRAPPER_FIELDS = ("beats", "items")


class CatalogSource(ABC):
    """A place the catalog can be read from."""

    name: str = "source"

    @abstractmethod
    async def fetch(self) -> Result[Any, SourceError]:
        """Fetch the raw JSON payload.

        Returns Failure(SourceUnavailableError) when the source cannot be
        reached and Failure(MalformedPayloadError) when it answers with
        something that is not JSON.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


def normalize_payload(payload: Any, source: str = "unknown") -> List[Beat]:
    """Extract beats from a bare list or an object wrapping the list.

    Raises:
        MalformedPayloadError: If the payload has neither shape or a record is invalid.
    """
    records = payload
    if isinstance(payload, dict):
        for key in WRAPPER_FIELDS:
            if key in payload:
                records = payload[key]
                break
        else:
            raise MalformedPayloadError(
                f"Payload object has none of the fields {', '.join(WRAPPER_FIELDS)}",
                source=source,
            )

    if not isinstance(records, list):
        raise MalformedPayloadError(
            f"Expected a list of beats, got {type(records).__name__}", source=source
        )
    return parse_beats(records, source=source)
