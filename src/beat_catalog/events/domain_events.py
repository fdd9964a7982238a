"""
Domain Events - Specific event implementations.

Events announced by a browsing session.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .event_bus import DomainEvent


@dataclass(kw_only=True)
class CatalogLoaded(DomainEvent):
    """Event fired when a catalog load succeeds."""
    source: str
    beat_count: int

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "beat_count": self.beat_count,
        }


@dataclass(kw_only=True)
class CatalogLoadFailed(DomainEvent):
    """Event fired when every catalog source failed."""
    message: str
    failed_sources: List[str] = field(default_factory=list)

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "failed_sources": self.failed_sources,
        }


@dataclass(kw_only=True)
class TelemetryRecorded(DomainEvent):
    """Event carrying an analytics event name and its properties."""
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    beat_id: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "properties": self.properties,
            "beat_id": self.beat_id,
        }
