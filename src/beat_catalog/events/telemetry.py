"""Telemetry sinks.

The session reports analytics events (downloads, mostly) to an injected
sink rather than calling an analytics service directly.
"""

import logging
from typing import Any, Dict, List, Protocol, Tuple

from .domain_events import TelemetryRecorded
from .event_bus import EventBus

logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Receives named analytics events."""

    async def track(self, event_name: str, properties: Dict[str, Any]) -> None:
        ...


class NullTelemetrySink:
    """Drops every event."""

    async def track(self, event_name: str, properties: Dict[str, Any]) -> None:
        return None


class LoggingTelemetrySink:
    """Writes events to the log."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    async def track(self, event_name: str, properties: Dict[str, Any]) -> None:
        logger.log(self.level, "Event: %s %s", event_name, properties)


class RecordingTelemetrySink:
    """Keeps events in memory, in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    async def track(self, event_name: str, properties: Dict[str, Any]) -> None:
        self.events.append((event_name, dict(properties)))


class EventBusTelemetrySink:
    """Publishes each event on an event bus as a TelemetryRecorded event."""

    def __init__(self, bus: EventBus):
        self.bus = bus

    async def track(self, event_name: str, properties: Dict[str, Any]) -> None:
        beat_id = properties.get("beat_id")
        await self.bus.publish(TelemetryRecorded(
            name=event_name,
            properties=dict(properties),
            beat_id=str(beat_id) if beat_id is not None else None,
            aggregate_id=str(beat_id) if beat_id is not None else None,
        ))
