"""
Event System - Domain events and telemetry.

Lets the browsing session announce loads and analytics events to
whoever subscribes, without looking anything up globally.
"""

from .event_bus import EventBus, DomainEvent
from .domain_events import CatalogLoaded, CatalogLoadFailed, TelemetryRecorded
from .telemetry import (
    EventBusTelemetrySink,
    LoggingTelemetrySink,
    NullTelemetrySink,
    RecordingTelemetrySink,
    TelemetrySink,
)

__all__ = [
    # Core event system
    "EventBus",
    "DomainEvent",
    # Domain events
    "CatalogLoaded",
    "CatalogLoadFailed",
    "TelemetryRecorded",
    # Telemetry
    "EventBusTelemetrySink",
    "LoggingTelemetrySink",
    "NullTelemetrySink",
    "RecordingTelemetrySink",
    "TelemetrySink",
]
