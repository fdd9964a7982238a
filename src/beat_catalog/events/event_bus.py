"""
Event Bus - Event-driven communication system.

This module provides a lightweight event bus for domain events,
so the session can announce what happened (a catalog loaded, a download
tracked) without knowing who listens.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
from uuid import uuid4
import weakref

logger = logging.getLogger(__name__)


T = TypeVar('T', bound='DomainEvent')


@dataclass(kw_only=True)
class DomainEvent:
    """Base class for all domain events."""
    event_id: str = field(default_factory=lambda: f"evt_{uuid4().hex}")
    timestamp: datetime = field(default_factory=datetime.now)
    aggregate_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.__class__.__name__,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "aggregate_id": self.aggregate_id,
            "metadata": self.metadata,
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        """Get event-specific data for serialization."""
        return {}


class EventBus:
    """
    Central event bus for publishing and subscribing to domain events.

    Handlers may be plain callables or coroutine functions. A failing
    handler is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[weakref.ref]] = {}

    def subscribe(
        self,
        event_type: Type[T],
        handler: Callable[[T], Any]
    ) -> None:
        """
        Subscribe to events of a specific type.

        The bus holds handlers weakly; keep a reference for as long as
        the subscription should live.
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        if hasattr(handler, '__self__'):
            ref = weakref.WeakMethod(handler)
        else:
            ref = weakref.ref(handler)

        self._handlers[event_type].append(ref)

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers of its type and parent types."""
        handlers = []
        for event_type in type(event).__mro__:
            if isinstance(event_type, type) and issubclass(event_type, DomainEvent) \
                    and event_type in self._handlers:
                handlers.extend(ref() for ref in self._handlers[event_type] if ref() is not None)

        if not handlers:
            return

        await asyncio.gather(*(self._safe_handle(handler, event) for handler in handlers))

    async def _safe_handle(self, handler: Callable, event: DomainEvent) -> None:
        """Run one handler, logging instead of propagating its errors."""
        try:
            result = handler(event)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception("Error in event handler %r for %s", handler, type(event).__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
