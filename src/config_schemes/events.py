"""Synchronous notification bus connecting the registry to its host."""

import logging
from collections import deque
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from enum import Enum
from typing import Any
from typing import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events."""

    # Inbound: published by the host
    CORE_CONFIGURE = "core.configure"
    ENVIRONMENT_CHANGE = "core.environment.change"
    MODULE_CONFIGURE = "core.module.configure"

    # Outbound: published by the registry
    SCHEMES_INITIALIZED = "config.schemes.initialized"
    ENVIRONMENT_SWITCHED = "config.environment.switched"
    CONFIGURATION_ERROR = "config.error"


@dataclass
class Event:
    """A published event."""

    event_type: EventType
    source: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


class EventBus:
    """Publish/subscribe bus delivering events synchronously.

    Callbacks receive the event payload as keyword arguments. A callback
    that raises is logged and does not stop delivery to other subscribers.

    Args:
        history_size: Number of published events kept for inspection
    """

    def __init__(self, history_size: int = 100):
        self._subscribers: dict[EventType, dict[str, Callable[..., Any]]] = {}
        self._history: deque[Event] = deque(maxlen=history_size)

    def subscribe(self, event_type: EventType, subscriber_id: str, callback: Callable[..., Any]) -> None:
        """Subscribe a callback to an event type, replacing any earlier one with the same id."""
        self._subscribers.setdefault(event_type, {})[subscriber_id] = callback

    def unsubscribe(self, event_type: EventType, subscriber_id: str) -> bool:
        """Unsubscribe from an event type.

        Returns:
            True if removed, False if not subscribed
        """
        subscribers = self._subscribers.get(event_type, {})
        if subscriber_id not in subscribers:
            return False
        del subscribers[subscriber_id]
        return True

    def publish(self, event_type: EventType, source: str, payload: dict[str, Any] | None = None) -> Event:
        """Publish an event to all current subscribers."""
        event = Event(event_type=event_type, source=source, payload=payload or {})
        self._history.append(event)

        for subscriber_id, callback in list(self._subscribers.get(event_type, {}).items()):
            try:
                callback(**event.payload)
            except Exception as e:
                logger.warning(f"Subscriber '{subscriber_id}' failed handling {event_type.value}: {e}")

        return event

    def history(self, event_type: EventType | None = None) -> list[Event]:
        """Get published events, optionally filtered by type."""
        if event_type is None:
            return list(self._history)
        return [event for event in self._history if event.event_type is event_type]
