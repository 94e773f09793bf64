"""Publish/subscribe notifications between the app shell and the curve view."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List
from threading import Lock
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Notifications the curve view reacts to."""

    STATION_CHANGED = auto()       # Data source switched; caches are stale
    PREDICTIONS_UPDATED = auto()   # Prediction list replaced wholesale
    SCRUB_RESET = auto()           # External request to return to real now


@dataclass
class Event:
    """Event container with metadata."""

    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = ""


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe event system with queued and immediate delivery."""

    def __init__(self) -> None:
        self._handlers: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._pending_events: List[Event] = []
        self._lock = Lock()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        with self._lock:
            if handler not in self._handlers[event_type]:
                self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe a handler from an event type."""
        with self._lock:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

    def publish(self, event: Event) -> None:
        """Publish an event (queued for next flush)."""
        with self._lock:
            self._pending_events.append(event)

    def publish_immediate(self, event: Event) -> None:
        """Publish and immediately dispatch an event."""
        self._dispatch_event(event)

    def flush(self) -> int:
        """Process all pending events. Returns number of events processed."""
        with self._lock:
            events = self._pending_events
            self._pending_events = []

        for event in events:
            self._dispatch_event(event)

        return len(events)

    def _dispatch_event(self, event: Event) -> None:
        """Dispatch a single event to all handlers."""
        with self._lock:
            handlers = list(self._handlers[event.type])

        # Call handlers outside lock to prevent deadlocks
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

    def clear_pending(self) -> None:
        """Clear all pending events."""
        with self._lock:
            self._pending_events.clear()

    @property
    def pending_count(self) -> int:
        """Number of pending events."""
        with self._lock:
            return len(self._pending_events)
