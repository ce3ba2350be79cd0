"""
Smeaglebus
----------

Tiny synchronous, priority-ordered event bus for Python.

Features:

- Listeners keyed on the event's exact class (or an explicit category tag).
- `priority` per listener (higher runs first, default 5); ties keep registration order.
- Cancelable events: once a listener cancels, lower-priority listeners are skipped.
- Fluent builder: `listen(FooEvent).priority(10).subscribe(handler)`.
- Decorator-based API with `@receiver(FooEvent)`.
- Thread-safe registration; posting iterates an immutable snapshot.
- Optional **EventBus** class for isolated buses (tests, plugins, etc.).
"""

from .cancelable import Cancelable, CancelableEvent
from .core import (
    clear,
    get_bus,
    list_receivers,
    listen,
    listeners,
    off,
    on,
    post,
    receiver,
    subscribe,
)
from .event_bus import DEFAULT_PRIORITY, EventBus, ListenerBuilder, ListenerEntry

__all__ = [
    "receiver",
    "post",
    "subscribe",
    "on",
    "listen",
    "off",
    "clear",
    "listeners",
    "list_receivers",
    "get_bus",
    "EventBus",
    "ListenerBuilder",
    "ListenerEntry",
    "Cancelable",
    "CancelableEvent",
    "DEFAULT_PRIORITY",
]
