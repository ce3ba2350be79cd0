"""
smeaglebus.core
---------------

The process-wide default bus and module-level helpers that delegate to it.
"""

from typing import Any, Callable, Hashable, List, Optional, Tuple

from .event_bus import (
    DEFAULT_PRIORITY,
    EventBus,
    ListenerBuilder,
    ListenerEntry,
    ListenerFunc,
)

# -------------------- module-level default bus --------------------

_default_bus = EventBus()


def get_bus() -> EventBus:
    """
    Return the shared, process-wide EventBus.

    Returns:
        EventBus: The default bus used by the module-level helpers.
    """
    return _default_bus


def _get_bus(bus: Optional[EventBus] = None) -> EventBus:
    return bus or _default_bus


# Registration
def subscribe(
    category: Hashable,
    listener: ListenerFunc,
    priority: int = DEFAULT_PRIORITY,
) -> None:
    """
    Register a listener for a category on the default bus.
    Higher priority listeners run first. For equal priority, registration order is preserved.

    Args:
        category (Hashable): The category to listen for, usually an event class.
        listener (ListenerFunc): Called with each posted event.
        priority (int, optional): The priority of the listener. Defaults to 5.
    """
    _default_bus.subscribe(category, listener, priority)


on = subscribe


def listen(category: Hashable) -> ListenerBuilder:
    """
    Start building a listener for `category` on the default bus.

    Example:
    listen(FooEvent).priority(10).subscribe(lambda e: print(e.message))
    """
    return _default_bus.listen(category)


def off(category: Hashable, listener: Optional[ListenerFunc] = None) -> int:
    """
    Unregister listeners. If `listener` is None, remove all listeners for `category`.
    Returns the number of removed listeners.
    """
    return _default_bus.off(category, listener)


def clear() -> None:
    """Remove all listeners from the default bus."""
    _default_bus.clear()


def listeners(category: Hashable) -> Tuple[ListenerEntry, ...]:
    """Return the priority-ordered listener entries for exactly `category`."""
    return _default_bus.listeners(category)


def list_receivers(category: Hashable) -> List[ListenerFunc]:
    """Return the functions registered for `category`, in dispatch order."""
    return _default_bus.list_receivers(category)


# Decorator
def receiver(
    category: Hashable,
    *,
    priority: int = DEFAULT_PRIORITY,
    bus: Optional[EventBus] = None,
) -> Callable[[ListenerFunc], ListenerFunc]:
    """
    Decorator to register a function as a listener for `category`.
    Listener signature: listener(event).

    Args:
        category (Hashable): The category to listen for.
        priority (int, optional): The priority of the listener. Defaults to 5.
        bus (EventBus, optional): The event bus to register the listener on.
                                  Defaults to None. If None, the default bus is used.

    Returns:
        Callable[[ListenerFunc], ListenerFunc]: The decorator function.

    Example:
    @receiver(FooEvent, priority=10)
    def on_foo(event):
        print("on_foo called with", event)
    """
    return _get_bus(bus).receiver(category, priority=priority)


# Dispatch
def post(event: Any, *, category: Optional[Hashable] = None) -> None:
    """
    Deliver `event` through the default bus, highest priority first.
    Stops early if the event is cancelable and a listener cancels it.
    Exceptions raised by listeners will propagate.

    Example:
    post(FooEvent("hello"))
    """
    _default_bus.post(event, category=category)
