"""
Event bus implementation.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

from .cancelable import Cancelable

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 5

E = TypeVar("E")
ListenerFunc = Callable[[Any], Any]


@dataclass(frozen=True)
class ListenerEntry:
    """A registered (listener, priority) pair. Immutable once created."""

    # Sort key (priority descending, then order ascending)
    sort_index: Tuple[int, int] = field(init=False, repr=False)
    priority: int
    order: int
    func: ListenerFunc = field(compare=False)

    def __post_init__(self) -> None:
        # frozen dataclass, so bypass __setattr__ for the derived field
        object.__setattr__(self, "sort_index", (-self.priority, self.order))

    def call(self, event: Any) -> Any:
        """
        Call the listener with the given event.
        """
        return self.func(event)


_sort_key = attrgetter("sort_index")


class EventBus:
    """
    An isolated event bus.

    Listeners are stored per category as immutable, priority-sorted tuples.
    Registration replaces the tuple under a lock; posting iterates a
    snapshot, so concurrent subscribe and post never see a torn list.
    """

    def __init__(self) -> None:
        """
        Initialize a new EventBus instance.
        """
        self._lock = threading.RLock()
        self._listeners: Dict[Hashable, Tuple[ListenerEntry, ...]] = {}
        self._counter = 0  # registration order

    # -------------------- registration API --------------------
    def subscribe(
        self,
        category: Hashable,
        listener: Callable[[E], Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """
        Register a listener for a category.
        Higher priority listeners run first. For equal priority, registration order is preserved.

        Args:
            category (Hashable): The category to listen for, usually an event class.
            listener (Callable[[E], Any]): Called with each posted event.
            priority (int, optional): The priority of the listener.
                                      Defaults to 5. Higher priority listeners run first.

        Raises:
            ValueError: If `category` is None.
            TypeError: If `listener` is not callable or `priority` is not an int.
        """
        if category is None:
            raise ValueError("category must not be None")
        if not callable(listener):
            raise TypeError("listener must be callable")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise TypeError("priority must be an int")

        with self._lock:
            self._counter += 1
            entry = ListenerEntry(priority=priority, order=self._counter, func=listener)
            current = self._listeners.get(category, ())
            self._listeners[category] = tuple(sorted(current + (entry,), key=_sort_key))
        logger.debug("Subscribed %r to %r with priority %d", listener, category, priority)

    on = subscribe

    def listen(self, category: Hashable) -> "ListenerBuilder":
        """
        Start building a listener for `category`.

        Example:
        bus.listen(FooEvent).priority(10).subscribe(handle_foo)
        """
        return ListenerBuilder(self, category)

    def off(self, category: Hashable, listener: Optional[ListenerFunc] = None) -> int:
        """
        Unregister listeners. If `listener` is None, remove all listeners for `category`.
        Returns the number of removed listeners.

        Args:
            category (Hashable): The category to unregister listeners for.
            listener (Optional[ListenerFunc], optional): The listener to unregister.
                                                       Defaults to None.

        Returns:
            int: The number of removed listeners.
        """
        with self._lock:
            current = self._listeners.get(category, ())
            if not current:
                return 0
            if listener is None:
                del self._listeners[category]
                removed = len(current)
            else:
                kept = tuple(x for x in current if x.func is not listener)
                removed = len(current) - len(kept)
                if kept:
                    self._listeners[category] = kept
                else:
                    del self._listeners[category]
        if removed:
            logger.debug("Removed %d listener(s) from %r", removed, category)
        return removed

    def clear(self) -> None:
        """Remove all listeners from the bus."""
        with self._lock:
            self._listeners.clear()

    def listeners(self, category: Hashable) -> Tuple[ListenerEntry, ...]:
        """Return the priority-ordered listener entries for exactly `category`."""
        with self._lock:
            return self._listeners.get(category, ())

    def list_receivers(self, category: Hashable) -> List[ListenerFunc]:
        """Return the functions registered for `category`, in dispatch order."""
        return [x.func for x in self.listeners(category)]

    # -------------------- decorator --------------------
    def receiver(self, category: Hashable, *, priority: int = DEFAULT_PRIORITY):
        """
        Decorator to register a function as a listener for `category`.

        Args:
            category (Hashable): The category to listen for.
            priority (int, optional): The priority of the listener. Defaults to 5.

        Returns:
            Callable[[ListenerFunc], ListenerFunc]: The decorator function.
        """

        def wrapper(func: ListenerFunc) -> ListenerFunc:
            self.subscribe(category, func, priority)
            return func

        return wrapper

    # -------------------- dispatch --------------------
    def post(self, event: Any, *, category: Optional[Hashable] = None) -> None:
        """
        Deliver `event` to the listeners of its category, highest priority first.

        The category is `type(event)` unless given explicitly; supertypes are
        never considered. If the event is `Cancelable` and a listener cancels
        it, the remaining listeners are skipped.
        Exceptions raised by listeners propagate and abort the post.

        Args:
            event (Any): The event to deliver.
            category (Optional[Hashable], optional): Explicit dispatch key.
                                                     Defaults to the event's class.

        Returns:
            None
        """
        if category is None:
            category = type(event)

        # snapshot is an immutable tuple; callbacks run without the lock held
        listeners = self.listeners(category)
        if not listeners:
            logger.debug("Posted %r with no listeners", category)
            return

        for i, entry in enumerate(listeners):
            entry.call(event)
            if isinstance(event, Cancelable) and event.is_canceled():
                logger.debug(
                    "%r canceled by %r, skipping %d listener(s)",
                    category,
                    entry.func,
                    len(listeners) - i - 1,
                )
                break


class ListenerBuilder(Generic[E]):
    """
    Fluent helper for subscribing a listener with a specific priority.

    Example:
    bus.listen(FooEvent).priority(10).subscribe(lambda e: print(e))
    """

    def __init__(self, bus: EventBus, category: Hashable) -> None:
        self._bus = bus
        self._category = category
        self._priority = DEFAULT_PRIORITY

    def priority(self, priority: int) -> "ListenerBuilder[E]":
        """Set the priority for the listener and return this builder."""
        self._priority = priority
        return self

    def subscribe(self, listener: Callable[[E], Any]) -> None:
        """Subscribe the listener to the bus."""
        self._bus.subscribe(self._category, listener, self._priority)
