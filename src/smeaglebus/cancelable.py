"""
Cancelable event capability.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Cancelable(Protocol):
    """
    Protocol for events that listeners can cancel.

    Any object exposing `is_canceled()` and `set_canceled()` qualifies;
    no base class is required.
    """

    def is_canceled(self) -> bool: ...

    def set_canceled(self, canceled: bool) -> None: ...


class CancelableEvent:
    """
    Convenience base class implementing `Cancelable`.

    Once a listener marks the event canceled, lower-priority listeners
    are not called for the current post.
    """

    def __init__(self) -> None:
        self.canceled = False

    def is_canceled(self) -> bool:
        """Return True if the event has been canceled."""
        return self.canceled

    def set_canceled(self, canceled: bool) -> None:
        """
        Set the canceled status of this event.

        Args:
            canceled (bool): True to stop further delivery, False to let it continue.
        """
        self.canceled = bool(canceled)

    def cancel(self) -> None:
        """Shorthand for `set_canceled(True)`."""
        self.set_canceled(True)
