"""
Custom exceptions for Event Handler.
"""

from typing import Any, Iterable, Optional


class EventHandlerError(Exception):
    """Base exception for all Event Handler errors."""

    pass


class EventNotRegisteredError(EventHandlerError):
    """
    Raised when an operation references an event that is not registered.

    Attributes:
        event_name: Name of the missing event
        registered_events: Events registered at the time of the error, when
            the raising operation reports them
        partial_result: Results collected before the failure, when raised
            from a dispatch
    """

    def __init__(
        self,
        message: str,
        event_name: Optional[str] = None,
        registered_events: Optional[Iterable[str]] = None,
        partial_result: Optional[Any] = None,
    ):
        super().__init__(message)
        self.event_name = event_name
        self.registered_events = tuple(registered_events or ())
        self.partial_result = partial_result
