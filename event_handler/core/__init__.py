"""
Core components of Event Handler.
"""

from .dispatcher import Dispatcher, DispatchResult, HandlerEntry
from .event import Event
from .exceptions import EventHandlerError, EventNotRegisteredError

__all__ = [
    "Dispatcher",
    "DispatchResult",
    "HandlerEntry",
    "Event",
    "EventHandlerError",
    "EventNotRegisteredError",
]
