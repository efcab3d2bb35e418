"""
Event Handler - an in-process, synchronous event dispatcher for Python.

Event Handler lets you register named events, attach prioritized handlers
to them and dispatch them with arbitrary arguments, collecting every value
the handlers return.

Features:
- Explicit event registration
- Priority-based handler execution (stable on ties)
- One-shot handlers
- Global before/after hooks run on every dispatch
- Events keyed by object type
- Decorated subscriber objects
- Dispatch tracing

Example:
    from event_handler import Dispatcher

    dispatcher = Dispatcher()
    dispatcher.register('order.created')
    dispatcher.listen('order.created', lambda order: f"receipt for {order}", priority=10)
    dispatcher.listen_global_before(lambda event, *args: f"before {event}")

    result = dispatcher.use('order.created', 42)
    result.event_results        # ['receipt for 42']
    result.before_hook_results  # ['before order.created']
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .core import (
    Dispatcher,
    DispatchResult,
    HandlerEntry,
    Event,
    EventHandlerError,
    EventNotRegisteredError,
)
from .utils import listens_to

__all__ = [
    "Dispatcher",
    "DispatchResult",
    "HandlerEntry",
    "Event",
    "listens_to",
    "EventHandlerError",
    "EventNotRegisteredError",
]
