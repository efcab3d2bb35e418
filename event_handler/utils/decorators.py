"""
Decorators for Event Handler.
"""

from typing import Callable


def listens_to(event_name: str, priority: int = 0) -> Callable:
    """
    Decorator to mark a function or method as a handler for an event.

    Marked callables are attached when their owner is passed to
    Dispatcher.subscribe(). The decorator can be stacked to listen to
    several events; the function itself is returned unchanged.

    Args:
        event_name: Name of the event to listen for
        priority: Execution priority (higher = earlier). Default: 0

    Example:
        class Mailer:
            @listens_to('order.created', priority=10)
            def send_receipt(self, order):
                ...

            @listens_to('order.cancelled')
            @listens_to('order.refunded')
            def send_notice(self, order):
                ...

        dispatcher.subscribe(Mailer())
    """

    def decorator(func: Callable) -> Callable:
        marks = list(getattr(func, "_listens_to", ()))
        marks.append((event_name, priority))
        func._listens_to = marks
        return func

    return decorator
