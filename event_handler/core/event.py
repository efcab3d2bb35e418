"""
Process-wide event facade backed by a default Dispatcher.
"""

from typing import Any, Callable, Dict, List
import logging

from .dispatcher import Dispatcher, DispatchResult, HandlerEntry

logger = logging.getLogger(__name__)


class Event:
    """
    Class-level access to a single default Dispatcher.

    Every operation delegates to the dispatcher returned by
    get_dispatcher(). Tests and applications that need isolation can swap
    it with set_dispatcher().

    Example:
        Event.register("order.created")
        Event.listen("order.created", send_receipt, priority=10)
        result = Event.use("order.created", order)
    """

    _dispatcher: Dispatcher = Dispatcher()

    @classmethod
    def get_dispatcher(cls) -> Dispatcher:
        """Get the dispatcher backing the facade."""
        return cls._dispatcher

    @classmethod
    def set_dispatcher(cls, dispatcher: Dispatcher) -> Dispatcher:
        """
        Replace the dispatcher backing the facade.

        Args:
            dispatcher: Dispatcher to use from now on

        Returns:
            The previously used dispatcher
        """
        previous = cls._dispatcher
        cls._dispatcher = dispatcher
        logger.debug(f"Default dispatcher replaced with {dispatcher!r}")
        return previous

    @classmethod
    def register(cls, event_name: str) -> None:
        cls._dispatcher.register(event_name)

    @classmethod
    def listen_global_before(cls, handler: Callable) -> None:
        cls._dispatcher.listen_global_before(handler)

    @classmethod
    def listen_global_after(cls, handler: Callable) -> None:
        cls._dispatcher.listen_global_after(handler)

    @classmethod
    def remove(cls, event_name: str) -> None:
        cls._dispatcher.remove(event_name)

    @classmethod
    def listen(cls, event_name: str, handler: Callable, priority: int = 0) -> None:
        cls._dispatcher.listen(event_name, handler, priority)

    @classmethod
    def remove_listener(cls, event_name: str, handler: Callable) -> None:
        cls._dispatcher.remove_listener(event_name, handler)

    @classmethod
    def once(cls, event_name: str, handler: Callable, priority: int = 0) -> Callable:
        return cls._dispatcher.once(event_name, handler, priority)

    @classmethod
    def use(cls, event_name: str, *args, **kwargs) -> DispatchResult:
        return cls._dispatcher.use(event_name, *args, **kwargs)

    @classmethod
    def register_event(cls, event: Any) -> None:
        cls._dispatcher.register_event(event)

    @classmethod
    def listen_event(cls, event: Any, handler: Callable, priority: int = 0) -> None:
        cls._dispatcher.listen_event(event, handler, priority)

    @classmethod
    def use_event(cls, event: Any) -> DispatchResult:
        return cls._dispatcher.use_event(event)

    @classmethod
    def subscribe(cls, subscriber: Any) -> int:
        return cls._dispatcher.subscribe(subscriber)

    @classmethod
    def unsubscribe(cls, subscriber: Any) -> int:
        return cls._dispatcher.unsubscribe(subscriber)

    @classmethod
    def has_event(cls, event_name: str) -> bool:
        return cls._dispatcher.has_event(event_name)

    @classmethod
    def get_registered_events(cls) -> List[str]:
        return cls._dispatcher.get_registered_events()

    @classmethod
    def get_listeners(cls, event_name: str) -> List[HandlerEntry]:
        return cls._dispatcher.get_listeners(event_name)

    @classmethod
    def get_global_hooks(cls) -> Dict[str, List[Callable]]:
        return cls._dispatcher.get_global_hooks()

    @classmethod
    def event_name_for(cls, event: Any) -> str:
        return Dispatcher.event_name_for(event)

    @classmethod
    def enable_tracing(cls, enabled: bool = True) -> None:
        cls._dispatcher.enable_tracing(enabled)
