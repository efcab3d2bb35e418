"""
Event dispatcher for managing event registration, handlers and global hooks.
"""

import threading
import time
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, List, Optional
import logging

from .exceptions import EventNotRegisteredError

logger = logging.getLogger(__name__)

GLOBAL_BEFORE_KEY = "globalBeforeEvent"
GLOBAL_AFTER_KEY = "globalAfterEvent"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Returned by a once handler that already fired; not recorded as a result
_ALREADY_FIRED = object()


@dataclass(frozen=True)
class HandlerEntry:
    """A handler attached to one event, with its execution priority."""

    handler: Callable
    priority: int = 0


@dataclass
class DispatchResult:
    """
    Return values collected by a single dispatch.

    Index ``i`` of ``before_hook_results``/``after_hook_results`` holds the
    value returned by the global hook at position ``i``. ``event_results``
    follows the priority order of the event's handlers.
    """

    before_hook_results: List[Any] = field(default_factory=list)
    event_results: List[Any] = field(default_factory=list)
    after_hook_results: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[Any, Any]:
        """
        Render the mixed keyed/ordered result shape.

        Event results are stored under integer keys, global hook results
        under the ``globalBeforeEvent``/``globalAfterEvent`` buckets. A
        bucket is only present when at least one of its hooks ran.
        """
        results: Dict[Any, Any] = {}
        if self.before_hook_results:
            results[GLOBAL_BEFORE_KEY] = dict(enumerate(self.before_hook_results))
        for index, value in enumerate(self.event_results):
            results[index] = value
        if self.after_hook_results:
            results[GLOBAL_AFTER_KEY] = dict(enumerate(self.after_hook_results))
        return results


def _same_handler(registered: Callable, handler: Callable) -> bool:
    """
    Check whether two callables are the same handler.

    Bound methods are recreated on every attribute access, so they match
    when both their instance and their function are identical.
    """
    if registered is handler:
        return True
    registered_func = getattr(registered, "__func__", None)
    if registered_func is None:
        return False
    return registered_func is getattr(handler, "__func__", None) and getattr(
        registered, "__self__", None
    ) is getattr(handler, "__self__", None)


def _describe(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class Dispatcher:
    """
    Manages event registration and synchronous dispatch.

    Events must be registered before handlers can be attached or the event
    dispatched. Each dispatch runs the global "before" hooks, then the
    event's handlers in priority order, then the global "after" hooks, and
    returns every value they produced.

    Features:
    - Priority-based execution (higher = earlier, ties keep insertion order)
    - One-shot handlers
    - Global before/after hooks
    - Events keyed by object type
    - Decorated subscriber objects
    - Dispatch tracing
    """

    def __init__(self, tracing: bool = False, log_level: Optional[str] = None):
        """
        Initialize the dispatcher.

        Args:
            tracing: Whether to log per-callable execution times
            log_level: Optional level for the package logger (DEBUG, INFO,
                WARNING, ERROR, CRITICAL)

        Raises:
            ValueError: If log_level is not a known level
        """
        self._events: Dict[str, List[HandlerEntry]] = {}
        self._global_before: List[Callable] = []
        self._global_after: List[Callable] = []
        self._lock = threading.RLock()
        self._tracing: bool = tracing

        if log_level:
            level = log_level.upper()
            if level not in LOG_LEVELS:
                raise ValueError(f"Invalid log level. Must be one of {LOG_LEVELS}")
            logging.getLogger(__name__.split(".")[0]).setLevel(level)

    def register(self, event_name: str) -> None:
        """
        Register an event name. Registering an existing event is a no-op.

        Args:
            event_name: Name of the event
        """
        with self._lock:
            if event_name not in self._events:
                self._events[event_name] = []
                logger.debug(f"Registered event '{event_name}'")

    def listen_global_before(self, handler: Callable) -> None:
        """
        Add a hook that runs before the handlers of every dispatched event.

        The hook is called with the event name followed by the dispatch
        arguments.
        """
        with self._lock:
            self._global_before.append(handler)
        logger.debug(f"Added global before hook {_describe(handler)}")

    def listen_global_after(self, handler: Callable) -> None:
        """
        Add a hook that runs after the handlers of every dispatched event.

        The hook is called with the event name followed by the dispatch
        arguments.
        """
        with self._lock:
            self._global_after.append(handler)
        logger.debug(f"Added global after hook {_describe(handler)}")

    def remove(self, event_name: str) -> None:
        """
        Remove an event and all of its handlers.

        Args:
            event_name: Name of the event to remove
        """
        with self._lock:
            if event_name in self._events:
                del self._events[event_name]
                logger.debug(f"Removed event '{event_name}'")

    def listen(self, event_name: str, handler: Callable, priority: int = 0) -> None:
        """
        Attach a handler to a registered event.

        Args:
            event_name: Name of the event
            handler: Function to call when the event is dispatched
            priority: Execution priority (higher = earlier). Default: 0

        Raises:
            EventNotRegisteredError: If the event is not registered
        """
        with self._lock:
            if event_name not in self._events:
                raise EventNotRegisteredError(
                    f"Event [{event_name}] is not registered!", event_name=event_name
                )

            self._events[event_name].append(HandlerEntry(handler, priority))

            # Stable sort, higher priority first
            self._events[event_name].sort(key=lambda e: e.priority, reverse=True)

        logger.debug(
            f"Added listener {_describe(handler)} to '{event_name}' (priority={priority})"
        )

    def remove_listener(self, event_name: str, handler: Callable) -> None:
        """
        Detach every entry of a handler from an event.

        Args:
            event_name: Name of the event
            handler: Handler to detach, matched by identity
        """
        with self._lock:
            entries = self._events.get(event_name)
            if entries is None:
                return

            kept = [entry for entry in entries if not _same_handler(entry.handler, handler)]
            removed = len(entries) - len(kept)
            entries[:] = kept

        if removed:
            logger.debug(f"Removed {removed} listener(s) {_describe(handler)} from '{event_name}'")

    def once(self, event_name: str, handler: Callable, priority: int = 0) -> Callable:
        """
        Attach a handler that detaches itself the first time it runs.

        Args:
            event_name: Name of the event
            handler: Function to call on the next dispatch
            priority: Execution priority (higher = earlier). Default: 0

        Returns:
            The registered wrapper, usable with remove_listener()

        Raises:
            EventNotRegisteredError: If the event is not registered
        """

        fired = False

        @wraps(handler)
        def once_wrapper(*args, **kwargs):
            nonlocal fired
            # A nested or concurrent dispatch may hold it in its snapshot
            with self._lock:
                if fired:
                    return _ALREADY_FIRED
                fired = True
            self.remove_listener(event_name, once_wrapper)
            return handler(*args, **kwargs)

        self.listen(event_name, once_wrapper, priority)
        return once_wrapper

    def use(self, event_name: str, *args, **kwargs) -> DispatchResult:
        """
        Dispatch an event and collect every return value.

        Global before hooks run first, then the event's handlers in
        priority order, then the global after hooks. Hooks receive the
        event name followed by the arguments; handlers receive only the
        arguments.

        If the event is not registered, the before hooks have already run
        when the error is raised and the after hooks are skipped. The
        results gathered so far are attached to the error.

        Args:
            event_name: Name of the event to dispatch
            *args: Positional arguments passed to hooks and handlers
            **kwargs: Keyword arguments passed to hooks and handlers

        Returns:
            DispatchResult with the before hook, handler and after hook
            results

        Raises:
            EventNotRegisteredError: If the event is not registered
        """
        result = DispatchResult()

        with self._lock:
            before_hooks = list(self._global_before)

        if self._tracing:
            logger.debug(f"Dispatching '{event_name}' with {len(before_hooks)} before hook(s)")

        for hook in before_hooks:
            result.before_hook_results.append(
                self._call(hook, event_name, (event_name,) + args, kwargs)
            )

        with self._lock:
            entries = self._events.get(event_name)
            if entries is None:
                raise EventNotRegisteredError(
                    f"Event [{event_name}] is not registered!",
                    event_name=event_name,
                    partial_result=result,
                )
            handlers = [entry.handler for entry in entries]

        for handler in handlers:
            value = self._call(handler, event_name, args, kwargs)
            if value is not _ALREADY_FIRED:
                result.event_results.append(value)

        with self._lock:
            after_hooks = list(self._global_after)

        for hook in after_hooks:
            result.after_hook_results.append(
                self._call(hook, event_name, (event_name,) + args, kwargs)
            )

        if self._tracing:
            logger.debug(
                f"Dispatched '{event_name}' to {len(handlers)} handler(s) "
                f"and {len(after_hooks)} after hook(s)"
            )

        return result

    def _call(self, callback: Callable, event_name: str, args: tuple, kwargs: dict) -> Any:
        if not self._tracing:
            return callback(*args, **kwargs)

        start_time = time.perf_counter()
        value = callback(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        logger.debug(f"'{event_name}': {_describe(callback)} executed in {elapsed:.4f}s")
        return value

    @staticmethod
    def event_name_for(event: Any) -> str:
        """
        Get the event name used for an event object or class.

        Args:
            event: Event instance or event class

        Returns:
            The fully qualified type name, e.g. 'shop.events.OrderCreated'
        """
        event_type = event if isinstance(event, type) else type(event)
        return f"{event_type.__module__}.{event_type.__qualname__}"

    def register_event(self, event: Any) -> None:
        """
        Register an event keyed by the type of an event object.

        Args:
            event: Event instance or event class
        """
        self.register(self.event_name_for(event))

    def listen_event(self, event: Any, handler: Callable, priority: int = 0) -> None:
        """
        Attach a handler to an event keyed by type.

        Args:
            event: Event class (or instance) the handler reacts to
            handler: Function called with the event object
            priority: Execution priority (higher = earlier). Default: 0

        Raises:
            EventNotRegisteredError: If the event type is not registered
        """
        self.listen(self.event_name_for(event), handler, priority)

    def use_event(self, event: Any) -> DispatchResult:
        """
        Dispatch an event object to the handlers of its type.

        The object itself is the only argument handlers receive.

        Raises:
            EventNotRegisteredError: If the event type is not registered
        """
        return self.use(self.event_name_for(event), event)

    def subscribe(self, subscriber: Any) -> int:
        """
        Attach every @listens_to decorated callable of an object.

        Args:
            subscriber: Instance, class or module holding decorated callables

        Returns:
            Number of handlers attached

        Raises:
            EventNotRegisteredError: If a decorated event is not registered
        """
        count = 0
        for callback, event_name, priority in self._collect_listeners(subscriber):
            self.listen(event_name, callback, priority)
            count += 1
        return count

    def unsubscribe(self, subscriber: Any) -> int:
        """
        Detach every @listens_to decorated callable of an object.

        Returns:
            Number of handler entries removed
        """
        count = 0
        for callback, event_name, _priority in self._collect_listeners(subscriber):
            with self._lock:
                before = len(self._events.get(event_name, ()))
                self.remove_listener(event_name, callback)
                count += before - len(self._events.get(event_name, ()))
        return count

    def _collect_listeners(self, subscriber: Any) -> List[tuple]:
        listeners = []
        for attr_name in dir(subscriber):
            if attr_name.startswith("_"):
                continue

            try:
                attr = getattr(subscriber, attr_name)
            except AttributeError:
                continue

            if callable(attr) and getattr(attr, "_listens_to", None):
                for event_name, priority in attr._listens_to:
                    listeners.append((attr, event_name, priority))
        return listeners

    def has_event(self, event_name: str) -> bool:
        """Check whether an event is registered."""
        with self._lock:
            return event_name in self._events

    def __contains__(self, event_name: str) -> bool:
        return self.has_event(event_name)

    def get_registered_events(self) -> List[str]:
        """
        Get all registered event names, in registration order.

        Returns:
            List of event names
        """
        with self._lock:
            return list(self._events.keys())

    def get_listeners(self, event_name: str) -> List[HandlerEntry]:
        """
        Get the handlers attached to an event, highest priority first.

        Args:
            event_name: Name of the event

        Returns:
            Copy of the event's handler entries

        Raises:
            EventNotRegisteredError: If the event is not registered; the
                message lists the registered events
        """
        with self._lock:
            if event_name not in self._events:
                registered = list(self._events.keys())
                raise EventNotRegisteredError(
                    f"Event [{event_name}] is not registered! "
                    f"Available events: {', '.join(registered)}",
                    event_name=event_name,
                    registered_events=registered,
                )
            return list(self._events[event_name])

    def get_global_hooks(self) -> Dict[str, List[Callable]]:
        """
        Get the global hooks.

        Returns:
            Dictionary with 'before' and 'after' hook lists
        """
        with self._lock:
            return {"before": list(self._global_before), "after": list(self._global_after)}

    def enable_tracing(self, enabled: bool = True) -> None:
        """
        Enable or disable dispatch tracing for debugging.

        When enabled, logs the execution time of every hook and handler.

        Args:
            enabled: Whether to enable tracing
        """
        self._tracing = enabled
        logger.debug(f"Dispatch tracing {'enabled' if enabled else 'disabled'}")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} events={len(self._events)}>"
