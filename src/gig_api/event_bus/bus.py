"""Event Bus Implementation.

This module provides the main EventBus class that handles event registration
and dispatch. Events are keyed by name (``"<domain>:<action>"``), so producer
modules never import the modules that consume their events.

## Dispatch semantics

- Handlers run **sequentially in registration order**, each awaited before the
  next one starts.
- Handler return values are collected; ``None`` results are omitted.
- The first handler that raises aborts the dispatch. Later handlers are not
  invoked and the exception propagates to the caller unchanged.
- Dispatching an event nobody listens to returns an empty list.

## Usage

```python
from gig_api.event_bus import get_event_bus

bus = get_event_bus()

async def get_user_by_id(payload: dict) -> dict | None:
    ...

unregister = bus.register("user:get-by-id", get_user_by_id)
[user] = await bus.dispatch("user:get-by-id", {"id": user_id})
unregister()
```

"""

import inspect
import threading
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from loguru import logger

from .core import HandlerRegistrationError

T_Handler = Callable[..., Any]


class EventBus:
    """In-process, name-keyed event bus.

    Registration is guarded by a lock so it is safe even if it happens while
    requests are already being served. Once startup wiring is complete the bus
    can be frozen, after which further registrations are rejected.

    Example:
        ```python
        bus = EventBus()
        bus.register("app:up", announce_startup)
        bus.freeze()
        await bus.dispatch("app:up")
        ```
    """

    def __init__(self) -> None:
        """Initialize a new EventBus instance with no registrations."""
        self._handlers: dict[str, list[_Registration]] = {}
        self._lock = threading.Lock()
        self._frozen = False
        logger.debug("EventBus initialized")

    def register(self, event_name: str, handler: T_Handler) -> Callable[[], None]:
        """Register a handler for an event name.

        Registering the same handler twice creates two independent entries.

        Args:
            event_name: Name of the event, e.g. ``"user:get-by-id"``
            handler: Sync or async callable receiving the dispatch payload

        Returns:
            A callable that removes exactly this registration when invoked

        Raises:
            HandlerRegistrationError: If the name is empty, the handler is not
                callable or the bus is frozen
        """
        if not event_name:
            raise HandlerRegistrationError("Event name must be a non-empty string")

        if not callable(handler):
            raise HandlerRegistrationError(f"Handler must be callable: {handler}")

        # Each registration gets its own token so duplicates stay independent
        entry = _Registration(handler)

        with self._lock:
            if self._frozen:
                raise HandlerRegistrationError(f"EventBus is frozen, cannot register handler for '{event_name}'")
            self._handlers.setdefault(event_name, []).append(entry)

        logger.debug(f"Registered handler for {event_name}: {handler}")

        def unregister() -> None:
            with self._lock:
                handlers = self._handlers.get(event_name, [])
                for index, registered in enumerate(handlers):
                    if registered is entry:
                        del handlers[index]
                        logger.debug(f"Removed handler for {event_name}: {handler}")
                        break
                if not handlers:
                    self._handlers.pop(event_name, None)

        return unregister

    def on(self, event_name: str, handler: T_Handler) -> Callable[[], None]:
        """Alias for ``register``."""
        return self.register(event_name, handler)

    def freeze(self) -> None:
        """Reject any further registrations."""
        with self._lock:
            self._frozen = True
        logger.debug("EventBus frozen")

    @property
    def frozen(self) -> bool:
        """Whether the bus still accepts registrations."""
        return self._frozen

    def clear_handlers(self, event_name: str | None = None) -> None:
        """Clear handlers for a specific event name or all events."""
        with self._lock:
            if event_name is None:
                self._handlers.clear()
                logger.debug("Cleared all handlers")
            elif event_name in self._handlers:
                del self._handlers[event_name]
                logger.debug(f"Cleared handlers for {event_name}")

    def get_handler_count(self, event_name: str) -> int:
        """Get the number of handlers registered for an event name."""
        return len(self._handlers.get(event_name, []))

    def get_registered_events(self) -> list[str]:
        """Get all event names that have registered handlers.

        Returns:
            List of event names with handlers, in first-registration order
        """
        return list(self._handlers.keys())

    async def dispatch(self, event_name: str, payload: Any = None) -> list[Any]:
        """Dispatch an event and collect handler results.

        Args:
            event_name: Name of the event to dispatch
            payload: Optional value passed to every handler

        Returns:
            Results of the handlers in registration order, without ``None`` results

        Raises:
            Exception: Whatever the first failing handler raised
        """
        # Snapshot so unregistering during dispatch does not skip handlers
        handlers = list(self._handlers.get(event_name, []))

        if not handlers:
            logger.debug(f"No handlers registered for {event_name}")
            return []

        logger.debug(f"Dispatching {event_name} to {len(handlers)} handlers")

        results: list[Any] = []
        for i, entry in enumerate(handlers):
            logger.trace(f"Calling handler {i + 1}/{len(handlers)} for {event_name}: {entry.handler}")
            try:
                result = entry.handler(payload) if payload is not None else _call_without_payload(entry.handler)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                logger.error(f"Error in handler {entry.handler} for event '{event_name}': {e}")
                raise

            if result is not None:
                results.append(result)

        logger.trace(f"Event {event_name} results: {results}")
        return results


class _Registration:
    """Single registration slot on the bus."""

    __slots__ = ("handler",)

    def __init__(self, handler: T_Handler) -> None:
        self.handler = handler


def _call_without_payload(handler: T_Handler) -> Any:
    """Call a handler for a payload-less event.

    Handlers of payload-less events may take no argument at all.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return handler(None)

    if _accepts_positional(signature):
        return handler(None)
    return handler()


def _accepts_positional(signature: inspect.Signature) -> bool:
    return any(p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL) for p in signature.parameters.values())


@lru_cache
def get_event_bus() -> EventBus:
    """Get or create the process-wide EventBus instance.

    Use this only for startup wiring; request-time code receives the bus by
    injection so tests can substitute an isolated instance.

    Returns:
        The EventBus instance
    """
    return EventBus()
