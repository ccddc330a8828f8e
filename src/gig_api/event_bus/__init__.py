"""Event Bus System for Decoupled Module Communication.

This module provides a framework-agnostic event bus that lets feature modules
call into each other without importing each other. It supports:

- **Name-keyed events**: ``"<domain>:<action>"`` strings, e.g. ``"user:get-by-id"``
- **Many handlers per event**: dispatched in registration order
- **Sequential await**: each handler finishes before the next one starts
- **Result collection**: non-``None`` handler results are returned to the caller
- **Fail fast**: the first handler error aborts the dispatch and propagates
- **Revocable registrations**: ``register`` returns an unregister callable

## Quick Start

```python
from gig_api.event_bus import EventBus

bus = EventBus()

async def create_talent_profile(payload: dict) -> dict:
    return {"user_id": payload["user_id"]}

bus.register("talent:create-talent", create_talent_profile)
[talent] = await bus.dispatch("talent:create-talent", {"user_id": "u1"})
```

For class-based handlers, see `core.py`.
For the dispatch contract and API reference, see `bus.py`.

"""

from .bus import EventBus, get_event_bus
from .core import EventBusError, EventHandler, HandlerRegistrationError

__all__ = [
    "EventBus",
    "EventBusError",
    "EventHandler",
    "HandlerRegistrationError",
    "get_event_bus",
]
