"""Core Event Bus Components.

This module contains the fundamental abstractions for the event bus system.
These components are framework-agnostic and can be used in any async Python
application.

## Key Components

- **EventHandler**: Base class for class-based event handlers
- **EventBusError**: Base exception for all event bus related errors
- **HandlerRegistrationError**: Raised when handler registration fails

## Usage Example

```python
from gig_api.event_bus.core import EventHandler

class CreateTalentProfile(EventHandler[CreateTalentPayload]):
    def __init__(self, talent_repository: TalentRepository):
        self.talent_repository = talent_repository

    async def handle(self, payload: CreateTalentPayload) -> dict | None:
        return await self.talent_repository.create_profile(payload.user_id)

bus.register("talent:create-talent", CreateTalentProfile(TalentRepository(store)))
```

"""

from abc import ABC, abstractmethod
from typing import Any


class EventHandler[T_Payload](ABC):
    """Base class for class-based event handlers.

    Instances are callable, so they can be registered on the bus exactly like
    plain functions. The generic parameter documents the payload type.
    """

    @abstractmethod
    async def handle(self, payload: T_Payload) -> Any:
        """Handle the event.

        Args:
            payload: The payload passed to ``dispatch``.

        Returns:
            Optional result. ``None`` results are left out of the dispatch result list.

        Raises:
            Any exception that occurs during handling. Exceptions abort the
            dispatch and propagate to the dispatching caller.
        """

    def __call__(self, payload: T_Payload) -> Any:
        """Make the handler callable."""
        return self.handle(payload)


class EventBusError(Exception):
    """Base exception for all event bus related errors.

    Handler exceptions are never wrapped in this type; they propagate as raised.
    """


class HandlerRegistrationError(EventBusError):
    """Raised when handler registration fails.

    This occurs when:
    - The event name is empty
    - The handler is not callable
    - The bus has been frozen after startup
    """
