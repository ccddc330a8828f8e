"""Event system for the gig API.

Event names and payloads live in ``gig_api.events.types``. Handlers are wired
onto the bus by ``register_event_handlers`` once the service registry is
populated.
"""

from loguru import logger

from gig_api.event_bus import EventBus
from gig_api.events.system_handlers import announce_app_up, announce_registration
from gig_api.events.talent_handlers import CreateTalentHandler, GetTalentByUserIdHandler
from gig_api.events.types import (
    CreateTalentPayload,
    EventName,
    GetTalentByUserIdPayload,
    GetUserByIdPayload,
)
from gig_api.events.user_handlers import GetUserByIdHandler
from gig_api.repositories import TalentRepository, UserRepository
from gig_api.services.registry import get_service_registry

__all__ = [
    "CreateTalentHandler",
    "CreateTalentPayload",
    "EventName",
    "GetTalentByUserIdHandler",
    "GetTalentByUserIdPayload",
    "GetUserByIdHandler",
    "GetUserByIdPayload",
    "register_event_handlers",
]


def register_event_handlers(bus: EventBus) -> None:
    """Register all event handlers on the bus.

    Handlers get their repositories from the service registry, so this must be
    called after the registry has been populated.

    Args:
        bus: Event bus to register handlers on
    """
    logger.debug("Registering event handlers in event bus")
    registry = get_service_registry()

    bus.register(EventName.USER_GET_BY_ID, GetUserByIdHandler(registry.get(UserRepository)))
    bus.register(EventName.TALENT_CREATE, CreateTalentHandler(registry.get(TalentRepository)))
    bus.register(EventName.TALENT_GET_BY_USER_ID, GetTalentByUserIdHandler(registry.get(TalentRepository)))
    bus.register(EventName.APP_UP, announce_app_up)
    bus.register(EventName.REGISTRATION_SUCCESSFUL, announce_registration)

    logger.info(f"Event handlers registered for {len(bus.get_registered_events())} events")
