"""User event handlers.

Other modules look up local users through ``user:get-by-id`` instead of
importing the user repository.
"""

from typing import Any

from loguru import logger

from gig_api.event_bus.core import EventHandler
from gig_api.events.types import GetUserByIdPayload
from gig_api.repositories import UserRepository


class GetUserByIdHandler(EventHandler[GetUserByIdPayload]):
    """Answer ``user:get-by-id`` with the (optionally projected) user record."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, payload: GetUserByIdPayload | dict[str, Any]) -> dict[str, Any] | None:
        request = GetUserByIdPayload.model_validate(payload)
        user = await self.user_repository.find_by_id(request.id, fields=request.fields)
        if user is None:
            logger.debug(f"user:get-by-id: no user {request.id}")
        return user
